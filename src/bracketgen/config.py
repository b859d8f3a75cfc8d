"""
Loading of roster and tournament settings from YAML files.
"""
import os
import yaml

from bracketgen.models import Player, TournamentSettings

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DATA_DIR = os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(BASE_DIR, 'data'))

PLAYERS_FILE = os.path.join(DATA_DIR, 'players.yaml')
SETTINGS_FILE = os.path.join(DATA_DIR, 'tournament.yaml')


def load_players(file_path):
    """
    Load a roster. Accepts either a list of player mappings or a mapping
    with a 'players' list:

        players:
          - {id: p1, name: Alice, average: 87.5}
          - {id: p2, name: Bob, average: 80}
    """
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get('players') or []
    if not isinstance(data, list):
        raise ValueError(f"{file_path}: expected a list of players")

    players = []
    seen = set()
    for entry in data:
        if not isinstance(entry, dict) or 'id' not in entry:
            raise ValueError(f"{file_path}: every player needs an 'id', got {entry!r}")
        player = Player.from_dict(entry)
        if player.id in seen:
            raise ValueError(f"{file_path}: duplicate player id '{player.id}'")
        seen.add(player.id)
        players.append(player)
    return players


def load_settings(file_path=None):
    """Load tournament settings; a missing file or missing keys fall back to defaults."""
    if file_path is None or not os.path.exists(file_path):
        return TournamentSettings()

    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: expected a mapping of tournament settings")
    if 'tournament_settings' in data:
        data = data['tournament_settings'] or {}

    try:
        return TournamentSettings.from_dict(data)
    except ValueError as e:
        raise ValueError(f"{file_path}: {e}") from e
