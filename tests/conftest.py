"""
Shared pytest fixtures for bracket generation tests.

Running tests:
    pytest tests/
"""
import pytest
import random
import sys
import os
import yaml

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracketgen.models import Player, TournamentSettings


@pytest.fixture
def five_ranked_players():
    """Five players with distinct ratings, deliberately not in rating order."""
    return [
        Player(id="C", name="Carol", average=70),
        Player(id="A", name="Alice", average=90),
        Player(id="E", name="Eve", average=50),
        Player(id="B", name="Bob", average=80),
        Player(id="D", name="Dave", average=60),
    ]


@pytest.fixture
def eight_players():
    """Eight players rated 100 (P1) down to 30 (P8)."""
    return [Player(id=f"P{i + 1}", name=f"Player {i + 1}", average=100 - i * 10) for i in range(8)]


@pytest.fixture
def make_players():
    """Factory for n players P1..Pn with descending ratings."""
    def _make(n):
        return [Player(id=f"P{i + 1}", name=f"Player {i + 1}", average=1000 - i) for i in range(n)]
    return _make


@pytest.fixture
def ranked_settings():
    return TournamentSettings(seeding='ranked')


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def data_dir(tmp_path):
    """Temporary data directory with a roster and tournament settings file."""
    players_file = tmp_path / "players.yaml"
    settings_file = tmp_path / "tournament.yaml"

    players_file.write_text(yaml.dump({'players': [
        {'id': f"P{i + 1}", 'name': f"Player {i + 1}", 'avatar': '', 'average': 100 - i * 10}
        for i in range(8)
    ]}, default_flow_style=False))
    settings_file.write_text(yaml.dump({'tournament_settings': {
        'seeding': 'ranked',
        'num_groups': 2,
        'players_advancing': 1,
    }}, default_flow_style=False))

    return tmp_path
