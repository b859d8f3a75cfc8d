"""
Tests for loading roster and settings files.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracketgen.config import load_players, load_settings


class TestLoadPlayers:
    """Tests for roster loading."""

    def test_load_players_mapping(self, data_dir):
        players = load_players(str(data_dir / "players.yaml"))
        assert len(players) == 8
        assert players[0].id == 'P1'
        assert players[0].average == 100

    def test_load_players_plain_list(self, tmp_path):
        roster = tmp_path / "roster.yaml"
        roster.write_text("- {id: a, average: 12.5}\n- {id: b}\n")
        players = load_players(str(roster))
        assert [p.id for p in players] == ['a', 'b']
        assert players[0].average == 12.5
        assert players[1].name == 'b'

    def test_load_players_empty_file(self, tmp_path):
        roster = tmp_path / "roster.yaml"
        roster.write_text("")
        assert load_players(str(roster)) == []

    def test_duplicate_ids_rejected(self, tmp_path):
        roster = tmp_path / "roster.yaml"
        roster.write_text("- {id: a}\n- {id: a}\n")
        with pytest.raises(ValueError, match="duplicate"):
            load_players(str(roster))

    def test_missing_id_rejected(self, tmp_path):
        roster = tmp_path / "roster.yaml"
        roster.write_text("- {name: nobody}\n")
        with pytest.raises(ValueError, match="id"):
            load_players(str(roster))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_players(str(tmp_path / "absent.yaml"))


class TestLoadSettings:
    """Tests for settings loading."""

    def test_nested_tournament_settings(self, data_dir):
        settings = load_settings(str(data_dir / "tournament.yaml"))
        assert settings.seeding == 'ranked'
        assert settings.num_groups == 2
        assert settings.players_advancing == 1

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / "absent.yaml"))
        assert settings.to_dict() == {'seeding': 'ranked', 'num_groups': 1, 'players_advancing': 1}

    def test_flat_mapping_partial(self, tmp_path):
        settings_file = tmp_path / "tournament.yaml"
        settings_file.write_text("seeding: random\n")
        settings = load_settings(str(settings_file))
        assert settings.seeding == 'random'
        assert settings.num_groups == 1

    def test_invalid_value_names_file(self, tmp_path):
        settings_file = tmp_path / "tournament.yaml"
        settings_file.write_text("num_groups: 0\n")
        with pytest.raises(ValueError, match="tournament.yaml"):
            load_settings(str(settings_file))
