"""Tests for GameConfig and YAML loading."""

import pytest

from wgm.core.exceptions import ConfigurationError
from wgm.core.types import Role
from wgm.engine.config import GameConfig


class TestGameConfig:

    def test_defaults(self):
        config = GameConfig()

        assert config.decision_timeout == 30.0
        assert config.announcement_delay == 0.0
        assert config.role_counts is None
        assert config.resolve_role_counts(6)[Role.WEREWOLF] == 2

    def test_role_counts_from_strings(self):
        config = GameConfig(role_counts={"werewolf": 1, "Seer": 1, "villager": 2})

        assert config.role_counts == {Role.WEREWOLF: 1, Role.SEER: 1, Role.VILLAGER: 2}
        assert config.resolve_role_counts(4) == config.role_counts

    def test_role_counts_must_cover_seats(self):
        config = GameConfig(role_counts={"werewolf": 1, "villager": 2})

        with pytest.raises(ConfigurationError):
            config.resolve_role_counts(5)

    @pytest.mark.parametrize("kwargs", [
        {"role_counts": {"villager": 4}},
        {"role_counts": {"werewolf": 1, "hunter": 1}},
        {"role_counts": {"werewolf": 1, "villager": -1}},
        {"decision_timeout": 0},
        {"announcement_delay": -1.0},
        {"max_rounds": 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            GameConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        config = GameConfig.from_dict({"decision_timeout": 5, "n_players": 6, "agent": {"type": "random"}})
        assert config.decision_timeout == 5


class TestYaml:

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "werewolf.yaml"
        path.write_text(
            "n_players: 5\n"
            "role_counts:\n"
            "  werewolf: 1\n"
            "  seer: 1\n"
            "  witch: 1\n"
            "  villager: 2\n"
            "decision_timeout: 12.5\n"
            "seed: 42\n"
        )

        config = GameConfig.from_yaml(path)

        assert config.decision_timeout == 12.5
        assert config.seed == 42
        assert sum(config.resolve_role_counts(5).values()) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            GameConfig.from_yaml(tmp_path / "nope.yaml")

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationError):
            GameConfig.from_yaml(path)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert GameConfig.from_yaml(path) == GameConfig()
