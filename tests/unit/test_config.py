"""Unit tests for configuration loading and profile management."""

import os
from pathlib import Path
from unittest import mock

import pytest
import yaml

from daytracker.config import TrackerConfig
from daytracker.config.loader import (
    YAMLConfigLoader,
    deep_merge,
    dict_to_config,
    load_config,
    load_yaml_with_inheritance,
)
from daytracker.config.profiles import PROFILE_ENV_VAR, Profile, detect_profile


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_nested_merge(self) -> None:
        """Test merging nested dictionaries."""
        base = {"outer": {"a": 1, "b": 2}}
        override = {"outer": {"b": 3, "c": 4}}
        assert deep_merge(base, override) == {"outer": {"a": 1, "b": 3, "c": 4}}

    def test_override_replaces_non_dict(self) -> None:
        """Test that non-dict values are replaced."""
        assert deep_merge({"a": {"nested": 1}}, {"a": "replaced"}) == {"a": "replaced"}

    def test_base_not_mutated(self) -> None:
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestYAMLLoading:
    """Tests for YAML config loading."""

    def test_load_with_inheritance(self, tmp_path: Path) -> None:
        """Test loading YAML with extends keyword."""
        (tmp_path / "base.yaml").write_text(
            yaml.dump({"daytracker": {"storage": {"backend": "json"}, "logging": {"level": "INFO"}}})
        )
        (tmp_path / "child.yaml").write_text(
            yaml.dump({"extends": "base.yaml", "daytracker": {"logging": {"level": "DEBUG"}}})
        )

        result = load_yaml_with_inheritance(tmp_path / "child.yaml")

        assert result["daytracker"]["storage"]["backend"] == "json"
        assert result["daytracker"]["logging"]["level"] == "DEBUG"
        assert "extends" not in result

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml_with_inheritance(tmp_path / "nope.yaml")


class TestDictToConfig:
    """Tests for dict_to_config."""

    def test_defaults(self) -> None:
        """Test an empty dict gives default config."""
        config = dict_to_config({})

        assert config == TrackerConfig()
        assert config.storage.backend == "json"
        assert config.reminders.interval_minutes == 20
        assert config.reminders.idle_threshold_minutes == 60

    def test_empty_sections(self) -> None:
        """Test sections present but empty in YAML."""
        config = dict_to_config({"daytracker": {"ai": None, "storage": None}})

        assert config.ai.enabled is True

    def test_values(self) -> None:
        config = dict_to_config(
            {
                "daytracker": {
                    "storage": {"backend": "mongo", "mongo_database": "days"},
                    "ai": {"model": "claude-test", "tip_temperature": 0.5},
                }
            }
        )

        assert config.storage.backend == "mongo"
        assert config.storage.mongo_database == "days"
        assert config.ai.model == "claude-test"
        assert config.ai.tip_temperature == 0.5

    def test_unknown_key(self) -> None:
        """Test that an unknown key is rejected."""
        with pytest.raises(TypeError):
            dict_to_config({"daytracker": {"storage": {"colour": "blue"}}})


class TestProfiles:
    """Tests for the shipped profiles."""

    def test_dev_profile(self) -> None:
        config = load_config(profile="dev")
        assert config.logging.level == "DEBUG"
        assert config.reminders.enabled is False

    def test_prod_profile(self) -> None:
        config = load_config(profile="prod")
        assert config.logging.level == "WARNING"
        assert config.reminders.enabled is True

    def test_test_profile(self) -> None:
        config = load_config(profile="test")
        assert config.ai.enabled is False
        assert config.storage.data_path == "/tmp/daytracker-test/data.json"

    def test_missing_profile_uses_defaults(self, tmp_path: Path) -> None:
        loader = YAMLConfigLoader(config_dir=tmp_path)
        assert loader.load_profile("staging") == TrackerConfig()

    def test_load_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.dump({"daytracker": {"logging": {"level": "ERROR"}}}))

        assert load_config(path=path).logging.level == "ERROR"


class TestDetectProfile:
    """Tests for profile detection."""

    def test_default_is_dev(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            assert detect_profile() == Profile.DEV

    @pytest.mark.parametrize(("value", "expected"), [("prod", Profile.PROD), (" TEST ", Profile.TEST)])
    def test_from_env(self, value: str, expected: Profile) -> None:
        with mock.patch.dict(os.environ, {PROFILE_ENV_VAR: value}):
            assert detect_profile() == expected

    def test_unknown_value(self) -> None:
        with mock.patch.dict(os.environ, {PROFILE_ENV_VAR: "staging"}):
            assert detect_profile() == Profile.DEV
