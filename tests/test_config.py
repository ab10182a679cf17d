"""Tests for installer configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from nova_installer.config import DEFAULTS, Config
from nova_installer.errors import ConfigError, ConfigNotFoundError


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.get("installer.module_type") == "novaphp-module"
        assert config.get("installer.modules_dir") == "modules"
        assert config.get("registry.filename") == "novaphp-modules.yaml"
        assert config.get("registry.legacy_path") == "config/modules.yaml"
        assert config.get("hooks.event") == "post-autoload-dump"
        assert config.get("hooks.entry_point") == "nova_installer.installer:post_autoload_dump"

    def test_missing_key_returns_default(self) -> None:
        assert Config().get("no.such.key", "fallback") == "fallback"

    def test_overrides_merge_with_defaults(self) -> None:
        """Overriding one nested key keeps its siblings."""
        config = Config({"installer": {"module_type": "nova-module"}})
        assert config.get("installer.module_type") == "nova-module"
        assert config.get("installer.modules_dir") == "modules"

    def test_defaults_not_mutated(self) -> None:
        Config({"registry": {"filename": "other.yaml"}})
        assert DEFAULTS["registry"]["filename"] == "novaphp-modules.yaml"


class TestConfigLoad:
    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "installer.yaml"
        path.write_text("registry:\n  filename: modules.yaml\n")
        config = Config.load(path)
        assert config.get("registry.filename") == "modules.yaml"
        assert config.get("registry.legacy_path") == "config/modules.yaml"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "installer.yaml"
        path.write_text("")
        assert Config.load(path).get("installer.module_type") == "novaphp-module"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            Config.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "installer.yaml"
        path.write_text("{{invalid yaml:")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "installer.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            Config.load(path)
