"""Tests for YAML configuration handling."""

from pathlib import Path

import pytest

from archport.config import Config, ConflictStrategy
from archport.models import OutputFormat
from archport.utils import ConfigError


class TestConfigValues:
    """Dotted-key access and value coercion."""

    def test_defaults(self):
        config = Config()
        assert config.get("network.timeout") == 30
        assert config.get("network.aur_url") == "https://aur.archlinux.org/rpc/v5"
        assert config.get("conversion.min_match_confidence") == 0.6
        assert config.java.conflict_strategy is ConflictStrategy.PREFER_JDK
        assert config.conversion.default_format is OutputFormat.PKG_TAR_ZST

    def test_set_coerces_types(self):
        config = Config()
        config.set("network.timeout", "10")
        config.set("conversion.skip_deps", "yes")
        config.set("conversion.default_format", "xz")
        config.set("java.conflict_strategy", "Prefer-JRE")
        config.set("general.output_dir", "/tmp/out")
        config.set("logging.level", "DEBUG")

        assert config.network.timeout == 10
        assert config.conversion.skip_deps is True
        assert config.conversion.default_format is OutputFormat.PKG_TAR_XZ
        assert config.java.conflict_strategy is ConflictStrategy.PREFER_JRE
        assert config.general.output_dir == Path("/tmp/out")
        assert config.logging.level == "debug"

    def test_optional_values_accept_none(self):
        config = Config()
        config.set("general.output_dir", "/tmp/out")
        config.set("general.output_dir", "none")
        assert config.general.output_dir is None

    @pytest.mark.parametrize(
        "key, value",
        [
            ("network.timeout", "0"),
            ("network.timeout", "soon"),
            ("conversion.min_match_confidence", "1.5"),
            ("conversion.default_format", "rar"),
            ("conversion.skip_deps", "maybe"),
            ("java.conflict_strategy", "bogus"),
            ("logging.level", "verbose"),
            ("network.aur_url", None),
        ],
    )
    def test_invalid_values(self, key, value):
        with pytest.raises(ConfigError):
            Config().set(key, value)

    @pytest.mark.parametrize("key", ["network", "network.nope", "nosection.timeout"])
    def test_unknown_keys(self, key):
        with pytest.raises(ConfigError):
            Config().get(key)


class TestConfigPersistence:
    """Loading and saving YAML files."""

    def test_missing_file_yields_defaults(self, tmp_path):
        config = Config.load(tmp_path / "absent.yaml")
        assert config.to_dict() == Config().to_dict()

    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = Config()
        config.set("network.offline", True)
        config.set("java.conflict_strategy", "jre")
        config.set("conversion.default_format", "gz")
        config.save(path)

        loaded = Config.load(path)
        assert loaded.network.offline is True
        assert loaded.java.conflict_strategy is ConflictStrategy.JRE
        assert loaded.conversion.default_format is OutputFormat.PKG_TAR_GZ
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("network:\n  timeout: 5\n", encoding="utf-8")
        config = Config.load(path)
        assert config.network.timeout == 5
        assert config.network.offline is False

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("network: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_unknown_key_in_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("network:\n  bogus: 1\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_init_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / "config.yaml"
        assert Config.init(path) == path
        with pytest.raises(ConfigError):
            Config.init(path)
        assert Config.init(path, force=True) == path

    def test_db_dir_under_data_dir(self, tmp_path):
        config = Config()
        config.set("general.data_dir", str(tmp_path))
        assert config.db_dir == tmp_path / "db"
