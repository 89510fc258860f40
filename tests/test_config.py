"""
Tests for dropsearch/config.py configuration management.

Tests the hierarchical configuration system with sensible defaults,
including file loading, environment variables and saving. The autouse
``isolated_config`` fixture points HOME and the cwd at a temp directory.
"""
import pytest
import tomli
from pathlib import Path

import dropsearch.config
from dropsearch.config import DropsearchConfig, get_config, init_config
from dropsearch.errors import DropsearchError


def write_user_config(text):
    user_config_dir = Path.home() / ".config" / "dropsearch"
    user_config_dir.mkdir(parents=True, exist_ok=True)
    (user_config_dir / "config.toml").write_text(text)


class TestDropsearchConfigDefaults:
    """Test default configuration values."""

    def test_default_tokens_are_empty(self):
        config = DropsearchConfig()
        assert config.raindrop_token == ""
        assert config.meilisearch_token == ""

    def test_default_raindrop_api_url(self):
        assert DropsearchConfig().raindrop_api_url == "http://api.raindrop.io/rest/v1"

    def test_default_meilisearch_host(self):
        assert DropsearchConfig().meilisearch_host == "http://search"

    def test_default_index_name(self):
        assert DropsearchConfig().index_name == "raindrops"

    def test_default_timeout_is_none(self):
        """No timeout unless configured."""
        assert DropsearchConfig().timeout is None

    def test_default_color_output_is_true(self):
        assert DropsearchConfig().color_output is True

    def test_default_log_level(self):
        assert DropsearchConfig().log_level == "INFO"


class TestConfigLoading:
    """Test configuration loading from files."""

    def test_load_defaults_when_no_files_exist(self):
        config = DropsearchConfig.load()
        assert config == DropsearchConfig()

    def test_load_from_local_toml(self, tmp_path):
        (tmp_path / "dropsearch.toml").write_text('index_name = "local"\ntimeout = 30\n')

        config = DropsearchConfig.load()
        assert config.index_name == "local"
        assert config.timeout == 30

    def test_load_from_rc_file(self, tmp_path):
        (tmp_path / ".dropsearchrc").write_text('meilisearch_host = "http://rc:7700"\n')

        config = DropsearchConfig.load()
        assert config.meilisearch_host == "http://rc:7700"

    def test_load_from_user_config_file(self):
        write_user_config('index_name = "user"\nlog_level = "DEBUG"\n')

        config = DropsearchConfig.load()
        assert config.index_name == "user"
        assert config.log_level == "DEBUG"

    def test_local_config_overrides_user_config(self, tmp_path):
        write_user_config('index_name = "user"\ntimeout = 20\n')
        (tmp_path / "dropsearch.toml").write_text('index_name = "local"\n')

        config = DropsearchConfig.load()
        assert config.index_name == "local"
        assert config.timeout == 20

    def test_explicit_config_file_overrides_all(self, tmp_path, monkeypatch):
        (tmp_path / "dropsearch.toml").write_text('index_name = "local"\n')
        monkeypatch.setenv("DROPSEARCH_INDEX_NAME", "env")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('index_name = "explicit"\n')

        config = DropsearchConfig.load(config_file=explicit)
        assert config.index_name == "explicit"

    def test_missing_explicit_file_is_ignored(self, tmp_path):
        config = DropsearchConfig.load(config_file=tmp_path / "nope.toml")
        assert config.index_name == "raindrops"

    def test_unknown_keys_ignored(self, tmp_path):
        (tmp_path / "dropsearch.toml").write_text('database = "bookmarks.db"\n')
        config = DropsearchConfig.load()
        assert not hasattr(config, "database")


class TestEnvironmentVariables:
    """Test environment variable overrides."""

    def test_tokens_from_env(self, monkeypatch):
        monkeypatch.setenv("DROPSEARCH_RAINDROP_TOKEN", "rd")
        monkeypatch.setenv("DROPSEARCH_MEILISEARCH_TOKEN", "ms")

        config = DropsearchConfig.load()
        assert config.raindrop_token == "rd"
        assert config.meilisearch_token == "ms"

    def test_env_overrides_file_config(self, monkeypatch, tmp_path):
        (tmp_path / "dropsearch.toml").write_text('index_name = "file"\n')
        monkeypatch.setenv("DROPSEARCH_INDEX_NAME", "env")

        assert DropsearchConfig.load().index_name == "env"

    @pytest.mark.parametrize("value,expected", [
        ("false", False), ("0", False), ("true", True), ("1", True), ("yes", True),
    ])
    def test_boolean_conversion(self, monkeypatch, value, expected):
        monkeypatch.setenv("DROPSEARCH_COLOR_OUTPUT", value)
        assert DropsearchConfig.load().color_output is expected

    def test_timeout_conversion(self, monkeypatch):
        monkeypatch.setenv("DROPSEARCH_TIMEOUT", "60")
        assert DropsearchConfig.load().timeout == 60

    def test_empty_timeout_means_none(self, monkeypatch):
        monkeypatch.setenv("DROPSEARCH_TIMEOUT", "")
        assert DropsearchConfig.load().timeout is None

    def test_invalid_timeout_raises(self, monkeypatch):
        monkeypatch.setenv("DROPSEARCH_TIMEOUT", "abc")
        with pytest.raises(DropsearchError, match="DROPSEARCH_TIMEOUT"):
            DropsearchConfig.load()

    def test_unknown_env_var_ignored(self, monkeypatch):
        monkeypatch.setenv("DROPSEARCH_UNKNOWN_SETTING", "value")
        config = DropsearchConfig.load()
        assert not hasattr(config, "unknown_setting")


class TestConfigSaving:
    """Test configuration saving."""

    def test_save_creates_parent_directories(self, tmp_path):
        save_path = tmp_path / "nested" / "dirs" / "config.toml"
        DropsearchConfig().save(save_path)
        assert save_path.exists()

    def test_save_writes_valid_toml(self, tmp_path):
        config = DropsearchConfig(index_name="saved", timeout=45)
        save_path = tmp_path / "config.toml"
        config.save(save_path)

        with open(save_path, "rb") as f:
            loaded = tomli.load(f)

        assert loaded["index_name"] == "saved"
        assert loaded["timeout"] == 45

    def test_save_skips_none_values(self, tmp_path):
        save_path = tmp_path / "config.toml"
        DropsearchConfig().save(save_path)

        with open(save_path, "rb") as f:
            assert "timeout" not in tomli.load(f)

    def test_save_never_writes_tokens(self, tmp_path):
        config = DropsearchConfig(raindrop_token="secret", meilisearch_token="secret2")
        save_path = tmp_path / "config.toml"
        config.save(save_path)

        assert "secret" not in save_path.read_text()

    def test_save_to_default_location(self):
        DropsearchConfig().save()
        assert (Path.home() / ".config" / "dropsearch" / "config.toml").exists()

    def test_saved_config_loads_back(self, tmp_path):
        config = DropsearchConfig(meilisearch_host="http://ms:7700", color_output=False)
        save_path = tmp_path / "config.toml"
        config.save(save_path)

        assert DropsearchConfig.load(config_file=save_path) == config


class TestGlobalConfigFunctions:
    """Test module-level config functions."""

    def test_get_config_returns_same_instance(self):
        assert get_config() is get_config()

    def test_get_config_reload_creates_new_instance(self):
        config1 = get_config()
        config1.index_name = "changed"

        config2 = get_config(reload=True)

        assert config2 is not config1
        assert config2.index_name == "raindrops"

    def test_init_config_applies_overrides(self):
        config = init_config(index_name="override", timeout=99)
        assert config.index_name == "override"
        assert config.timeout == 99

    def test_init_config_ignores_none_values(self):
        config = init_config(index_name=None)
        assert config.index_name == "raindrops"

    def test_init_config_with_file_reloads(self, tmp_path):
        get_config().index_name = "stale"
        config_file = tmp_path / "custom.toml"
        config_file.write_text('index_name = "fresh"\n')

        config = init_config(config_file=config_file)
        assert config.index_name == "fresh"
        assert dropsearch.config._config is config
