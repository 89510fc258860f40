"""
Configuration management for dropsearch.

Provides a small hierarchical configuration system with sensible defaults.
Supports both global (~/.config/dropsearch/config.toml) and local
(dropsearch.toml) configurations, plus DROPSEARCH_* environment variables.
"""
import os
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict

from dropsearch.errors import DropsearchError


@dataclass
class DropsearchConfig:
    """
    dropsearch configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments / --config file
    2. Environment variables (DROPSEARCH_*)
    3. Local config file (./dropsearch.toml or ./.dropsearchrc)
    4. User config file (~/.config/dropsearch/config.toml)
    5. System defaults
    """

    # Credentials (normally supplied through the environment)
    raindrop_token: str = field(default="")
    meilisearch_token: str = field(default="")

    # Remote services
    raindrop_api_url: str = field(default="http://api.raindrop.io/rest/v1")
    meilisearch_host: str = field(default="http://search")
    index_name: str = field(default="raindrops")

    # Network settings
    timeout: Optional[int] = field(default=None)  # None = transport default

    # Display settings
    color_output: bool = field(default=True)
    log_level: str = field(default="INFO")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "DropsearchConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load (overrides everything else)

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = Path.home() / ".config" / "dropsearch" / "config.toml"
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        local_paths = [
            Path.cwd() / "dropsearch.toml",
            Path.cwd() / ".dropsearchrc",
        ]

        for path in local_paths:
            if path.exists():
                config._merge(cls._load_toml(path))
                break

        config._apply_env_vars()

        if config_file and config_file.exists():
            config._merge(cls._load_toml(config_file))

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance, ignoring unknown keys."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with DROPSEARCH_ prefix."""
        prefix = "DROPSEARCH_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif config_key == "timeout":
                        try:
                            setattr(self, config_key, int(value) if value else None)
                        except ValueError as e:
                            raise DropsearchError(f"invalid {key}: {value!r} is not a whole number of seconds") from e
                    else:
                        setattr(self, config_key, value)

    def save(self, path: Optional[Path] = None):
        """
        Save current configuration to a TOML file.

        Tokens are never written; keep them in the environment.

        Args:
            path: Path to save to (defaults to user config)
        """
        if path is None:
            path = Path.home() / ".config" / "dropsearch" / "config.toml"

        path.parent.mkdir(parents=True, exist_ok=True)

        data = asdict(self)
        data.pop("raindrop_token")
        data.pop("meilisearch_token")
        # TOML has no null
        data = {k: v for k, v in data.items() if v is not None}

        with open(path, "wb") as f:
            tomli_w.dump(data, f)


# Global configuration instance
_config: Optional[DropsearchConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> DropsearchConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = DropsearchConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> DropsearchConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Config file passed on the command line
        **kwargs: Other configuration overrides

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
