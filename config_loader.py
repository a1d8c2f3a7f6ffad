import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import ValidationError

from errors import ConfigError
from models import Config, LocationConfig, ServerConfig, UpstreamConfig

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.toml")


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from TOML file."""
    path = config_path or os.getenv("CONFIG_PATH") or DEFAULT_CONFIG_PATH
    try:
        with open(path, "r") as f:
            config_data = toml.load(f)

        server_config = ServerConfig(**config_data.get("server", {}))
        upstream_config = UpstreamConfig(**config_data.get("upstream", {}))

        # Table order in the file is the display order of the beaches
        locations = {}
        for slug, location_data in config_data.get("locations", {}).items():
            locations[slug] = LocationConfig(**location_data)

        if not locations:
            raise ConfigError(f"No locations configured in {path}")

        return Config(server=server_config, upstream=upstream_config, locations=locations)

    except ConfigError:
        raise
    except (OSError, toml.TomlDecodeError, ValidationError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def get_location_slugs(config: Config) -> list[str]:
    """Get list of all configured location slugs."""
    return list(config.locations.keys())
