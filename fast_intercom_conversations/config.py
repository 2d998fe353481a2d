"""Configuration management for fast-intercom-conversations."""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class Config:
    """Client configuration."""

    intercom_token: str
    log_level: str = "INFO"
    api_timeout_seconds: int = 30
    intercom_api_version: str = "2.13"
    intercom_api_base_url: str = "https://api.intercom.io"

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load configuration from file or environment variables."""
        # Load .env file if it exists
        load_dotenv()

        if config_path is None:
            config_path = cls.get_default_config_path()

        config_data = {}

        if Path(config_path).exists():
            with open(config_path) as f:
                config_data = json.load(f)

        # Environment wins over the file
        env_overrides = {
            "intercom_token": os.getenv("INTERCOM_ACCESS_TOKEN"),
            "log_level": os.getenv("FASTINTERCOM_LOG_LEVEL"),
            "api_timeout_seconds": os.getenv("FASTINTERCOM_API_TIMEOUT_SECONDS"),
            "intercom_api_version": os.getenv("INTERCOM_API_VERSION"),
            "intercom_api_base_url": os.getenv("INTERCOM_API_BASE_URL"),
        }

        for key, value in env_overrides.items():
            if value is not None:
                if key == "api_timeout_seconds":
                    config_data[key] = int(value)
                else:
                    config_data[key] = value

        if not config_data.get("intercom_token"):
            raise ValueError(
                "Intercom access token is required. Set INTERCOM_ACCESS_TOKEN environment variable "
                "or include 'intercom_token' in config file."
            )

        timeout = config_data.get("api_timeout_seconds")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"API timeout must be positive, got {timeout}")

        return cls(**config_data)

    def save(self, config_path: str | None = None):
        """Save configuration to file."""
        if config_path is None:
            config_path = self.get_default_config_path()

        Path(config_path).parent.mkdir(parents=True, exist_ok=True)

        # Don't save the token to file for security
        config_data = asdict(self)
        config_data.pop("intercom_token", None)

        with open(config_path, "w") as f:
            json.dump(config_data, f, indent=2)

    @staticmethod
    def get_default_config_path() -> str:
        """Get the default configuration file path."""
        config_dir = os.getenv("FASTINTERCOM_CONFIG_DIR")
        if config_dir:
            return str(Path(config_dir) / "config.json")
        return str(Path.home() / ".fastintercom" / "config.json")
