"""Credentials and fixed paths.

Credentials are read once at the entry point and passed around as a
CloudConfig. Nothing below the command-line layer touches os.environ.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cloudfolio.errors import ConfigError

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

SITE_DIR = Path("public")
DATA_DIR = SITE_DIR / "data"
METADATA_PATH = DATA_DIR / "cloudinary-images.json"
SIMPLE_METADATA_PATH = DATA_DIR / "cloudinary-urls-simple.json"

DEFAULT_SOURCE_FOLDER = "Praveen-PortfolioPics"

ENV_CLOUD_NAME = "CLOUDINARY_CLOUD_NAME"
ENV_API_KEY = "CLOUDINARY_API_KEY"
ENV_API_SECRET = "CLOUDINARY_API_SECRET"
ENV_SOURCE_FOLDER = "PORTFOLIO_SOURCE_FOLDER"


@dataclass(frozen=True)
class CloudConfig:
    cloud_name: str
    api_key: str
    api_secret: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, cloud_name: str | None = None) -> "CloudConfig":
        """Build a config from environment variables.

        An explicit ``cloud_name`` (the optional CLI argument) wins over
        CLOUDINARY_CLOUD_NAME. Raises ConfigError listing every missing value.
        """
        env = os.environ if environ is None else environ
        values = {
            ENV_CLOUD_NAME: cloud_name or env.get(ENV_CLOUD_NAME, ""),
            ENV_API_KEY: env.get(ENV_API_KEY, ""),
            ENV_API_SECRET: env.get(ENV_API_SECRET, ""),
        }
        missing = [name for name, value in values.items() if not value.strip()]
        if missing:
            raise ConfigError(
                "Cloudinary credentials not found: " + ", ".join(missing)
                + " (set them in the environment or a .env file)"
            )
        return cls(
            cloud_name=values[ENV_CLOUD_NAME].strip(),
            api_key=values[ENV_API_KEY].strip(),
            api_secret=values[ENV_API_SECRET].strip(),
        )

    def describe(self) -> dict[str, str]:
        """Credential status safe to print: the secret parts are masked."""
        return {
            "Cloud Name": self.cloud_name,
            "API Key": "SET" if self.api_key else "NOT SET",
            "API Secret": "SET" if self.api_secret else "NOT SET",
        }


def source_folder_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Root folder holding the portfolio; an empty value means the whole account."""
    env = os.environ if environ is None else environ
    return env.get(ENV_SOURCE_FOLDER, DEFAULT_SOURCE_FOLDER).strip()
