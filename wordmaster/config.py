"""
Runtime settings for the vocabulary trainer.

Settings come from an optional ``settings.yaml`` inside the data directory.
The data directory itself defaults to ``~/.wordmaster`` and can be moved
with the ``WORDMASTER_DATA_DIR`` environment variable.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from wordmaster.constants import (
    DATA_DIR_ENV_VAR,
    DB_NAME,
    DEFAULT_DATA_DIR,
    DEFAULT_NEW_WORDS_PER_SESSION,
    DEMO_PIXABAY_API_KEY,
    REQUEST_TIMEOUT_SECONDS,
    SETTINGS_FILENAME,
)
from util.logging_util import setup_logger

logger = setup_logger(__name__)


@dataclass
class Settings:
    data_dir: Path
    db_name: str = DB_NAME
    new_words_per_session: int = DEFAULT_NEW_WORDS_PER_SESSION
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    pixabay_api_key: str = DEMO_PIXABAY_API_KEY

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def audio_dir(self) -> Path:
        return self.data_dir / "audio"

    @property
    def image_dir(self) -> Path:
        return self.data_dir / "images"


def get_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_DATA_DIR


def load_settings(data_dir: Optional[Path] = None) -> Settings:
    """Load settings from the data directory, falling back to defaults."""
    data_dir = data_dir or get_data_dir()
    settings_path = data_dir / SETTINGS_FILENAME

    if not settings_path.exists():
        return Settings(data_dir=data_dir)

    with open(settings_path, "r") as f:
        data = yaml.safe_load(f) or {}

    unknown = set(data) - {"db_name", "new_words_per_session", "request_timeout", "pixabay_api_key"}
    if unknown:
        logger.warning(f"Ignoring unknown settings in {settings_path}: {sorted(unknown)}")

    return Settings(
        data_dir=data_dir,
        db_name=data.get("db_name", DB_NAME),
        new_words_per_session=int(data.get("new_words_per_session", DEFAULT_NEW_WORDS_PER_SESSION)),
        request_timeout=float(data.get("request_timeout", REQUEST_TIMEOUT_SECONDS)),
        pixabay_api_key=data.get("pixabay_api_key", DEMO_PIXABAY_API_KEY),
    )
