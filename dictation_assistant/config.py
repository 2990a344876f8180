"""
Runtime configuration: where settings are persisted and which catalog is loaded.

Command-line options win over environment variables, which win over the
built-in defaults.
"""

from typing import Optional, Union
from pathlib import Path
import os

import click

APP_NAME = "dictation-assistant"
SETTINGS_FILE_ENV = "DICTATION_ASSISTANT_SETTINGS"
CATALOG_FILE_ENV = "DICTATION_ASSISTANT_CATALOG"


def default_settings_path() -> Path:
    """Get the per-user settings file location."""
    return Path(click.get_app_dir(APP_NAME)) / "settings.json"


def resolve_settings_path(option: Optional[Union[str, Path]] = None) -> Path:
    """Pick the settings file from the option, the environment or the default."""
    if option:
        return Path(option)
    env_value = os.getenv(SETTINGS_FILE_ENV)
    if env_value:
        return Path(env_value)
    return default_settings_path()


def resolve_catalog_path(option: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Pick a catalog override from the option or the environment; None means the packaged catalog."""
    if option:
        return Path(option)
    env_value = os.getenv(CATALOG_FILE_ENV)
    return Path(env_value) if env_value else None
