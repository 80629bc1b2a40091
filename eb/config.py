"""Persistent JSON config helpers.

Stores default command-line arguments and the preferred Pygments style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "eb"
CONFIG_FILENAME = "config.json"
DEFAULT_STYLE = "monokai"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

LOGGER = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        text = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        LOGGER.debug("cannot read config %s", CONFIG_PATH, exc_info=True)
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        LOGGER.warning("ignoring malformed config %s", CONFIG_PATH)
        return {}
    return data if isinstance(data, dict) else {}


def load_default_args() -> list[str]:
    """Return arguments to prepend to every command line.

    Only a list of strings is accepted; anything else yields no defaults.
    """
    value = load_config().get("default_args")
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        return []
    return list(value)


def load_style() -> str:
    """Return the configured Pygments style name, or the built-in default."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE
