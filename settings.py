"""Persistent settings for Yahtzee.

Stores the player names last given on the command line, RNG seed and log level in
~/.yahtzee_settings.json. Command-line options override these values.
"""

import json
import os
from pathlib import Path

DEFAULTS = {
    "player_names": ["Player 1"],
    "seed": None,
    "log_level": "WARNING",
}


def _default_path():
    """Return the default path for the settings file."""
    return Path.home() / ".yahtzee_settings.json"


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Merges with DEFAULTS so missing keys get default values.
    Unknown keys are ignored.
    """
    if path is None:
        path = _default_path()
    path = Path(path)
    try:
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            return dict(DEFAULTS)
        result = dict(DEFAULTS)
        for key in DEFAULTS:
            if key in data:
                result[key] = data[key]
        return result
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return dict(DEFAULTS)


def save_settings(settings, path=None):
    """Write settings dict to JSON atomically. Silently ignores write errors."""
    if path is None:
        path = _default_path()
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(json.dumps(settings, indent=2))
        os.replace(tmp_path, path)
    except OSError:
        pass
