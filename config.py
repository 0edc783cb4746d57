import copy
import json
import os
import sys

from colorama import Fore

# Define the file name for our settings
CONFIG_FILE = os.environ.get("MSAY_CONFIG", "config.json")


def load_config(path=None):
    """
    Tries to load settings from config.json.
    Whatever the file sets is merged over the defaults, so a partial
    file (or no file at all) still gives a complete configuration.
    """
    path = path or CONFIG_FILE
    settings = get_defaults()

    if not os.path.exists(path):
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as file:
            data = json.load(file)
    except (OSError, ValueError) as e:
        print(Fore.YELLOW + f"[WARNING] Could not load {path}: {e}. Using default settings.",
              file=sys.stderr)
        return settings

    if not isinstance(data, dict):
        print(Fore.YELLOW + f"[WARNING] {path} is not a JSON object. Using default settings.",
              file=sys.stderr)
        return settings

    return _merge(settings, data)


def _merge(base, override):
    """Recursively lay *override* on top of *base* (sections are dicts)."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def get_defaults():
    """
    Backup settings in case the JSON file is broken or missing.
    """
    return copy.deepcopy({
        "speech": {
            "engine": "auto",        # auto | say | pyttsx3
            "rate": 190,             # words per minute
            "voice": None,           # engine voice id, None = engine default
            "announce_errors": True  # speak fatal errors aloud
        },
        "keys": {
            "next": ["right", "down"],
            "previous": ["left", "up"],
            "commit": ["return", "space"],
            "quit": ["ctrl-c", "ctrl-d", "q"]
        },
        "display": {"label": "Phrase"}
    })


# Load the config immediately when this script is imported
# This variable 'KEY' is what main.py reads
KEY = load_config()
