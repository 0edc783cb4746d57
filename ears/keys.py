"""
=============================================================================
MSAY - ears/keys.py (Key Translation)
Version: 1.0

PURPOSE:
    Maps raw key names ("right", "return", "q", ...) to what they mean
    for the session. Nothing past this file ever looks at key names.
=============================================================================
"""

import enum


class NavigationCommand(enum.Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    COMMIT = "commit"
    IGNORED = "ignored"


# Not a navigation command: ends the session from any state
QUIT = "quit"


class KeyMap:
    """
    Translation table built from the `keys` section of the config.
    """

    def __init__(self, next=(), previous=(), commit=(), quit=()):
        self._table = {}
        for command, names in (
            (NavigationCommand.NEXT, next),
            (NavigationCommand.PREVIOUS, previous),
            (NavigationCommand.COMMIT, commit),
            (QUIT, quit),
        ):
            for name in names:
                self._table[name.lower()] = command

    @classmethod
    def from_config(cls, keys):
        return cls(
            next=keys.get("next", ()),
            previous=keys.get("previous", ()),
            commit=keys.get("commit", ()),
            quit=keys.get("quit", ()),
        )

    def translate(self, key_name):
        """Return a NavigationCommand, or QUIT. Unknown keys are IGNORED."""
        if not key_name:
            return NavigationCommand.IGNORED
        return self._table.get(key_name.lower(), NavigationCommand.IGNORED)
