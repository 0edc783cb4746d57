"""
=============================================================================
MSAY - session/navigation.py (Position Logic)
Version: 1.0

    advance(position, command, count) -> new position

Saturates at both ends: moving past the first or last phrase is a no-op.
=============================================================================
"""

from ears.keys import NavigationCommand


def advance(position, command, count):
    if command is NavigationCommand.NEXT:
        return min(position + 1, count)
    if command is NavigationCommand.PREVIOUS:
        return max(position - 1, 1)
    return position
