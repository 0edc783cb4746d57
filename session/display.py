"""
=============================================================================
MSAY - session/display.py (Screen Output)
Version: 1.0

PURPOSE:
    Draws the interactive screen. Holds no state: everything it shows
    comes in as arguments on every render.

LAYOUT:
    Phrase 2/7
    <phrase text>            (or "Playing..." while speech is running)
    <notice>                 (optional, e.g. a speech warning)
=============================================================================
"""

import sys

from colorama import Cursor, Fore, Style
from colorama.ansi import clear_screen

# Raw mode turns off output post-processing, so "\n" alone does not return
# the cursor to column 0.
NEWLINE = "\r\n"

PLAYING_INDICATOR = "Playing..."


class Display:

    def __init__(self, stream=None, label="Phrase"):
        self.stream = stream
        self.label = label

    def render(self, store, position, playing, notice=None):
        out = self.stream or sys.stdout

        lines = [
            Style.NORMAL + Fore.WHITE + f"{self.label} "
            + Style.BRIGHT + Fore.GREEN + str(position)
            + Style.NORMAL + Fore.WHITE + f"/{store.count}"
            + Style.RESET_ALL,
            "",
        ]
        # Never show text underneath a running playback
        if playing:
            lines.append(Fore.CYAN + PLAYING_INDICATOR + Style.RESET_ALL)
        else:
            lines.extend(store.phrase(position).splitlines())

        if notice:
            lines += ["", Fore.YELLOW + notice + Style.RESET_ALL]

        out.write(clear_screen() + Cursor.POS(1, 1) + NEWLINE.join(lines) + NEWLINE)
        out.flush()
