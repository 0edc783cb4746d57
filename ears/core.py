"""
=============================================================================
MSAY - ears/core.py (Keyboard Listener)
Version: 1.0

PURPOSE:
    Puts the terminal in raw mode and yields one key name per key press.
    Arrow keys arrive as escape sequences and are folded into a single
    name here, so the rest of msay sees "right" instead of b"\\x1b[C".

USAGE:
    with KeyReader() as keys:
        for name in keys:
            ...

    Iteration stops at end of input. Ctrl-C is NOT a signal in raw mode,
    it arrives as the key "ctrl-c".
=============================================================================
"""

import os
import sys

if sys.platform.startswith("win"):  # pragma: no cover - platform specific
    import msvcrt
    termios = tty = select = None
else:
    import select
    import termios
    import tty
    msvcrt = None

# How long to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05

SEQUENCES = {
    b"\x1b[A": "up", b"\x1b[B": "down", b"\x1b[C": "right", b"\x1b[D": "left",
    b"\x1bOA": "up", b"\x1bOB": "down", b"\x1bOC": "right", b"\x1bOD": "left",
    b"\x1b[H": "home", b"\x1b[F": "end", b"\x1b[5~": "pageup", b"\x1b[6~": "pagedown",
    b"\x1b": "escape",
    b"\r": "return", b"\n": "return",
    b" ": "space",
    b"\t": "tab",
    b"\x7f": "backspace", b"\x08": "backspace",
    b"\x03": "ctrl-c",
    b"\x04": "ctrl-d",
}

WINDOWS_ARROWS = {"H": "up", "P": "down", "K": "left", "M": "right"}


def key_name(seq):
    """Name for one complete key sequence (bytes)."""
    if seq in SEQUENCES:
        return SEQUENCES[seq]
    if seq.startswith(b"\x1b"):
        # Modified arrows, function keys, ...: never a plain letter
        return "unknown"
    if len(seq) == 1 and seq[0] < 0x20:
        return "ctrl-" + chr(seq[0] + 0x60)
    return seq.decode("utf-8", errors="replace")


def _utf8_length(lead):
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """
    Raw key reader over a file descriptor (stdin by default).

    Raw mode is only switched on when the descriptor is a terminal; a pipe
    is read as-is, which is what the tests feed it.
    """

    def __init__(self, fd=None):
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved = None

    def __enter__(self):
        if termios is not None and os.isatty(self.fd):
            self._saved = termios.tcgetattr(self.fd)
            tty.setraw(self.fd)
        return self

    def __exit__(self, *exc):
        self.restore()
        return False

    def restore(self):
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def __iter__(self):
        while True:
            name = self.read_key()
            if name is None:
                return
            yield name

    def read_key(self):
        """Block until one key is pressed. Returns None at end of input."""
        if msvcrt is not None and self.fd == sys.stdin.fileno():
            return self._read_key_windows()
        return self._read_key_posix()

    def _read_key_posix(self):
        first = os.read(self.fd, 1)
        if not first:
            return None

        seq = first
        if first == b"\x1b":
            seq += self._read_escape_tail()
        elif first[0] >= 0x80:
            for _ in range(_utf8_length(first[0]) - 1):
                seq += os.read(self.fd, 1)
        return key_name(seq)

    def _read_escape_tail(self):
        """
        Rest of an escape sequence. CSI is ESC [ params final-byte (@ to ~),
        SS3 is ESC O X. A lone ESC has nothing behind it.
        """
        tail = self._read_pending()
        if tail == b"[":
            while True:
                byte = self._read_pending()
                if not byte:
                    break
                tail += byte
                if 0x40 <= byte[0] <= 0x7E:
                    break
        elif tail == b"O":
            tail += self._read_pending()
        return tail

    def _read_pending(self):
        if not self._more_pending():
            return b""
        return os.read(self.fd, 1)

    def _more_pending(self):
        ready, _, _ = select.select([self.fd], [], [], ESCAPE_TIMEOUT)
        return bool(ready)

    def _read_key_windows(self):
        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            return WINDOWS_ARROWS.get(msvcrt.getwch(), "escape")
        return key_name(ch.encode("utf-8"))
