"""
=============================================================================
MSAY - script/core.py (Phrase Loading)
Version: 1.0

PURPOSE:
    Turns a script file into the ordered list of phrases msay plays.
    A phrase is one blank-line-delimited block, whitespace trimmed.

FORMAT:
    First phrase, maybe over
    several lines.

    Second phrase.
=============================================================================
"""

import os

from errors import EmptyScript, FileNotFound, IOFailure, PhraseIndexOutOfRange

SEPARATOR = "\n\n"


def parse_phrases(raw):
    """
    Split raw script text into trimmed phrases.

    CRLF endings are normalized first so Windows-saved scripts split the
    same way. Blocks that are empty after trimming (runs of blank lines,
    trailing separator) are dropped.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    phrases = [chunk.strip() for chunk in text.split(SEPARATOR)]
    return tuple(p for p in phrases if p)


class PhraseStore:
    """
    Ordered, 1-indexed, read-only collection of phrases.
    Created once per run and never changed afterwards.
    """

    def __init__(self, phrases, source="<string>"):
        self._phrases = tuple(phrases)
        self.source = source

    @classmethod
    def from_text(cls, raw, source="<string>"):
        return cls(parse_phrases(raw), source=source)

    @property
    def count(self):
        return len(self._phrases)

    def __len__(self):
        return len(self._phrases)

    def __iter__(self):
        return iter(self._phrases)

    def phrase(self, index):
        """Return phrase number *index* (1-based)."""
        if not isinstance(index, int) or not 1 <= index <= len(self._phrases):
            raise PhraseIndexOutOfRange(index, len(self._phrases))
        return self._phrases[index - 1]

    def __repr__(self):
        return f"PhraseStore({self.source!r}, count={self.count})"


def load_script(path):
    """
    Read *path* fully and build a PhraseStore.

    Raises:
        FileNotFound: path missing or not a regular file
        IOFailure:    any other read/decode problem
        EmptyScript:  the file holds no phrases
    """
    if not os.path.isfile(path):
        raise FileNotFound(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError:
        raise FileNotFound(path)
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(f"Could not read {path}: {e}")

    store = PhraseStore.from_text(raw, source=path)
    if not store.count:
        raise EmptyScript(path)
    return store
