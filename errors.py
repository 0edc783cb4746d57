"""
=============================================================================
MSAY - errors.py (Failure Taxonomy)
Version: 1.0

PURPOSE:
    Every fatal condition msay can hit, with the informational code that is
    embedded in the message. The process itself always exits with 1.

CODES:
    -1 InvalidArguments       wrong count/shape of CLI args
    -2 FileNotFound           script path missing or not a regular file
    -3 PhraseIndexOutOfRange  requested phrase has no backing text
    -4 IOFailure              read error other than not-found
    -5 EmptyScript            script parsed to zero phrases
    -6 EngineNotFound         speech engine cannot be launched
    -7 SpeechBusy             second playback while one is outstanding
=============================================================================
"""


class MsayError(Exception):
    """Base class. Subclasses set ``code``."""

    code = 0

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"[E{self.code}] {self.message}"


class InvalidArguments(MsayError):
    code = -1


class FileNotFound(MsayError):
    code = -2

    def __init__(self, path):
        super().__init__(f"Script file not found: {path}")
        self.path = path


class PhraseIndexOutOfRange(MsayError):
    code = -3

    def __init__(self, index, count):
        super().__init__(f"Phrase {index} does not exist (script has {count})")
        self.index = index
        self.count = count


class IOFailure(MsayError):
    code = -4


class EmptyScript(InvalidArguments):
    code = -5

    def __init__(self, path):
        super().__init__(f"Script file contains no phrases: {path}")
        self.path = path


class EngineNotFound(MsayError):
    code = -6


class SpeechBusy(MsayError):
    code = -7
