"""
=============================================================================
MSAY - mouth/core.py (Speech Controller)
Version: 1.0

PURPOSE:
    Speaks one phrase at a time through an external TTS process.
    The process runs on its own so it can be killed mid-sentence.

ARCHITECTURE:
    speak()      spawns the engine and returns a Playback right away
    Playback     waits for the process on a worker thread, fires once
    interrupt()  kills the outstanding process (teardown only)

ENGINES:
    say      macOS `say`   -v VOICE -r RATE [--interactive] -- TEXT
    pyttsx3  python -m mouth.speaker [--voice V] --rate N [--quiet] -- TEXT
=============================================================================
"""

import os
import re
import shutil
import subprocess
import sys
import threading

from errors import EngineNotFound, SpeechBusy

ENGINES = ("say", "pyttsx3")

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]+")
_WHITESPACE = re.compile(r"\s+")


def escape_text(text):
    """
    Make phrase text safe to hand to the engine as a single argument.

    - control characters and line breaks become plain spaces
    - `[[ ... ]]` embedded-command brackets are broken up so the engine
      reads them as text
    - a leading dash is kept away from option parsing (we also pass `--`)
    """
    text = _CONTROL_CHARS.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    text = text.replace("[[", "[ [").replace("]]", "] ]")
    if text.startswith("-"):
        text = " " + text
    return text


def resolve_engine(engine):
    if engine in (None, "", "auto"):
        return "say" if sys.platform == "darwin" else "pyttsx3"
    if engine not in ENGINES:
        raise EngineNotFound(f"Unknown speech engine '{engine}' (expected one of {', '.join(ENGINES)})")
    return engine


def build_command(engine, text, voice=None, rate=190, quiet=False):
    """Argument vector for one invocation. *text* must already be escaped."""
    if engine == "say":
        cmd = ["say"]
        if voice:
            cmd += ["-v", voice]
        cmd += ["-r", str(rate)]
        if not quiet:
            cmd.append("--interactive")
        return cmd + ["--", text]

    cmd = [sys.executable, "-m", "mouth.speaker"]
    if voice:
        cmd += ["--voice", voice]
    cmd += ["--rate", str(rate)]
    if quiet:
        cmd.append("--quiet")
    return cmd + ["--", text]


class Playback:
    """
    Single-fire completion signal for one engine process.

    done is set exactly once, when the process has terminated (or failed
    to start). returncode holds the exit status, error the launch error.
    """

    def __init__(self, text, on_done=None):
        self.text = text
        self.returncode = None
        self.error = None
        self._done = threading.Event()
        self._on_done = on_done

    @property
    def done(self):
        return self._done.is_set()

    @property
    def ok(self):
        return self.error is None and self.returncode == 0

    def describe_failure(self):
        if self.ok:
            return None
        if self.error is not None:
            return f"speech engine failed to start: {self.error}"
        if self.returncode:
            return f"speech engine exited with status {self.returncode}"
        return None

    def wait(self, timeout=None):
        return self._done.wait(timeout)

    def _finish(self, returncode=None, error=None):
        self.returncode = returncode
        self.error = error
        self._done.set()
        if self._on_done is not None:
            self._on_done(self)


class Speaker:
    """
    Owns the (at most one) outstanding TTS process.
    """

    def __init__(self, engine="auto", rate=190, popen=subprocess.Popen):
        self.engine = resolve_engine(engine)
        self.rate = rate
        self._popen = popen
        self._process = None
        self._playback = None
        self._lock = threading.Lock()

    def ensure_available(self):
        """Raise EngineNotFound unless the engine can be launched."""
        if self.engine == "say":
            if shutil.which("say") is None:
                raise EngineNotFound("The `say` command is not available on this system")
            return
        try:
            import pyttsx3  # noqa: F401  (only the worker process uses it)
        except ImportError:
            raise EngineNotFound("pyttsx3 is not installed")

    def speak(self, text, voice=None, quiet=False, on_done=None):
        """
        Start speaking *text*. Returns a Playback immediately.

        Raises SpeechBusy if a previous playback has not finished yet.
        A process that cannot be launched still completes the Playback
        (with .error set) so callers see exactly one completion.
        """
        playback = Playback(text, on_done=on_done)
        cmd = build_command(self.engine, escape_text(text), voice=voice, rate=self.rate, quiet=quiet)

        with self._lock:
            if self._playback is not None and not self._playback.done:
                raise SpeechBusy("Speech already in progress")
            self._playback = playback
            try:
                self._process = self._popen(
                    cmd,
                    stdin=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    cwd=PROJECT_DIR
                )
            except OSError as e:
                self._process = None
                launch_error = e
            else:
                launch_error = None
                process = self._process

        if launch_error is not None:
            self._complete(playback, error=launch_error)
            return playback

        waiter = threading.Thread(target=self._wait, args=(process, playback), daemon=True)
        waiter.start()
        return playback

    def _wait(self, process, playback):
        returncode = process.wait()
        with self._lock:
            if self._process is process:
                self._process = None
        self._complete(playback, returncode=returncode)

    def _complete(self, playback, returncode=None, error=None):
        playback._finish(returncode=returncode, error=error)

    def interrupt(self):
        """
        Kill speech immediately. Best effort: used when the session ends.

        Returns:
            bool: True if something was interrupted, False if nothing playing
        """
        with self._lock:
            process = self._process
            if process is None or process.poll() is not None:
                return False
            try:
                process.kill()
                process.wait(timeout=2)
            except (OSError, subprocess.TimeoutExpired):
                return False
            return True
