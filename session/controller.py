"""
=============================================================================
MSAY - session/controller.py (The Controller)
Version: 1.0

PURPOSE:
    Interactive mode. Arrow keys move between phrases, the confirm key
    speaks the current one. While a phrase is being spoken every key is
    dropped, so there is never more than one playback and the position
    cannot move underneath it.

ARCHITECTURE:
    Key thread (ears) ──┐
                        ├──→ events queue ──→ handle() ──→ Display.render()
    Playback waiter ────┘                         └──→ Speaker.speak()

    Only the controller thread touches SessionState. The other threads
    just put events on the queue.

STATES:
    Idle      playing=False  keys navigate / commit
    Speaking  playing=True   keys dropped until the playback completes
    Quit ends the session from either state without waiting.
    End of input is queued like a key: it ends the session after the
    keys before it, and after the playback they started.
=============================================================================
"""

import queue
import threading
from dataclasses import dataclass

from ears.keys import QUIT, KeyMap, NavigationCommand
from session.display import Display
from session.navigation import advance


@dataclass
class SessionState:
    position: int = 1
    playing: bool = False


@dataclass
class SpeechFinished:
    playback: object


END_OF_INPUT = "end-of-input"


class InteractiveController:

    def __init__(self, store, speaker, display=None, keymap=None, voice=None):
        self.store = store
        self.speaker = speaker
        self.display = display or Display()
        self.keymap = keymap or KeyMap()
        self.voice = voice

        self.state = SessionState()
        self.events = queue.Queue()
        self._quit = threading.Event()
        self._playback = None
        self._quit_after_playback = False

    # =========================================================================
    # EVENT SOURCES (any thread)
    # =========================================================================

    def on_key(self, key_name):
        """Translate a raw key and queue it. Quit skips the queue."""
        command = self.keymap.translate(key_name)
        if command is QUIT:
            self.request_quit()
        else:
            self.events.put(command)

    def request_quit(self):
        self._quit.set()
        # Wake the loop if it is blocked on an empty queue
        self.events.put(QUIT)

    @property
    def quitting(self):
        return self._quit.is_set()

    def end_of_input(self):
        """No more keys. Queued behind the keys that came before it."""
        self.events.put(END_OF_INPUT)

    def _on_playback_done(self, playback):
        self.events.put(SpeechFinished(playback))

    # =========================================================================
    # STATE MACHINE (controller thread only)
    # =========================================================================

    def handle(self, event):
        if isinstance(event, SpeechFinished):
            self._finish_playback(event.playback)
        elif event is END_OF_INPUT:
            # Let a running playback finish first
            if self.state.playing:
                self._quit_after_playback = True
            else:
                self._quit.set()
        elif isinstance(event, NavigationCommand):
            self._handle_command(event)

    def _handle_command(self, command):
        if self.state.playing:
            return

        if command is NavigationCommand.COMMIT:
            self.state.playing = True
            self.render()
            self._playback = self.speaker.speak(
                self.store.phrase(self.state.position),
                voice=self.voice,
                on_done=self._on_playback_done
            )
        elif command is not NavigationCommand.IGNORED:
            self.state.position = advance(self.state.position, command, self.store.count)
            self.render()

    def _finish_playback(self, playback):
        # Only the outstanding playback can end Speaking
        if playback is not self._playback:
            return
        self._playback = None
        self.state.playing = False
        self.render(notice=playback.describe_failure())
        if self._quit_after_playback:
            self._quit.set()

    def render(self, notice=None):
        self.display.render(self.store, self.state.position, self.state.playing, notice=notice)

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    def run(self, keys):
        """
        Run the session until quit.

        Args:
            keys: iterable of key names (an entered ears.KeyReader).
                  End of input ends the session once the keys before
                  it (and any playback they started) are done.
        """
        self.render()

        listener = threading.Thread(target=self._pump_keys, args=(keys,), daemon=True)
        listener.start()

        try:
            while not self._quit.is_set():
                event = self.events.get()
                if self._quit.is_set():
                    break
                self.handle(event)
        finally:
            self.speaker.interrupt()

    def _pump_keys(self, keys):
        for name in keys:
            if self._quit.is_set():
                return
            self.on_key(name)
        self.end_of_input()
