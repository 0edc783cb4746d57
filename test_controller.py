"""Tests for the interactive state machine.

Events are fed straight into ``handle()`` so every step is deterministic; the
threaded ``run()`` loop is covered separately with a scripted key source.
"""

import threading
import time

import pytest

from config import get_defaults
from ears import KeyMap, NavigationCommand
from mouth import Playback
from script import PhraseStore
from session import InteractiveController, SpeechFinished

NEXT = NavigationCommand.NEXT
PREVIOUS = NavigationCommand.PREVIOUS
COMMIT = NavigationCommand.COMMIT
IGNORED = NavigationCommand.IGNORED


class FakeSpeaker:
    """Records speak() calls; playbacks finish only when the test says so."""

    def __init__(self):
        self.calls = []
        self.playbacks = []
        self.interrupted = 0

    def speak(self, text, voice=None, quiet=False, on_done=None):
        playback = Playback(text, on_done=on_done)
        self.calls.append((text, voice, quiet))
        self.playbacks.append(playback)
        return playback

    def finish(self, returncode=0):
        self.playbacks[-1]._finish(returncode=returncode)

    def interrupt(self):
        self.interrupted += 1
        return False


class FakeDisplay:
    def __init__(self):
        self.frames = []

    def render(self, store, position, playing, notice=None):
        self.frames.append((position, playing, notice))


@pytest.fixture
def session():
    store = PhraseStore.from_text("One.\n\nTwo.\n\nThree.")
    speaker = FakeSpeaker()
    display = FakeDisplay()
    controller = InteractiveController(
        store, speaker,
        display=display,
        keymap=KeyMap.from_config(get_defaults()["keys"]),
        voice="Alex"
    )
    return controller, speaker, display


def drain(controller):
    """Handle whatever the speaker callbacks queued."""
    while not controller.events.empty():
        controller.handle(controller.events.get_nowait())


def test_starts_idle_at_first_phrase(session):
    controller, _, _ = session
    assert controller.state.position == 1
    assert controller.state.playing is False


def test_next_clamps_at_last_phrase(session):
    controller, _, display = session
    for _ in range(3):
        controller.handle(NEXT)
    assert controller.state.position == 3
    assert display.frames[-1] == (3, False, None)


def test_previous_clamps_at_first_phrase(session):
    controller, _, _ = session
    controller.handle(PREVIOUS)
    assert controller.state.position == 1


def test_ignored_key_does_nothing(session):
    controller, speaker, display = session
    controller.handle(IGNORED)
    assert display.frames == []
    assert speaker.calls == []


def test_commit_speaks_current_phrase(session):
    controller, speaker, display = session
    controller.handle(NEXT)
    controller.handle(COMMIT)

    assert controller.state.playing is True
    assert speaker.calls == [("Two.", "Alex", False)]
    assert display.frames[-1] == (2, True, None)


def test_keys_are_dropped_while_speaking(session):
    controller, speaker, display = session
    controller.handle(COMMIT)
    frames_before = len(display.frames)

    for command in (NEXT, NEXT, PREVIOUS, COMMIT, IGNORED):
        controller.handle(command)

    assert controller.state.position == 1
    assert controller.state.playing is True
    assert len(speaker.calls) == 1
    assert len(display.frames) == frames_before


def test_completion_returns_to_idle(session):
    controller, speaker, display = session
    controller.handle(COMMIT)
    speaker.finish(0)
    drain(controller)

    assert controller.state.playing is False
    assert display.frames[-1] == (1, False, None)

    controller.handle(NEXT)
    assert controller.state.position == 2


def test_failed_playback_shows_notice(session):
    controller, speaker, display = session
    controller.handle(COMMIT)
    speaker.finish(1)
    drain(controller)

    position, playing, notice = display.frames[-1]
    assert (position, playing) == (1, False)
    assert "status 1" in notice


def test_stale_completion_is_ignored(session):
    controller, _, display = session
    controller.handle(COMMIT)
    controller.handle(SpeechFinished(Playback("old")))
    assert controller.state.playing is True


def test_quit_key_skips_the_queue(session):
    controller, _, _ = session
    controller.on_key("right")
    controller.on_key("q")
    assert controller.quitting


def wait_for(condition, timeout=2):
    deadline = time.monotonic() + timeout
    while not condition() and time.monotonic() < deadline:
        time.sleep(0.01)


def test_run_processes_keys_until_quit(session):
    controller, speaker, display = session

    def keys():
        yield from ["right", "right", "right", "x", "left"]
        wait_for(lambda: controller.state.position == 2 and controller.events.empty())
        yield "ctrl-c"
        yield "right"

    controller.run(keys())

    assert controller.state.position == 2
    assert speaker.interrupted == 1
    assert display.frames[0] == (1, False, None)


def test_end_of_input_keeps_the_keys_before_it(session):
    controller, _, display = session
    controller.run(["right", "right", "right"])

    assert controller.quitting
    assert controller.state.position == 3
    assert display.frames[-1] == (3, False, None)


def test_end_of_input_waits_for_the_playback_it_follows(session):
    controller, speaker, display = session

    finished = threading.Event()
    worker = threading.Thread(target=lambda: (controller.run(["right", "return"]), finished.set()))
    worker.start()

    wait_for(lambda: speaker.calls)
    assert not finished.wait(0.1)
    speaker.finish(0)

    assert finished.wait(2)
    worker.join(2)
    assert speaker.calls == [("Two.", "Alex", False)]
    assert display.frames[-1] == (2, False, None)


def test_quit_while_speaking_does_not_wait(session):
    controller, speaker, _ = session

    def keys():
        yield "return"
        wait_for(lambda: controller.state.playing)
        yield "right"
        yield "ctrl-c"

    finished = threading.Event()
    worker = threading.Thread(target=lambda: (controller.run(keys()), finished.set()))
    worker.start()

    assert finished.wait(2)
    worker.join(2)
    # Playback never completed, session still ended
    assert not speaker.playbacks[0].done
    assert speaker.interrupted == 1
