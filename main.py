"""
=============================================================================
MSAY - main.py (Entry Point)
Version: 1.0

USAGE:
    msay <scriptfile> <index> [-v VOICE]      speak phrase <index> and exit
    msay <scriptfile> -i [-v VOICE]           interactive mode

INTERACTIVE KEYS (config.json → keys):
    right / down   next phrase
    left / up      previous phrase
    return / space speak the current phrase
    q / ctrl-c     quit

ERRORS:
    Every fatal error is printed to stderr, spoken aloud (quietly, if the
    engine works and announce_errors is on) and exits with status 1.
=============================================================================
"""

import argparse
import sys

import colorama
from colorama import Fore, Style

import config
from ears import KeyMap, KeyReader
from errors import EngineNotFound, InvalidArguments, MsayError
from mouth import Speaker
from script import load_script
from session import Display, InteractiveController


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but bad arguments are an InvalidArguments error (exit 1)."""

    def error(self, message):
        raise InvalidArguments(message)


def build_parser():
    parser = ArgumentParser(
        prog="msay",
        description="Speak the blank-line separated phrases of a script file."
    )
    parser.add_argument("scriptfile", help="text file, phrases separated by a blank line")
    parser.add_argument("index", nargs="?", help="1-based phrase number (default mode)")
    parser.add_argument("-i", dest="interactive", action="store_true",
                        help="interactive mode: choose phrases with the keyboard")
    parser.add_argument("-v", dest="voice", metavar="VOICE",
                        help="voice identifier passed to the speech engine")
    return parser


def parse_args(argv):
    args = build_parser().parse_args(argv)

    if args.interactive:
        # Index is accepted but has no meaning here
        args.index = None
        return args

    if args.index is None:
        raise InvalidArguments("Missing phrase index (or use -i for interactive mode)")
    try:
        args.index = int(args.index)
    except ValueError:
        raise InvalidArguments(f"Phrase index must be a whole number, got '{args.index}'")
    return args


def make_speaker():
    speech = config.KEY["speech"]
    return Speaker(engine=speech.get("engine", "auto"), rate=speech.get("rate", 190))


# =========================================================================
# MODES
# =========================================================================

def play_once(store, index, speaker, voice=None):
    """Default mode: speak one phrase and wait for it to finish."""
    text = store.phrase(index)
    print(Fore.GREEN + f"Playing {index}/{store.count}" + Style.RESET_ALL)
    playback = speaker.speak(text, voice=voice)
    playback.wait()

    failure = playback.describe_failure()
    if failure:
        print(Fore.YELLOW + f"[WARNING] {failure}" + Style.RESET_ALL, file=sys.stderr)
    return playback


def run_interactive(store, speaker, voice=None, reader=None):
    controller = InteractiveController(
        store,
        speaker,
        display=Display(label=config.KEY["display"].get("label", "Phrase")),
        keymap=KeyMap.from_config(config.KEY["keys"]),
        voice=voice
    )
    reader = reader or KeyReader()
    try:
        with reader as keys:
            controller.run(keys)
    except KeyboardInterrupt:
        speaker.interrupt()
    print()
    return controller


# =========================================================================
# ERROR ANNOUNCEMENT
# =========================================================================

def announce(error, speaker=None):
    """Print *error* to stderr and, when possible, speak it quietly."""
    print(Fore.RED + f"[ERROR] {error}" + Style.RESET_ALL, file=sys.stderr)

    if speaker is None or not config.KEY["speech"].get("announce_errors", True):
        return
    try:
        speaker.ensure_available()
        speaker.speak(error.message, quiet=True).wait()
    except MsayError:
        # Engine missing or busy: the printed message stands on its own
        return


def main(argv=None):
    colorama.just_fix_windows_console()
    argv = sys.argv[1:] if argv is None else argv

    speaker = None
    try:
        speaker = make_speaker()
        args = parse_args(argv)
        voice = args.voice or config.KEY["speech"].get("voice")

        store = load_script(args.scriptfile)
        speaker.ensure_available()

        if args.interactive:
            run_interactive(store, speaker, voice=voice)
        else:
            play_once(store, args.index, speaker, voice=voice)
    except EngineNotFound as e:
        announce(e)
        return 1
    except MsayError as e:
        announce(e, speaker)
        return 1
    except KeyboardInterrupt:
        if speaker is not None:
            speaker.interrupt()
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
