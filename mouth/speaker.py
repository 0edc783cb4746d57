"""
=============================================================================
MSAY - mouth/speaker.py (Subprocess TTS Worker)
Version: 1.0

PURPOSE:
    Runs as a SEPARATE PROCESS so it can be killed mid-sentence.
    Called by mouth/core.py via subprocess when the engine is pyttsx3.

USAGE:
    python -m mouth.speaker [--voice VOICE] [--rate N] [--quiet] -- "Text to speak"
=============================================================================
"""

import argparse
import sys

import pyttsx3


def pick_voice(engine, wanted):
    """Match a pyttsx3 voice by exact id, then by name substring."""
    voices = engine.getProperty('voices')
    for voice in voices:
        if voice.id == wanted:
            return voice.id
    for voice in voices:
        if wanted.lower() in (voice.name or "").lower():
            return voice.id
    return None


def speak_text(text, voice=None, rate=190, quiet=False):
    if not quiet:
        # The parent terminal may be in raw mode
        print(f"🔊 {text}", end="\r\n", flush=True)

    engine = pyttsx3.init()
    if voice:
        voice_id = pick_voice(engine, voice)
        if voice_id is None:
            print(f"[SPEAKER SUBPROCESS] Unknown voice '{voice}', using default", file=sys.stderr)
        else:
            engine.setProperty('voice', voice_id)
    engine.setProperty('rate', rate)
    engine.setProperty('volume', 1.0)
    engine.say(text)
    engine.runAndWait()


def main(argv=None):
    parser = argparse.ArgumentParser(prog="mouth.speaker")
    parser.add_argument("--voice")
    parser.add_argument("--rate", type=int, default=190)
    parser.add_argument("--quiet", action="store_true")
    parser.add_argument("text", nargs="+")
    args = parser.parse_args(argv)

    try:
        speak_text(" ".join(args.text), voice=args.voice, rate=args.rate, quiet=args.quiet)
    except Exception as e:
        print(f"[SPEAKER SUBPROCESS] Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
