# mouth/__init__.py
# Bridge file — one import point for speech
# Speaker owns the TTS process, Playback is its completion signal

from mouth.core import Speaker, Playback, escape_text, build_command
