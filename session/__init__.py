# session/__init__.py
# Bridge file — interactive mode
# InteractiveController runs the loop, Display draws, advance() moves

from session.controller import InteractiveController, SessionState, SpeechFinished
from session.display import Display
from session.navigation import advance
