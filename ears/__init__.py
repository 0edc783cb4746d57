# ears/__init__.py
# Bridge file — keyboard input and what the keys mean
# KeyReader yields key names, KeyMap turns them into NavigationCommands

from ears.core import KeyReader, key_name
from ears.keys import KeyMap, NavigationCommand, QUIT
