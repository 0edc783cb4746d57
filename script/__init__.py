# script/__init__.py
# Bridge file — phrase loading lives in script.core

from script.core import PhraseStore, parse_phrases, load_script
