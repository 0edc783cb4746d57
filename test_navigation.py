import pytest

from ears.keys import NavigationCommand
from session.navigation import advance

NEXT = NavigationCommand.NEXT
PREVIOUS = NavigationCommand.PREVIOUS


@pytest.mark.parametrize("count", [1, 2, 5])
def test_never_leaves_bounds(count):
    for position in range(1, count + 1):
        assert 1 <= advance(position, NEXT, count) <= count
        assert 1 <= advance(position, PREVIOUS, count) <= count


def test_saturates_at_both_ends():
    assert advance(1, PREVIOUS, 4) == 1
    assert advance(4, NEXT, 4) == 4


def test_next_then_previous_returns_home():
    for position in range(1, 6):
        assert advance(advance(position, NEXT, 6), PREVIOUS, 6) == position


@pytest.mark.parametrize("command", [NavigationCommand.COMMIT, NavigationCommand.IGNORED])
def test_commit_and_ignored_do_not_move(command):
    assert advance(3, command, 5) == 3
