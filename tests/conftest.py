import pytest

from config import Settings
from fake_tree import FakeClock, FakeTree
from navigator import NavigationEngine
from ui_snapshot import snapshot


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_engine(clock):
    def _make(tree, **settings):
        return NavigationEngine(tree, Settings(**settings), clock=clock, sleep=clock.sleep)

    return _make


@pytest.fixture
def window_of():
    def _window(screen, **kw):
        tree = FakeTree(current=screen, **kw)
        return snapshot(tree, tree.locate_window_by_title(4242, "JPLAY"))

    return _window
