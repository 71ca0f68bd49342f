import pytest

from capabilities import Action, Capability
from fake_tree import FakeTree, button, label, text_field, window
from ui_snapshot import snapshot
from views import VIEWS, LibraryView, NowPlayingView, QueueView, SearchView, classify


def snap(node):
    return snapshot(FakeTree(), node)


@pytest.mark.parametrize("screen", ["search", "library", "now-playing", "queue"])
def test_scripted_screens_classify_to_their_view(window_of, screen):
    assert classify(window_of(screen)).name == screen


def test_registry_priority_order():
    assert [v.name for v in VIEWS] == ["search", "queue", "now-playing", "library"]


def test_unknown_window_classifies_to_none(window_of):
    assert classify(window_of("blank")) is None


def test_hidden_text_field_does_not_make_now_playing_a_search_view(window_of):
    win = window_of("now-playing")
    assert isinstance(classify(win), NowPlayingView)
    assert not SearchView().matches(win)


def test_queue_wins_over_now_playing_by_order():
    win = snap(window(label("Upcoming"), button("Play", 60, 60)))
    assert QueueView().matches(win)
    assert not NowPlayingView().matches(win)
    assert isinstance(classify(win), QueueView)


def test_search_view_outranks_library_when_both_match():
    # Search field plus a "Search" button and small transport: both predicates hold.
    win = snap(window(text_field(), button("Search", 40, 30), button("Play", 40, 40)))
    assert LibraryView().matches(win)
    assert isinstance(classify(win), SearchView)


def test_library_requires_small_transport():
    assert LibraryView().matches(snap(window(button("Search"), button("Pause", 50, 40))))
    assert not LibraryView().matches(snap(window(button("Search"), button("Pause", 51, 40))))
    assert not LibraryView().matches(snap(window(button("Search"))))


def test_first_match_is_authoritative_for_custom_order(window_of):
    win = window_of("queue")
    order = (NowPlayingView(), LibraryView(), QueueView())
    assert isinstance(classify(win, order), QueueView)
    assert classify(win, (LibraryView(),)) is None


def test_classification_is_deterministic(window_of):
    for screen in ("search", "library", "now-playing", "queue", "blank"):
        win = window_of(screen)
        results = {getattr(classify(win), "name", None) for _ in range(5)}
        assert len(results) == 1


@pytest.mark.parametrize("action", list(Action))
def test_search_view_can_perform_everything(action):
    assert SearchView().capabilities(action) is Capability.PERFORMABLE


@pytest.mark.parametrize("view", [LibraryView(), NowPlayingView(), QueueView()])
def test_other_views_need_escape_for_focus_search(view):
    assert view.capabilities(Action.FOCUS_SEARCH) is Capability.REQUIRES_ESCAPE
    for action in (Action.PLAY, Action.NEXT, Action.PREVIOUS, Action.TOGGLE_FAVORITE):
        assert view.capabilities(action) is Capability.PERFORMABLE


def test_views_registry_holds_one_instance_per_view():
    assert len({type(v) for v in VIEWS}) == len(VIEWS)
