"""
View Classifier
===============

JPLAY exposes no identifiers for its screens, so the current view is inferred
from structural signals: a search field, the size of the play/pause button,
the "Upcoming" queue label, a "Search" navigation button.

The predicates overlap (the search field stays in the tree, hidden, on other
screens). They are evaluated in the fixed order of ``VIEWS``, most restrictive
first, and the first match is authoritative.
"""

from typing import Any, Optional, Sequence

import element_finder as ef
from capabilities import CAPABILITY_TABLE, Action, Capability, perform_action
from ui_snapshot import ElementSnapshot

UPCOMING_LABEL = "Upcoming"
SMALL_TRANSPORT_MAX_WIDTH = 50


class ViewDescriptor:
    """A logical screen of the player.

    ``perform`` and ``escape`` return True once their press went through. Failures
    either return False or raise a ``NavigationError`` subclass carrying the
    reason; the engine treats both as a rejected action.
    """

    name = "view"

    def matches(self, window: ElementSnapshot) -> bool:
        raise NotImplementedError

    def capabilities(self, action: Action) -> Capability:
        return CAPABILITY_TABLE[self.name].capability(action)

    def perform(self, action: Action, window: ElementSnapshot, process: Any = None) -> bool:
        return perform_action(action, window, process)

    def escape(self, window: ElementSnapshot) -> bool:
        return CAPABILITY_TABLE[self.name].escape(window)

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class SearchView(ViewDescriptor):
    """Text field and no large transport (large transport means Now Playing/Queue)."""

    name = "search"

    def matches(self, window):
        if ef.find_text_field(window) is None:
            return False
        return not ef.has_large_transport(window)


class QueueView(ViewDescriptor):
    """Queue panel (the "Upcoming" label) over the large transport."""

    name = "queue"

    @staticmethod
    def has_upcoming_label(window: ElementSnapshot) -> bool:
        return ef.has_text_element(window, UPCOMING_LABEL)

    def matches(self, window):
        return self.has_upcoming_label(window) and ef.has_large_transport(window)


class NowPlayingView(ViewDescriptor):
    name = "now-playing"

    def matches(self, window):
        if QueueView.has_upcoming_label(window):
            return False
        return ef.has_large_transport(window)


class LibraryView(ViewDescriptor):
    """Search navigation button plus the small (<=50px) transport bar."""

    name = "library"

    def matches(self, window):
        if ef.find_button_by_description(window, ["Search"]) is None:
            return False
        play = ef.find_transport_button(window, ef.PLAY_PAUSE)
        if play is None or play.size is None:
            return False
        return play.size.width <= SMALL_TRANSPORT_MAX_WIDTH


# Order matters: more specific views first
VIEWS = (
    SearchView(),
    QueueView(),
    NowPlayingView(),
    LibraryView(),
)


def classify(window: ElementSnapshot, views: Sequence[ViewDescriptor] = VIEWS) -> Optional[ViewDescriptor]:
    """Return the first view in priority order whose predicate matches."""
    for view in views:
        if view.matches(window):
            return view
    return None

