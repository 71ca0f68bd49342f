"""
View Capability Table
=====================

For every view: which actions can be performed in place, and the single press
("escape") that moves the player toward a view where the rest become possible.

Search is the sink of the escape graph: everything is performable there.
Library escapes into Search; Now Playing and Queue close their overlays and
land back in Library or Search. Nothing here proves the graph acyclic; the
engine's depth bound is the only guard.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional

import element_finder as ef
from errors import ActionRejected, ElementNotFound
from ui_snapshot import ElementSnapshot

logger = logging.getLogger(__name__)


class Action(Enum):
    PLAY = "play"
    NEXT = "next"
    PREVIOUS = "previous"
    TOGGLE_FAVORITE = "toggle-favorite"
    FOCUS_SEARCH = "focus-search"

    @classmethod
    def parse(cls, name: str) -> "Action":
        name = (name or "").strip().lower()
        name = _LEGACY_NAMES.get(name, name)
        return cls(name)


_LEGACY_NAMES = {
    "prev": "previous",
    "toggle-like": "toggle-favorite",
    "search": "focus-search",
}


class Capability(Enum):
    PERFORMABLE = "performable"
    REQUIRES_ESCAPE = "requires_escape"


FAVORITE_DESCRIPTIONS = (
    "Not Favorite, tap to mark as favorite.",
    "Is Favorite, tap to unfavorite.",
)

TRANSPORT_DESCRIPTIONS = {
    Action.PLAY: ef.PLAY_PAUSE,
    Action.NEXT: ("Next",),
    Action.PREVIOUS: ("Previous",),
}

# Escape controls (no AXDescription, identified by size only)
CHEVRON_SIZE = (27, 33)          # now playing "back" chevron
CHEVRON_TOLERANCE = 2
QUEUE_CLOSE_SIZE = (56, 53)      # queue panel X, 2nd after Renderer Selection
QUEUE_CLOSE_TOLERANCE = 3


# ---------------- Press helpers ----------------
def _press(el: ElementSnapshot, what: str) -> bool:
    if not el.tree.press(el.handle):
        raise ActionRejected(f"press on {what} rejected")
    logger.debug("pressed %s", what)
    return True


def _require(el: Optional[ElementSnapshot], what: str) -> ElementSnapshot:
    if el is None:
        raise ElementNotFound(f"{what} not found")
    return el


# ---------------- Actions ----------------
def _focus_search(window: ElementSnapshot, process: Any = None) -> bool:
    field = _require(ef.find_text_field(window), "search text field")
    tree = field.tree
    if tree.press(field.handle):
        logger.debug("clicked text field")
    elif tree.focus(field.handle):
        logger.debug("set focus attribute")
    else:
        raise ActionRejected("search text field refused press and focus")
    if process is not None:
        tree.activate(process)
    return True


def perform_action(action: Action, window: ElementSnapshot, process: Any = None) -> bool:
    """Perform ``action`` against the controls of ``window``.

    Raises ElementNotFound / ActionRejected on failure.
    """
    if action is Action.FOCUS_SEARCH:
        return _focus_search(window, process)
    if action is Action.TOGGLE_FAVORITE:
        btn = ef.find_favorite_button(window, FAVORITE_DESCRIPTIONS)
        return _press(_require(btn, "favorite button"), "favorite button")
    descriptions = TRANSPORT_DESCRIPTIONS[action]
    what = f"{'/'.join(descriptions)} transport button"
    return _press(_require(ef.find_transport_button(window, descriptions), what), what)


# ---------------- Escapes ----------------
def _no_escape(window: ElementSnapshot) -> bool:
    raise ActionRejected("view has no escape maneuver")


def _escape_library(window: ElementSnapshot) -> bool:
    btn = ef.find_button_by_description(window, ["Search"])
    return _press(_require(btn, "Search button"), "Search button")


def _escape_now_playing(window: ElementSnapshot) -> bool:
    chevron = ef.find_first_unlabelled_button(window, *CHEVRON_SIZE, tolerance=CHEVRON_TOLERANCE)
    return _press(_require(chevron, "back chevron"), "back chevron")


def _escape_queue(window: ElementSnapshot) -> bool:
    buttons = ef.collect_unlabelled_buttons(window, *QUEUE_CLOSE_SIZE, tolerance=QUEUE_CLOSE_TOLERANCE)
    if len(buttons) < 2:
        raise ElementNotFound(f"queue close button not found ({len(buttons)} candidates)")
    return _press(buttons[1], "queue close button")


# ---------------- Table ----------------
@dataclass(frozen=True)
class ViewCapabilities:
    performable: FrozenSet[Action]
    escape: Callable[[ElementSnapshot], bool]

    def capability(self, action: Action) -> Capability:
        if action in self.performable:
            return Capability.PERFORMABLE
        return Capability.REQUIRES_ESCAPE


_ALL = frozenset(Action)
_TRANSPORT_ONLY = _ALL - {Action.FOCUS_SEARCH}

CAPABILITY_TABLE: Dict[str, ViewCapabilities] = {
    "search": ViewCapabilities(_ALL, _no_escape),
    "queue": ViewCapabilities(_TRANSPORT_ONLY, _escape_queue),
    "now-playing": ViewCapabilities(_TRANSPORT_ONLY, _escape_now_playing),
    "library": ViewCapabilities(_TRANSPORT_ONLY, _escape_library),
}
