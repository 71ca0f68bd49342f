"""
Element Finder – stateless searches over accessibility snapshots
================================================================

Depth-first pre-order traversal in the document order reported by the tree,
plus the predicate families the view heuristics are built from.

Absent sizes or descriptions never satisfy a predicate that needs them.
Elements are compared by ``element_key`` so a tree that loops back on itself
is cut at the first revisit instead of recursing forever.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from ui_snapshot import ElementSnapshot, Role, snapshot

Predicate = Callable[[ElementSnapshot], bool]

# ---------------- Transport/size thresholds ----------------
# Transport buttons: >= 25px filters 12x14 glyph icons, <= 70px drops the
# 85px album-header Play button.
TRANSPORT_MIN_WIDTH = 25
TRANSPORT_MAX_WIDTH = 70
TRANSPORT_MIN_HEIGHT = 20

# Large (now playing / queue) transport is 50..70 square.
LARGE_TRANSPORT_MIN = 50
LARGE_TRANSPORT_MAX = 70

PLAY_PAUSE = ("Play", "Pause")


# ---------------- Traversal ----------------
def iter_elements(root: ElementSnapshot) -> Iterator[ElementSnapshot]:
    """Yield ``root`` and its descendants in pre-order, skipping revisits."""
    seen = set()
    stack = [iter((root,))]
    while stack:
        el = next(stack[-1], None)
        if el is None:
            stack.pop()
            continue
        if el.key in seen:
            continue
        seen.add(el.key)
        yield el
        stack.append(_iter_children(el))


def _iter_children(el: ElementSnapshot) -> Iterator[ElementSnapshot]:
    # Siblings are only read once the walk reaches them.
    for child in el.tree.get_children(el.handle):
        yield snapshot(el.tree, child)


def find_first(root: ElementSnapshot, predicate: Predicate) -> Optional[ElementSnapshot]:
    """Return the first element in document order matching ``predicate``."""
    for el in iter_elements(root):
        if predicate(el):
            return el
    return None


def find_all(root: ElementSnapshot, predicate: Predicate) -> List[ElementSnapshot]:
    """Return every element matching ``predicate`` (always a full walk)."""
    return [el for el in iter_elements(root) if predicate(el)]


# ---------------- Predicates ----------------
def _px(value: float) -> int:
    # AX reports fractional points; heuristics were tuned on whole pixels.
    return int(value)


def button_with_description(descriptions: Iterable[str]) -> Predicate:
    accepted = frozenset(descriptions)

    def _match(el: ElementSnapshot) -> bool:
        return el.role is Role.BUTTON and el.description is not None and el.description in accepted

    return _match


def unlabelled_button_of_size(width: int, height: int, tolerance: int) -> Predicate:
    def _match(el: ElementSnapshot) -> bool:
        if el.role is not Role.BUTTON or el.description is not None or el.size is None:
            return False
        return (abs(_px(el.size.width) - width) <= tolerance
                and abs(_px(el.size.height) - height) <= tolerance)

    return _match


def is_text_field(el: ElementSnapshot) -> bool:
    return el.role is Role.TEXT_FIELD


def button_in_size_range(min_width: int, min_height: int, max_width: int, max_height: int) -> Predicate:
    def _match(el: ElementSnapshot) -> bool:
        if el.role is not Role.BUTTON or el.size is None:
            return False
        w, h = _px(el.size.width), _px(el.size.height)
        return min_width <= w <= max_width and min_height <= h <= max_height

    return _match


def element_with_description(text: str) -> Predicate:
    """Any role whose description equals ``text`` exactly."""
    def _match(el: ElementSnapshot) -> bool:
        return el.description == text

    return _match


def transport_button(descriptions: Iterable[str]) -> Predicate:
    by_desc = button_with_description(descriptions)

    def _match(el: ElementSnapshot) -> bool:
        if not by_desc(el) or el.size is None:
            return False
        return (TRANSPORT_MIN_WIDTH <= el.size.width <= TRANSPORT_MAX_WIDTH
                and el.size.height >= TRANSPORT_MIN_HEIGHT)

    return _match


def favorite_button(descriptions: Iterable[str]) -> Predicate:
    """Transport-bar heart: wider than tall, or a small ~22x22 square.

    Track list hearts are 18x45/18x59 and must not match.
    """
    by_desc = button_with_description(descriptions)

    def _match(el: ElementSnapshot) -> bool:
        if not by_desc(el) or el.size is None:
            return False
        w, h = el.size.width, el.size.height
        return w >= h or (20 <= w <= 30 and h <= 30)

    return _match


# ---------------- Queries used by the views ----------------
def find_text_field(window: ElementSnapshot) -> Optional[ElementSnapshot]:
    return find_first(window, is_text_field)


def find_button_by_description(window: ElementSnapshot, descriptions: Iterable[str]) -> Optional[ElementSnapshot]:
    return find_first(window, button_with_description(descriptions))


def find_transport_button(window: ElementSnapshot, descriptions: Iterable[str]) -> Optional[ElementSnapshot]:
    return find_first(window, transport_button(descriptions))


def find_favorite_button(window: ElementSnapshot, descriptions: Iterable[str]) -> Optional[ElementSnapshot]:
    return find_first(window, favorite_button(descriptions))


def find_first_unlabelled_button(window: ElementSnapshot, width: int, height: int,
                                 tolerance: int = 2) -> Optional[ElementSnapshot]:
    return find_first(window, unlabelled_button_of_size(width, height, tolerance))


def collect_unlabelled_buttons(window: ElementSnapshot, width: int, height: int,
                               tolerance: int = 3) -> List[ElementSnapshot]:
    return find_all(window, unlabelled_button_of_size(width, height, tolerance))


def has_large_transport(window: ElementSnapshot) -> bool:
    pred = button_in_size_range(LARGE_TRANSPORT_MIN, LARGE_TRANSPORT_MIN,
                                LARGE_TRANSPORT_MAX, LARGE_TRANSPORT_MAX)
    return find_first(window, pred) is not None


def has_text_element(window: ElementSnapshot, text: str) -> bool:
    return find_first(window, element_with_description(text)) is not None
