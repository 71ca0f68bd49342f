"""
UI Snapshot – read-only projection of accessibility elements
=============================================================

The navigation core never talks to the Accessibility API directly. It consumes
a small tree-query interface (``TreeQuery``) and works on ``ElementSnapshot``
values built from it, so every heuristic can run against synthetic trees.

Snapshots carry no identity across queries: the target app rewrites its tree
between presses, so a snapshot is rebuilt on every classification pass and its
children are re-queried on every access.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, List, Optional, Protocol


class Role(Enum):
    """Element roles the view heuristics care about."""

    BUTTON = "AXButton"
    TEXT_FIELD = "AXTextField"
    STATIC_TEXT = "AXStaticText"
    GROUP = "AXGroup"
    WINDOW = "AXWindow"
    OTHER = "other"

    @classmethod
    def from_ax(cls, raw: Any) -> "Role":
        if raw is None:
            return cls.OTHER
        raw = str(raw)
        for role in cls:
            if role.value == raw:
                return role
        return cls.OTHER


class TreeQuery(Protocol):
    """Interface to the platform accessibility tree."""

    def get_attribute(self, element: Any, name: str) -> Any: ...

    def get_children(self, element: Any) -> List[Any]: ...

    def press(self, element: Any) -> bool: ...

    def focus(self, element: Any) -> bool: ...

    def locate_process_by_name(self, name: str, bundle_id: Optional[str] = None) -> Any: ...

    def locate_window_by_title(self, process: Any, title: str) -> Any: ...

    def activate(self, process: Any) -> bool: ...

    def element_key(self, element: Any) -> Hashable: ...


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class ElementSnapshot:
    """Attributes of one element as read at query time."""

    handle: Any
    role: Role
    description: Optional[str]
    size: Optional[Size]
    tree: TreeQuery = field(repr=False, compare=False)

    @property
    def key(self) -> Hashable:
        return self.tree.element_key(self.handle)

    @property
    def children(self) -> List["ElementSnapshot"]:
        """Fresh snapshots of the children, in document order."""
        return [snapshot(self.tree, child) for child in self.tree.get_children(self.handle)]


def _decode_size(value: Any) -> Optional[Size]:
    if value is None:
        return None
    try:
        w, h = value
        return Size(float(w), float(h))
    except (TypeError, ValueError):
        return None


def _decode_description(value: Any) -> Optional[str]:
    if not isinstance(value, str) or value == "":
        return None
    return value


def snapshot(tree: TreeQuery, element: Any) -> ElementSnapshot:
    """Read role, description and size of a live element."""
    return ElementSnapshot(
        handle=element,
        role=Role.from_ax(tree.get_attribute(element, "AXRole")),
        description=_decode_description(tree.get_attribute(element, "AXDescription")),
        size=_decode_size(tree.get_attribute(element, "AXSize")),
        tree=tree,
    )
