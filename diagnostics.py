"""
Read-only inspection helpers behind the ``status``, ``explore``, ``detect``,
``trace`` and ``find-text`` commands. None of them press anything.
"""

from typing import List, Optional, Tuple

import element_finder as ef
from config import Settings
from ui_snapshot import ElementSnapshot, Role, TreeQuery
from views import VIEWS, classify

TEXT_ATTRS = ("AXValue", "AXTitle", "AXDescription")
MAX_TRACE_DEPTH = 30


def status(tree: TreeQuery, settings: Settings) -> str:
    """running / no_window / not_running"""
    process = tree.locate_process_by_name(settings.process_name, settings.bundle_id)
    if process is None:
        return "not_running"
    if tree.locate_window_by_title(process, settings.window_title) is None:
        return "no_window"
    return "running"


def explore_buttons(window: ElementSnapshot) -> List[Tuple[str, int, int]]:
    """Every button as (description, width, height), in document order."""
    out = []
    for el in ef.find_all(window, lambda e: e.role is Role.BUTTON):
        w, h = (int(el.size.width), int(el.size.height)) if el.size else (0, 0)
        out.append((el.description or "(no description)", w, h))
    return out


def detect_view(window: ElementSnapshot, views=VIEWS) -> str:
    view = classify(window, views)
    return view.name if view else "unknown"


def _short_role(tree: TreeQuery, el) -> str:
    role = tree.get_attribute(el, "AXRole")
    return str(role).replace("AX", "") if role else "?"


def trace_play_button(tree: TreeQuery, window: ElementSnapshot) -> Optional[str]:
    """Child-index path from the window down to the Play/Pause transport button."""
    button = ef.find_transport_button(window, ef.PLAY_PAUSE)
    if button is None:
        return None

    path = []
    current = button.handle
    for _ in range(MAX_TRACE_DEPTH):
        parent = tree.get_attribute(current, "AXParent")
        if parent is None:
            break
        key = tree.element_key(current)
        for idx, child in enumerate(tree.get_children(parent)):
            if tree.element_key(child) == key:
                path.insert(0, f"{_short_role(tree, current)}[{idx}]")
                break
        if Role.from_ax(tree.get_attribute(parent, "AXRole")) is Role.WINDOW:
            break
        current = parent
    return " > ".join(path)


def find_text(tree: TreeQuery, window: ElementSnapshot, pattern: str = "") -> List[str]:
    """``[role] attr: text`` for every text attribute containing ``pattern``."""
    pattern = pattern.lower()
    lines = []
    for el in ef.iter_elements(window):
        for attr in TEXT_ATTRS:
            value = tree.get_attribute(el.handle, attr)
            if not isinstance(value, str) or not value:
                continue
            if pattern and pattern not in value.lower():
                continue
            role = tree.get_attribute(el.handle, "AXRole") or "?"
            lines.append(f"[{role}] {attr}: {value}")
    return lines
