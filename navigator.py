"""
Navigation Engine
=================

Blind navigation over the player's UI: the only feedback channel is a fresh
snapshot of the window tree, so every step is

    locate window -> classify view -> perform, or escape and poll -> repeat

for at most ``max_depth`` attempts. Each attempt issues at most one press,
which bounds the number of UI mutations per call even when two views escape
into each other.

The poll after an escape accepts any classified view, not only a different
one: an escape can be a visual no-op and still be the right step, and the
next attempt re-evaluates performability anyway.

Every failure is a ``NavigationError`` internally (for the debug trace) and a
plain ``False`` at the boundary.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from capabilities import Action, Capability
from config import Settings
from errors import (
    ActionRejected,
    ClassificationFailure,
    DepthExhausted,
    NavigationError,
    NavigationTimeout,
    TargetNotRunning,
    WindowNotFound,
)
from ui_snapshot import ElementSnapshot, TreeQuery, snapshot
from views import VIEWS, ViewDescriptor, classify

PERFORMED = "performed"
ESCAPED = "escaped"
FAILED = "failed"


@dataclass
class NavigationAttempt:
    index: int
    view: Optional[str] = None
    outcome: Optional[str] = None


@dataclass
class NavigationResult:
    action: Action
    succeeded: bool
    attempts: List[NavigationAttempt] = field(default_factory=list)
    error: Optional[NavigationError] = None


class NavigationEngine:
    """Drive the player toward a view where ``action`` can be performed."""

    def __init__(self, tree: TreeQuery, settings: Optional[Settings] = None,
                 logger: Optional[logging.Logger] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep,
                 views: Sequence[ViewDescriptor] = VIEWS):
        self.tree = tree
        self.settings = settings or Settings()
        self.log = logger or logging.getLogger(__name__)
        self.clock = clock
        self.sleep = sleep
        self.views = tuple(views)

    # ---------------- Target lookup ----------------
    def locate_window(self) -> Tuple[Any, ElementSnapshot]:
        """Return (process, fresh window snapshot) of the target app."""
        s = self.settings
        process = self.tree.locate_process_by_name(s.process_name, s.bundle_id)
        if process is None:
            self.log.error("%s not running", s.process_name)
            raise TargetNotRunning(f"{s.process_name} not running")
        window = self.tree.locate_window_by_title(process, s.window_title)
        if window is None:
            self.log.error("%s window not found", s.window_title)
            raise WindowNotFound(f"{s.window_title} window not found")
        return process, snapshot(self.tree, window)

    def classify(self, window: ElementSnapshot) -> Optional[ViewDescriptor]:
        return classify(window, self.views)

    # ---------------- Polling ----------------
    def poll_for_view(self, original: Optional[ViewDescriptor] = None) -> ViewDescriptor:
        """Re-classify every ``poll_interval`` until any view matches.

        Raises NavigationTimeout once ``timeout`` seconds have passed.
        """
        timeout = self.settings.timeout
        start = self.clock()
        polls = 0
        while self.clock() - start < timeout:
            _, window = self.locate_window()
            polls += 1
            view = self.classify(window)
            if view is not None:
                if view is not original:
                    self.log.debug("poll %d: changed to %s", polls, view.name)
                return view
            self.sleep(self.settings.poll_interval)
        raise NavigationTimeout(f"no view recognised within {timeout:.2f}s after {polls} polls")

    # ---------------- Main loop ----------------
    def _step(self, action: Action, attempt: NavigationAttempt) -> bool:
        """One attempt. True when the action was performed, False after an escape."""
        process, window = self.locate_window()
        view = self.classify(window)
        if view is None:
            self.log.debug("no view matched for attempt %d", attempt.index)
            raise ClassificationFailure("window matches no known view")
        attempt.view = view.name
        self.log.debug("matched %s", view.name)

        if view.capabilities(action) is Capability.PERFORMABLE:
            self.log.debug("performing %s in %s", action.value, view.name)
            if not view.perform(action, window, process):
                raise ActionRejected(f"{action.value} not performed in {view.name}")
            attempt.outcome = PERFORMED
            return True

        self.log.debug("escaping from %s", view.name)
        if not view.escape(window):
            self.log.debug("escape failed")
            raise ActionRejected(f"escape from {view.name} failed")
        attempt.outcome = ESCAPED
        self.poll_for_view(view)
        return False

    def run(self, action: Action) -> NavigationResult:
        attempts: List[NavigationAttempt] = []
        try:
            for index in range(self.settings.max_depth):
                attempt = NavigationAttempt(index)
                attempts.append(attempt)
                if self._step(action, attempt):
                    return NavigationResult(action, True, attempts)
            self.log.debug("max depth reached")
            raise DepthExhausted(f"no performable view after {self.settings.max_depth} attempts")
        except NavigationError as err:
            last = attempts[-1] if attempts else None
            if last is not None and last.outcome is None:
                last.outcome = FAILED
            if err.action is None:
                err.action = action
            if err.attempt is None and last is not None:
                err.attempt = last.index
            if err.view is None and last is not None:
                err.view = last.view
            self.log.debug("%s: %s %s", err.kind, err, err.context())
            return NavigationResult(action, False, attempts, err)

    def execute(self, action: Action) -> bool:
        return self.run(action).succeeded
