"""Failure kinds of the navigation core.

They never leave the core: ``NavigationEngine.run`` catches them, logs the
context and reports a plain failure.
"""

from typing import Optional


class NavigationError(Exception):
    kind = "navigation_error"

    def __init__(self, message: str, *, action=None, attempt: Optional[int] = None,
                 view: Optional[str] = None):
        super().__init__(message)
        self.action = action
        self.attempt = attempt
        self.view = view

    def context(self) -> dict:
        return {
            "kind": self.kind,
            "action": getattr(self.action, "value", self.action),
            "attempt": self.attempt,
            "view": self.view,
        }


class TargetNotRunning(NavigationError):
    kind = "target_not_running"


class WindowNotFound(NavigationError):
    kind = "window_not_found"


class ClassificationFailure(NavigationError):
    kind = "classification_failure"


class ElementNotFound(NavigationError):
    kind = "element_not_found"


class ActionRejected(NavigationError):
    kind = "action_rejected"


class NavigationTimeout(NavigationError):
    kind = "navigation_timeout"


class DepthExhausted(NavigationError):
    kind = "depth_exhausted"
