"""
AX Tree – macOS Accessibility backend for the navigation core
==============================================================

Implements the ``TreeQuery`` interface over pyobjc's bindings of the AX API:
attribute reads, child enumeration, AXPress, AXFocused, running-app lookup
through NSWorkspace and window lookup by AXTitle.

The calling process (Terminal, iTerm, the launchd agent...) must be granted
Accessibility access in System Settings → Privacy & Security → Accessibility.
"""

import logging
from typing import Any, Hashable, List, Optional

import objc
import Quartz

# ---------------- Accessibility (direct first, fallback bind) ----------------
AX_DIRECT_OK = True
try:
    from ApplicationServices import (
        AXIsProcessTrusted,
        AXUIElementCopyAttributeValue,
        AXUIElementCreateApplication,
        AXUIElementPerformAction,
        AXUIElementSetAttributeValue,
        AXValueGetValue,
        kAXValueCGSizeType,
    )
except ImportError:
    AX_DIRECT_OK = False

if not AX_DIRECT_OK:
    framework = objc.loadBundle(
        "ApplicationServices",
        bundle_path="/System/Library/Frameworks/ApplicationServices.framework",
        module_globals=globals(),
    )
    objc.loadBundleFunctions(framework, globals(), [
        ("AXUIElementCreateApplication", b"^{__AXUIElement=}i"),
        ("AXUIElementCopyAttributeValue", b"i^{__AXUIElement=}@o^@"),
        ("AXUIElementPerformAction", b"i^{__AXUIElement=}@"),
        ("AXUIElementSetAttributeValue", b"i^{__AXUIElement=}@@"),
        ("AXIsProcessTrusted", b"Z"),
        ("AXValueGetValue", b"Z^{__AXValue=}I^v"),
    ])
    kAXValueCGSizeType = 2

from AppKit import NSApplicationActivateIgnoringOtherApps, NSRunningApplication, NSWorkspace

logger = logging.getLogger(__name__)

kAXErrorSuccess = 0

# AX attribute names, taken from the framework constants when exported.
ATTR = {
    "AXRole": getattr(Quartz, "kAXRoleAttribute", "AXRole"),
    "AXTitle": getattr(Quartz, "kAXTitleAttribute", "AXTitle"),
    "AXValue": getattr(Quartz, "kAXValueAttribute", "AXValue"),
    "AXDescription": getattr(Quartz, "kAXDescriptionAttribute", "AXDescription"),
    "AXParent": getattr(Quartz, "kAXParentAttribute", "AXParent"),
    "AXChildren": getattr(Quartz, "kAXChildrenAttribute", "AXChildren"),
    "AXFocused": getattr(Quartz, "kAXFocusedAttribute", "AXFocused"),
    "AXSize": getattr(Quartz, "kAXSizeAttribute", "AXSize"),
    "AXWindows": getattr(Quartz, "kAXWindowsAttribute", "AXWindows"),
}

AX_PRESS = getattr(Quartz, "kAXPressAction", "AXPress")


# ---------------- AX API Wrappers ----------------
def _err_of(res) -> int:
    # Some bindings return (err, None)
    if isinstance(res, tuple):
        return res[0]
    return res


def AXGet(el, attr):
    """Get AX attribute, None on any AX error."""
    if el is None:
        return None
    try:
        res = AXUIElementCopyAttributeValue(el, ATTR.get(attr, attr), None)
    except Exception as e:
        logger.debug("AX read of %s failed: %s", attr, e)
        return None
    if isinstance(res, tuple) and len(res) == 2:
        err, v = res
        return v if err == kAXErrorSuccess else None
    return None


def decode_size(v):
    """AXValue(CGSize) -> (w, h)."""
    if v is None:
        return None
    try:
        out = AXValueGetValue(v, kAXValueCGSizeType, None)
    except (TypeError, ValueError) as e:
        logger.debug("AXSize decode failed: %s", e)
        return None
    size = out[1] if isinstance(out, tuple) else out
    if not size:
        return None
    try:
        return float(size.width), float(size.height)
    except AttributeError:
        w, h = size
        return float(w), float(h)


def ensure_trust() -> bool:
    """Warn when this process may not read other apps' AX trees."""
    trusted = bool(AXIsProcessTrusted())
    if not trusted:
        logger.warning("Enable Accessibility for this terminal: System Settings → "
                       "Privacy & Security → Accessibility")
    return trusted


# ---------------- TreeQuery implementation ----------------
class AXTreeQuery:
    """Live accessibility tree of running macOS applications."""

    def get_attribute(self, element: Any, name: str) -> Any:
        value = AXGet(element, name)
        if name == "AXSize":
            return decode_size(value)
        return value

    def get_children(self, element: Any) -> List[Any]:
        children = AXGet(element, "AXChildren")
        return list(children) if children else []

    def press(self, element: Any) -> bool:
        err = _err_of(AXUIElementPerformAction(element, AX_PRESS))
        if err != kAXErrorSuccess:
            logger.debug("AXPress failed: %s", err)
        return err == kAXErrorSuccess

    def focus(self, element: Any) -> bool:
        err = _err_of(AXUIElementSetAttributeValue(element, ATTR["AXFocused"], True))
        return err == kAXErrorSuccess

    def locate_process_by_name(self, name: str, bundle_id: Optional[str] = None) -> Optional[int]:
        """PID of the first running app with this localized name or bundle id."""
        for app in NSWorkspace.sharedWorkspace().runningApplications():
            app_name = str(app.localizedName()) if app.localizedName() else None
            app_bundle = str(app.bundleIdentifier()) if app.bundleIdentifier() else None
            if app_name == name or (bundle_id and app_bundle == bundle_id):
                return int(app.processIdentifier())
        return None

    def locate_window_by_title(self, process: int, title: str) -> Any:
        app_el = AXUIElementCreateApplication(process)
        windows = AXGet(app_el, "AXWindows")
        if not windows:
            logger.debug("could not get windows for pid %s", process)
            return None
        for window in windows:
            if AXGet(window, "AXTitle") == title:
                return window
        return None

    def activate(self, process: int) -> bool:
        app = NSRunningApplication.runningApplicationWithProcessIdentifier_(process)
        if app is None:
            return False
        return bool(app.activateWithOptions_(NSApplicationActivateIgnoringOtherApps))

    def element_key(self, element: Any) -> Hashable:
        # AXUIElementRef proxies hash and compare through CFHash/CFEqual.
        return element
