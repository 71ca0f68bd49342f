"""In-memory accessibility tree with scripted JPLAY screens.

Every window lookup builds the current screen from scratch, like a live AX
query would, and pressing a button with ``goes_to`` switches the screen.
"""

PLAY_PID = 4242


class Node:
    def __init__(self, role, desc=None, size=None, title=None, value=None, children=(),
                 goes_to=None, reject=False):
        self.role = role
        self.desc = desc
        self.size = size
        self.title = title
        self.value = value
        self.children = list(children)
        self.goes_to = goes_to
        self.reject = reject
        self.parent = None
        for child in self.children:
            child.parent = self

    def __repr__(self):
        return f"<Node {self.role} {self.desc!r} {self.size}>"


def button(desc=None, w=30, h=30, **kw):
    return Node("AXButton", desc=desc, size=(w, h), **kw)


def text_field(**kw):
    return Node("AXTextField", size=(200, 22), **kw)


def label(text):
    return Node("AXStaticText", desc=text, size=(80, 16))


def group(*children):
    return Node("AXGroup", children=children)


def window(*children):
    return Node("AXWindow", title="JPLAY", children=children)


FAVORITE = "Not Favorite, tap to mark as favorite."


def search_screen(escape_to=None):
    return window(
        group(text_field(value="")),
        group(
            button("Previous", 30, 30),
            button("Play", 30, 30),
            button("Next", 30, 30),
            button(FAVORITE, 27, 20),
        ),
    )


def library_screen(escape_to="search"):
    return window(
        group(button("Search", 40, 30, goes_to=escape_to), button("Reload", 40, 30)),
        group(label("Albums"), button("Play", 85, 40)),
        group(
            button("Previous", 40, 40),
            button("Pause", 40, 40),
            button("Next", 40, 40),
            button(FAVORITE, 27, 20),
        ),
    )


def now_playing_screen(escape_to="library"):
    return window(
        button(None, 27, 33, goes_to=escape_to),
        group(text_field()),
        group(
            button("Previous", 60, 60),
            button("Play", 60, 60),
            button("Next", 60, 60),
            button(FAVORITE, 27, 20),
        ),
    )


def queue_screen(escape_to="now-playing"):
    return window(
        group(button(None, 56, 53), button(None, 56, 53, goes_to=escape_to)),
        group(label("Upcoming"), label("Track 2")),
        group(
            button("Previous", 60, 60),
            button("Pause", 60, 60),
            button("Next", 60, 60),
            button(FAVORITE, 27, 20),
        ),
    )


def blank_screen(escape_to=None):
    return window(group(label("Loading")))


SCREENS = {
    "search": search_screen,
    "library": library_screen,
    "now-playing": now_playing_screen,
    "queue": queue_screen,
    "blank": blank_screen,
}


class FakeTree:
    """TreeQuery over scripted screens.

    ``routes`` overrides where each screen's escape button leads;
    ``settle_polls`` makes the next N window lookups after a screen change
    return an unclassifiable blank window.
    """

    def __init__(self, current="library", routes=None, running=True, has_window=True,
                 settle_polls=0, reject_presses=False):
        self.current = current
        self.routes = dict(routes or {})
        self.running = running
        self.has_window = has_window
        self.settle_polls = settle_polls
        self.reject_presses = reject_presses
        self._pending_blank = 0
        self.presses = []
        self.focused = []
        self.activated = []
        self.window_lookups = 0

    def build(self, name):
        factory = SCREENS[name]
        if name in self.routes:
            return factory(escape_to=self.routes[name])
        return factory()

    # TreeQuery
    def get_attribute(self, element, name):
        return {
            "AXRole": element.role,
            "AXDescription": element.desc,
            "AXSize": element.size,
            "AXTitle": element.title,
            "AXValue": element.value,
            "AXParent": element.parent,
        }.get(name)

    def get_children(self, element):
        return list(element.children)

    def press(self, element):
        self.presses.append(element.desc or f"<{element.size[0]}x{element.size[1]}>")
        if self.reject_presses or element.reject:
            return False
        if element.goes_to and element.goes_to != self.current:
            self.current = element.goes_to
            self._pending_blank = self.settle_polls
        return True

    def focus(self, element):
        self.focused.append(element)
        return True

    def locate_process_by_name(self, name, bundle_id=None):
        return PLAY_PID if self.running else None

    def locate_window_by_title(self, process, title):
        self.window_lookups += 1
        if not self.has_window or title != "JPLAY":
            return None
        if self._pending_blank > 0:
            self._pending_blank -= 1
            return blank_screen()
        return self.build(self.current)

    def activate(self, process):
        self.activated.append(process)
        return True

    def element_key(self, element):
        return id(element)


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
