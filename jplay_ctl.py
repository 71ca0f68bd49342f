#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
jplay-ctl - Control JPLAY (UPnP Player) via macOS accessibility APIs
====================================================================

Usage:
    jplay-ctl [-v] play           Toggle play/pause
    jplay-ctl [-v] next           Next track
    jplay-ctl [-v] prev           Previous track
    jplay-ctl [-v] toggle-like    Toggle favorite
    jplay-ctl [-v] search         Focus search bar
    jplay-ctl status              Show current state
    jplay-ctl explore             List buttons of the JPLAY window
    jplay-ctl detect              Print the detected view
    jplay-ctl trace               Print the path to the Play button
    jplay-ctl find-text [TEXT]    List text attributes containing TEXT

Options:
    -v, --verbose  Show debug output

Action commands exit 0 on success and 1 on failure.
"""

import sys

import diagnostics
from capabilities import Action
from config import Settings
from logging_setup import setup_logging
from navigator import NavigationEngine
from ui_snapshot import snapshot

DIAGNOSTIC_COMMANDS = ("status", "explore", "detect", "trace", "find-text")


USAGE = """\
JPlay CLI - Control JPlay (UPnP Player) via macOS accessibility APIs.

Usage:
  jplay-ctl [-v] play         Toggle play/pause
  jplay-ctl [-v] next         Next track
  jplay-ctl [-v] prev         Previous track
  jplay-ctl [-v] toggle-like  Toggle favorite
  jplay-ctl [-v] search       Focus search bar
  jplay-ctl status            Show current state

Options:
  -v, --verbose  Show debug output"""


def print_usage(stream=None):
    print(USAGE, file=stream or sys.stdout)


class JPlayCLI:
    """Command dispatch: actions go through the navigation engine, diagnostics read only."""

    def __init__(self, tree=None, settings=None):
        if tree is None:
            from ax_tree import AXTreeQuery, ensure_trust
            ensure_trust()
            tree = AXTreeQuery()
        self.tree = tree
        self.settings = settings or Settings.from_env()

    def parse_args(self, argv):
        """Split ``-v/--verbose`` from the command and its arguments."""
        args = {"verbose": self.settings.verbose, "command": None, "rest": []}
        positional = []
        for arg in argv:
            if arg in ("-v", "--verbose"):
                args["verbose"] = True
            else:
                positional.append(arg)
        if positional:
            args["command"] = positional[0]
            args["rest"] = positional[1:]
        return args

    def _window(self):
        process = self.tree.locate_process_by_name(self.settings.process_name, self.settings.bundle_id)
        if process is None:
            print(f"error: {self.settings.process_name} not running", file=sys.stderr)
            return None
        window = self.tree.locate_window_by_title(process, self.settings.window_title)
        if window is None:
            print(f"error: {self.settings.window_title} window not found", file=sys.stderr)
            return None
        return snapshot(self.tree, window)

    def _diagnose(self, command, rest):
        if command == "status":
            print(diagnostics.status(self.tree, self.settings))
            return 0
        window = self._window()
        if window is None:
            return 0
        if command == "explore":
            for desc, w, h in diagnostics.explore_buttons(window):
                print(f"{desc} ({w}x{h})")
        elif command == "detect":
            print(diagnostics.detect_view(window))
        elif command == "trace":
            path = diagnostics.trace_play_button(self.tree, window)
            print(path if path is not None else "Play button not found")
        elif command == "find-text":
            pattern = rest[0] if rest else ""
            for line in diagnostics.find_text(self.tree, window, pattern):
                print(line)
        return 0

    def run(self, argv):
        """Main execution logic. Returns the process exit code."""
        args = self.parse_args(argv)
        setup_logging(args["verbose"])

        command = args["command"]
        if command is None:
            print_usage()
            return 1
        if command in DIAGNOSTIC_COMMANDS:
            return self._diagnose(command, args["rest"])
        try:
            action = Action.parse(command)
        except ValueError:
            print(f"Unknown command: {command}", file=sys.stderr)
            print_usage(sys.stderr)
            return 1
        engine = NavigationEngine(self.tree, self.settings)
        return 0 if engine.execute(action) else 1


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    return JPlayCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
