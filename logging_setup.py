import logging
import sys

LOG_FORMAT = "%(levelname)s: %(message)s"

_stderr_handler = None


def setup_logging(verbose: bool = False) -> logging.Handler:
    """Send log records to stderr; ``verbose`` turns on the debug trace."""
    global _stderr_handler
    root = logging.getLogger()
    if _stderr_handler is not None:
        root.removeHandler(_stderr_handler)
    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(_stderr_handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return _stderr_handler
