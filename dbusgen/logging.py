"""Logger hierarchy for dbusgen.

Every module logs through ``get_logger(<component>)`` so records end up
under ``dbusgen.<component>``. Only the CLI installs a handler, and it sends
records to stderr because ``dbusgen generate`` may write the module itself
to stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_ROOT = "dbusgen"
_FORMAT = "[dbusgen] %(levelname)s %(message)s"
_DEBUG_FORMAT = "[dbusgen] %(levelname)s %(name)s: %(message)s"


def get_logger(component: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_ROOT}.{component}" if component else _ROOT)


def log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI flags to a level; ``verbose`` wins when both are set."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install the single console handler of the ``dbusgen`` logger."""
    level = log_level(verbose=verbose, quiet=quiet)
    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT if verbose else _FORMAT))
    root.addHandler(handler)
    return root


__all__ = ["configure_logging", "get_logger", "log_level"]
