"""Logging configuration for the simulation and the API server."""

from __future__ import annotations

import logging
import sys
from typing import IO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s"

# Per-tick chatter from these modules is only useful when chasing a single unit.
_CHATTY = ("hive.ai.movement", "hive.actions.move", "hive.engine.conflict_resolver")


def setup_logging(
    level: str = "INFO",
    stream: IO[str] | None = None,
    overrides: dict[str, str] | None = None,
) -> None:
    """Configure the root logger.

    *overrides* maps logger names to their own level, e.g.
    ``{"hive.ai.states": "DEBUG"}`` to trace one module's transitions.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    if numeric_level <= logging.DEBUG:
        for name in _CHATTY:
            logging.getLogger(name).setLevel(logging.INFO)

    for name, name_level in (overrides or {}).items():
        logging.getLogger(name).setLevel(getattr(logging, name_level.upper(), numeric_level))
