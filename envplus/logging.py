from __future__ import annotations

import logging
import sys


def configure_logging(level: str = "WARNING") -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    logging.basicConfig(
        level=resolved,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
