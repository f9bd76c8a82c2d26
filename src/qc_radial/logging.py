from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
# Library loggers that flood DEBUG runs with font and connection chatter.
QUIET_LOGGERS = ("matplotlib", "httpx", "httpcore")


def configure_logging(level: str | int = "INFO") -> None:
    resolved = level.upper() if isinstance(level, str) else level
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
