"""Singleton logging configuration.

Library modules only create loggers; the host application (or a test run)
calls ``setup_logging()`` once to attach a root handler. Idempotent,
guarded by a module-level flag.
"""

import logging

from sourcepick.config import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_setup_done = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with the package format.

    ``level`` defaults to ``SOURCEPICK_LOG_LEVEL``. Second call is a
    no-op, so hosts may call it from several entry points.
    """
    global _setup_done  # noqa: PLW0603
    if _setup_done:
        return
    _setup_done = True

    if level is None:
        level = Settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
