"""Logging configuration shared by the API and the CLI.

Provides helpers:
* ``setup_logging`` – idempotent configuration with a console stream and
    daily rotating info/debug files.
* ``log_call`` – lightweight decorator for entry/exit tracing.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from functools import wraps
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import ParamSpec, TypeVar

# ----- Custom TRACE level -------------------------------------------------
TRACE_LEVEL = 5
if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s | %(message)s"


def _resolve_level() -> int:
    """Read the level name from ``BOOKSCRIBE_LOG_LEVEL`` (or ``LOG_LEVEL``)."""
    level_name = (os.getenv("BOOKSCRIBE_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()
    if level_name == "TRACE":
        return TRACE_LEVEL
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_dir: str | Path | None = None, force: bool = False) -> None:
    """Configure root logging for the application.

    Creates two daily rotating file handlers (info & debug) keeping 7 backups
    and a console stream handler so uvicorn shows output. When ``log_dir`` is
    omitted the ``BOOKSCRIBE_LOG_DIR`` variable is consulted, then ``logs``.
    Idempotent unless ``force`` is set.
    """
    if getattr(setup_logging, "_configured", False) and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    level = _resolve_level()
    root.setLevel(level)
    fmt = logging.Formatter(DEFAULT_FORMAT)

    target = Path(log_dir or os.getenv("BOOKSCRIBE_LOG_DIR") or "logs")
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        # Read-only working directory: keep console logging only.
        logging.getLogger(__name__).warning("log_dir_unavailable path=%s error=%s", target, exc)
    else:
        info_handler = TimedRotatingFileHandler(
            target / "app.log",
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        info_handler.setFormatter(fmt)
        info_handler.setLevel(logging.INFO)

        debug_handler = TimedRotatingFileHandler(
            target / "app-debug.log",
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        debug_handler.setFormatter(fmt)
        debug_handler.setLevel(TRACE_LEVEL)
        root.addHandler(info_handler)
        root.addHandler(debug_handler)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(level)
    root.addHandler(console)

    setup_logging._configured = True  # type: ignore[attr-defined]


P = ParamSpec("P")
R = TypeVar("R")


def log_call(
    level: int = logging.DEBUG,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return decorator logging entry/exit of the target function.

    Intended for methods: the bound instance is left out of the ENTER line.
    Handlers are not installed here; importing a decorated module does not
    configure logging.

    Example::

        @log_call()
        def extract(self): ...
    """

    def _decorator(fn: Callable[P, R]) -> Callable[P, R]:
        logger = logging.getLogger(fn.__module__)

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if logger.isEnabledFor(level):
                logger.log(
                    level,
                    "ENTER %s args=%s kwargs=%s",
                    fn.__qualname__,
                    _shorten(args[1:]),
                    _shorten(kwargs),
                )
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                logger.warning("ERROR in %s: %s", fn.__qualname__, e)
                raise
            if logger.isEnabledFor(level):
                logger.log(level, "EXIT %s -> %s", fn.__qualname__, _shorten(result))
            return result

        return wrapper

    return _decorator


def _shorten(obj: object, limit: int = 120) -> str:
    """Return a truncated repr for logging (never raises)."""
    try:
        s = repr(obj)
    except Exception:  # noqa: BLE001
        return type(obj).__name__
    if len(s) > limit:
        return s[: limit - 3] + "..."
    return s
