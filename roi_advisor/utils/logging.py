"""
Logging setup for the ROI advisor.

Call ``configure_logging(config)`` once at CLI entry, before any analysis
runs, to set up the root logger with the configured level and optional
file handler.

Library modules use ``logging.getLogger(__name__)`` and never call
``configure_logging`` or ``basicConfig`` themselves; an embedding web
application keeps full control of its own handlers.

Every record emitted inside ``analysis_run(run_slug)`` is stamped with that
run's slug by the handlers installed here, so the lines of one analysis can
be picked out of a shared log.  Text lines carry a short ``[run:xxxxxxxx]``
tag; JSON lines (``json_format = true`` under ``[logging]``) carry the full
slug::

    {"ts": "2026-10-19T09:00:00Z", "level": "INFO", "logger": "...",
     "run_slug": "4f0c...", "msg": "..."}

Records outside a run have no tag and no ``run_slug`` key.
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from roi_advisor.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s%(run_tag)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
RUN_TAG_LENGTH = 8

_current_run: ContextVar[str] = ContextVar("roi_advisor_run_slug", default="")

# Attributes every LogRecord carries; anything else came in through ``extra=``
# or from RunContextFilter.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "run_slug", "run_tag"}


@contextmanager
def analysis_run(run_slug: str) -> Iterator[str]:
    """Tag every record logged in this block (and this context) with ``run_slug``."""
    token = _current_run.set(run_slug)
    try:
        yield run_slug
    finally:
        _current_run.reset(token)


def current_run_slug() -> str:
    """Slug of the analysis running in this context, or ``""``."""
    return _current_run.get()


class RunContextFilter(logging.Filter):
    """Stamp ``run_slug`` and ``run_tag`` on each record; never drops one.

    An explicit ``extra={"run_slug": ...}`` on the logging call wins over
    the context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        slug = getattr(record, "run_slug", "") or _current_run.get()
        record.run_slug = slug
        record.run_tag = f" [run:{slug[:RUN_TAG_LENGTH]}]" if slug else ""
        return True


class _JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line.

    Fields: ``ts``, ``level``, ``logger``, ``run_slug`` (inside a run),
    ``msg``, ``exc`` (with a traceback), plus any other ``extra=`` keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
        }
        run_slug = getattr(record, "run_slug", "")
        if run_slug:
            payload["run_slug"] = run_slug
        payload["msg"] = record.getMessage()
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for key, val in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = val
        return json.dumps(payload, default=str)


def build_handlers(config: "LoggingConfig") -> list[logging.Handler]:
    """Console handler on stderr, plus a file handler when ``log_file`` is set.

    Every handler carries a ``RunContextFilter`` and the configured format.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    run_filter = RunContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(run_filter)
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Console output goes to stderr so that report text written to stdout by
    the CLI stays clean.

    Args:
        config: Logging section of ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, handlers=build_handlers(config), force=True)
