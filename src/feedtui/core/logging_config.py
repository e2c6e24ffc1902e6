"""Structured logging configuration using structlog.

Call ``configure_logging()`` once at startup (the CLI does this).  All modules
can then use either the stdlib logging API or structlog directly:

Stdlib usage::

    import logging
    logger = logging.getLogger(__name__)
    logger.info("archive: %d captures", count)

Structlog usage (richer context binding)::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("poll finished", feed="archive", items=12)

A ``panel_id`` context variable is populated by
:meth:`feedtui.feeds.archive.panel.ArchiveFeedPanel.refresh` and merged into
every log record emitted while that panel is polling.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, WrappedLogger

# ---------------------------------------------------------------------------
# Context variable — set while a panel polls its feed, read by the processor
# ---------------------------------------------------------------------------

panel_id_var: ContextVar[str | None] = ContextVar("panel_id", default=None)
"""Id of the panel whose feed is currently being polled.

Usage::

    from feedtui.core.logging_config import panel_id_var
    token = panel_id_var.set("archive-0-1")
    ...
    panel_id_var.reset(token)
"""


# ---------------------------------------------------------------------------
# Custom processors
# ---------------------------------------------------------------------------


def _inject_panel_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Inject the current panel id into the log event dict if set.

    Args:
        logger: The wrapped logger instance (unused).
        method_name: The log method name (unused).
        event_dict: Mutable event dictionary being assembled.

    Returns:
        The event dict, possibly with ``panel_id`` added.
    """
    pid = panel_id_var.get()
    if pid is not None and "panel_id" not in event_dict:
        event_dict["panel_id"] = pid
    return event_dict


# ---------------------------------------------------------------------------
# Public configuration entry-point
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog with JSON output, or console output at DEBUG.

    A terminal dashboard owns stdout, so records go to stderr.

    Standard fields added to every log record:

    - ``timestamp``: ISO 8601 string.
    - ``level``: Log level name (``"info"``, ``"warning"``, etc.).
    - ``logger``: Module name that emitted the record.
    - ``panel_id``: Id of the polling panel (omitted outside a poll).
    - ``event``: The log message string.

    Calling this more than once replaces the previous configuration.

    Args:
        log_level: Logging verbosity string.  One of ``"DEBUG"``, ``"INFO"``,
            ``"WARNING"``, ``"ERROR"``, ``"CRITICAL"``.  Case-insensitive.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)
    is_development = level_upper == "DEBUG"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _inject_panel_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_development:
        final_renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=True,
        )
    else:
        final_renderer = structlog.processors.JSONRenderer()

    # Route ``logging.getLogger(__name__)`` records through structlog.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final_renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    if not is_development:
        for noisy_logger in ("httpx", "httpcore"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
