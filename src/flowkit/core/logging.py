# src/flowkit/core/logging.py
"""Structured logging for flowkit.

structlog events and stdlib records from dependencies (httpx, dynaconf)
end up in one handler on the root logger and share one renderer, so a run
prints either console lines or JSON lines, never a mix.

Modules obtain their logger through ``get_logger(__name__)``; the logger
is bound to a short ``component`` name (``workflow.reconcile``,
``dataset.read``, ...) so events can be filtered by subsystem.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

_PACKAGE_PREFIX = "flowkit."

# Connection-level chatter from the HTTP stack; the dataset readers log the
# requests themselves.
_HTTP_STACK_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "urllib3")


def _strip_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # ProcessorFormatter always sets both keys.
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [_strip_formatter_keys, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [_strip_formatter_keys, structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog and stdlib logging to stdout.

    Safe to call repeatedly; the CLI calls it once for its global flags and
    again once a settings file supplies a log level.

    Args:
        json_output: Emit JSON lines instead of colored console lines
        level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_level = logging.getLevelNamesMapping()[level.upper()]
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created before it.
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(root_level)

    http_level = max(root_level, logging.WARNING)
    for name in _HTTP_STACK_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a flowkit module, bound to its component name.

    Args:
        name: Module name, normally ``__name__``

    Returns:
        Bound logger whose events carry ``component``
    """
    component = name.removeprefix(_PACKAGE_PREFIX).removeprefix("core.").removeprefix("plugins.")
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, component=component)
    return logger
