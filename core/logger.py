"""Structured logging for the exchange client.

Modules log through ``structlog.get_logger("<package>.<module>")``;
``setup_logging`` wires those loggers into the stdlib root handler once per
process. Event fields named like key material are masked before rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from config.settings import Settings, settings as default_settings

SECRET_FIELDS = frozenset({"private_key", "agent_key", "key", "secret"})
_MASK = "***"

# httpx logs one INFO line per request; the client already logs its own.
_NOISY_LOGGERS = ("httpx", "httpcore")

_configured = False


def redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    for field in SECRET_FIELDS.intersection(event_dict):
        event_dict[field] = _MASK
    return event_dict


def setup_logging(config: Settings = default_settings, force: bool = False) -> None:
    """Console output when ``APP_ENV == "dev"``, one JSON object per line otherwise.

    Later calls are no-ops unless *force* is set.
    """
    global _configured
    if _configured and not force:
        return

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
    ]

    if config.APP_ENV == "dev":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(colors=False)
    else:
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.LOG_LEVEL.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
    _configured = True
