"""Logging configuration for JSON Node Editor."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> Dict[str, Any]:
    """Set up stdlib logging with structlog on top.

    Args:
        log_level: Name of the minimum level to emit
        json_logs: Render records as JSON lines instead of console output

    Returns:
        Summary of the applied settings
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger("json_node_editor").setLevel(numeric_level)

    return {
        "log_level": log_level.upper(),
        "json_logs": json_logs,
    }


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger with the specified name."""
    return structlog.get_logger(name)
