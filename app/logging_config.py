"""
Structured logging setup.

Modules acquire a logger with ``structlog.get_logger()`` and emit key/value
events (``logger.info("transaction_created", transaction_id=...)``). This
module configures the processor chain once, at application startup.

Plaintext passwords and JWTs are never passed to a logger.
"""

import logging

import structlog


def configure_logging(level: str = "INFO", *, json: bool = False) -> None:
    """
    Configure structlog for the whole process.

    Args:
        level: Minimum level name ("DEBUG", "INFO", ...). Unknown names fall
               back to INFO.
        json: Emit one JSON object per line instead of the console renderer.
    """
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )
