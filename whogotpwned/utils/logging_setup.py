import logging
import sys

import structlog

from whogotpwned.config import LOG_JSON, LOG_LEVEL

_CONFIGURED = False


def configure_logging(level: str = None, json_logs: bool = None) -> None:
    """Set up structlog once per process. Later calls are ignored."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    use_json = LOG_JSON if json_logs is None else json_logs

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if use_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True
