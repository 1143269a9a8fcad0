# app/utils/logging.py
"""
Logowanie strukturalne (structlog), jedna linia JSON na zdarzenie na stdout.
"""
import logging
import sys

import structlog

from app.utils.settings import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)

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
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def get_logger(name: str):
    # loggery na poziomie modulu powstaja przy imporcie, konfiguracja musi byc wczesniej
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name).bind(logger=name)
