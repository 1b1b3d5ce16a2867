"""
Logging configuration for LeaveDesk Backend

Everything goes to stdout. Services log under their module name
(leavedesk.services.leave_service, leavedesk.services.leave_balance_service, ...)
so ledger movements can be filtered with a single logger prefix.
"""
import logging
import sys
from typing import Optional

from leavedesk.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "alembic.runtime.migration": logging.WARNING,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure Python logging

    Args:
        level: Overrides settings.LOG_LEVEL (the seed script passes DEBUG for --verbose)
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(quiet_level, log_level))

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, env=%s, debit_strategy=%s",
        level_name, settings.APP_ENV, settings.LEAVE_DEBIT_STRATEGY,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
