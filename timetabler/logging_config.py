import logging
import sys

from .config import settings

_LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[1;31m',
    logging.CRITICAL: '\033[1;35m',
}
_RESET = '\033[0m'

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# browser stack chatter that drowns the scrape progress at DEBUG
QUIET_LOGGERS = ('asyncio', 'playwright')


class _LevelColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}{_RESET}" if color else line


def setup_logging(level: int | str | None = None) -> None:
    """Log to stdout at ``level`` (LOG_LEVEL from the environment when omitted).

    Whole lines are colored by level when stdout is a terminal.
    """
    level = level or settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    handler = logging.StreamHandler(sys.stdout)
    formatter_cls = _LevelColorFormatter if sys.stdout.isatty() else logging.Formatter
    handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
