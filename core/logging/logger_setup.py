# logger_setup.py - Diagnose-Logging für den Session Event Logger
import logging
import sys
import time

from pythonjsonlogger import jsonlogger

try:
    from config import CONSOLE_LEVEL, SHOW_EVENT_TYPE_IN_CONSOLE
except ImportError:
    # Fallback for tooling
    CONSOLE_LEVEL = "WARNING"
    SHOW_EVENT_TYPE_IN_CONSOLE = True

HANDLER_NAME = "hooklog-stderr"

_LEVEL_MAPPING = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR
}


# =================================================================================
# Benutzerdefinierte Formatter-Klasse für UTC-Zeitstempel
# =================================================================================
class UTCJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records stamped in UTC; %f in datefmt expands to milliseconds."""

    default_datefmt = '%Y-%m-%dT%H:%M:%S.%fZ'

    def formatTime(self, record, datefmt=None):
        fmt = (datefmt or self.default_datefmt).replace('%f', f"{int(record.msecs):03d}")
        return time.strftime(fmt, time.gmtime(record.created))


# =================================================================================
# Filter-Klassen
# =================================================================================
class EnsureEventTypeFilter(logging.Filter):
    def filter(self, record):
        if not hasattr(record, 'event_type'):
            record.event_type = 'GENERAL'
        return True


# =================================================================================
# Logger-Setup-Funktion
# =================================================================================
def setup_logger(level=None, stream=None):
    """
    Configure diagnostic logging on the root logger.

    All output goes to stderr: stdout of a hook process may be read by the
    system that invoked it.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR); defaults to config.CONSOLE_LEVEL
        stream: Target stream (default: sys.stderr)

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()

    level_name = (level or CONSOLE_LEVEL).upper()
    logger.setLevel(_LEVEL_MAPPING.get(level_name, logging.WARNING))

    # Verhindere Handler-Duplikate bei mehrfachem Aufruf
    if any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        return logger

    fmt = '%(asctime)s %(levelname)s %(name)s %(message)s'
    if SHOW_EVENT_TYPE_IN_CONSOLE:
        fmt += ' %(event_type)s'

    json_formatter = UTCJsonFormatter(
        fmt,
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'},
        datefmt='%Y-%m-%dT%H:%M:%S.%fZ'
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(json_formatter)
    handler.addFilter(EnsureEventTypeFilter())
    logger.addHandler(handler)

    return logger
