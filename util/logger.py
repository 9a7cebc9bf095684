# util/logger.py
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

# "kv.list_all.done ms=12 store=KV_LIU" -> event "kv.list_all.done"
_EVENT_RE = re.compile(r"^([a-z_]+(?:\.[a-z_]+)+)(?=\s|$)")


class EventFilter(logging.Filter):
    """Sets record.event to the dotted event name leading the message, or "-"."""

    def filter(self, record: logging.LogRecord) -> bool:
        m = _EVENT_RE.match(record.getMessage())
        record.event = m.group(1) if m else "-"  # type: ignore[attr-defined]
        return True


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    EVENT = "\033[36m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        out = super().format(record)
        lvl = record.levelname
        out = out.replace(lvl, f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}", 1)
        event = getattr(record, "event", "-")
        if event != "-":
            out = out.replace(event, f"{self.EVENT}{event}{self.RESET}", 1)
        return out


def _quiet_loggers() -> list[str]:
    return [n.strip() for n in settings.LOG_QUIET_LOGGERS.split(",") if n.strip()]


def init_logger() -> logging.Logger:
    """
    Idempotent logger init:
    - Console goes to stdout; the MCP endpoint is HTTP so stdout is free.
    - Writes to logs/app.log only when settings.LOG_TO_FILE is True.
    - Respects settings.LOG_LEVEL; LOG_QUIET_LOGGERS are held at WARNING.
    """
    root = logging.getLogger()
    if getattr(root, "_mobicycle_inited", False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    text_fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    date_fmt = "%Y-%m-%dT%H:%M:%S%z"
    events = EventFilter()

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.addFilter(events)
    ch.setFormatter(ColoredFormatter(text_fmt, datefmt=date_fmt))
    root.addHandler(ch)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.addFilter(events)
        # Files get the event as a leading column for grepping.
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(event)s %(name)s - %(message)s",
                datefmt=date_fmt,
            )
        )
        root.addHandler(fh)

    for name in _quiet_loggers():
        logging.getLogger(name).setLevel(logging.WARNING)

    root._mobicycle_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("logger.init level=%s", logging.getLevelName(level))
    return logger
