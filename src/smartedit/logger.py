from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from smartedit.settings import LoggingSettings

LOGGER_NAME = "smartedit"


@dataclass
class LogRecordEntry:
    logger_name: str
    level: int
    level_name: str
    message: str
    created: float


class LogManager:
    """Keeps the most recent log records in memory for later inspection."""

    def __init__(self, max_entries: Optional[int] = None) -> None:
        self._max_entries = max_entries
        self._records: list[LogRecordEntry] = []

    def add_record(self, record: logging.LogRecord) -> None:
        entry = LogRecordEntry(
            logger_name=record.name,
            level=record.levelno,
            level_name=record.levelname,
            message=record.getMessage(),
            created=record.created,
        )
        self._records.append(entry)
        if self._max_entries is not None and len(self._records) > self._max_entries:
            overflow = len(self._records) - self._max_entries
            del self._records[0:overflow]

    def set_max_entries(self, max_entries: Optional[int]) -> None:
        self._max_entries = max_entries
        if max_entries is not None and len(self._records) > max_entries:
            del self._records[0 : len(self._records) - max_entries]

    def get_logs(self) -> list[LogRecordEntry]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


class _InMemoryLogHandler(logging.Handler):
    def __init__(self, manager: LogManager) -> None:
        super().__init__()
        self._manager = manager

    def emit(self, record: logging.LogRecord) -> None:
        self._manager.add_record(record)


_log_manager: Optional[LogManager] = None
_log_handler: Optional[_InMemoryLogHandler] = None


def init_log_manager(max_entries: Optional[int] = None) -> LogManager:
    global _log_manager, _log_handler
    if _log_manager is None:
        _log_manager = LogManager(max_entries=max_entries)
        _log_handler = _InMemoryLogHandler(_log_manager)
    else:
        _log_manager.set_max_entries(max_entries)

    pkg_logger = logging.getLogger(LOGGER_NAME)
    if _log_handler is not None and _log_handler not in pkg_logger.handlers:
        pkg_logger.addHandler(_log_handler)
    return _log_manager


def get_log_manager() -> Optional[LogManager]:
    return _log_manager


def apply_logging_settings(logging_settings: Optional["LoggingSettings"]) -> None:
    """
    Apply logging settings: level of the smartedit logger, per-logger
    overrides and, when capture_max_entries is set, in-memory record capture.
    """
    from smartedit.settings import LoggingSettings, LogLevel

    if logging_settings is None:
        logging_settings = LoggingSettings()

    level_map = {
        LogLevel.debug: logging.DEBUG,
        LogLevel.info: logging.INFO,
        LogLevel.warning: logging.WARNING,
        LogLevel.error: logging.ERROR,
        LogLevel.critical: logging.CRITICAL,
        LogLevel.disabled: logging.CRITICAL + 1,
    }

    default_level = level_map.get(logging_settings.default_level, logging.INFO)
    logging.getLogger(LOGGER_NAME).setLevel(default_level)

    for logger_name, level in logging_settings.enabled_loggers.items():
        override_level = level_map.get(level, default_level)
        logging.getLogger(logger_name).setLevel(override_level)

    if logging_settings.capture_max_entries is not None:
        init_log_manager(max_entries=logging_settings.capture_max_entries)


structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        structlog.dev.ConsoleRenderer(colors=False),
    ],
)

logger: structlog.BoundLogger = structlog.get_logger(LOGGER_NAME)
