from typing import Dict, Final, Optional
from enum import Enum

from pydantic import BaseModel, Field

from smartedit.models import MatchingStrategy


# Upper bound on oldText size accepted by the edit_file tool. Fuzzy patterns
# grow with the token count of the search text.
MAX_OLD_TEXT_CHARS_DEFAULT: Final[int] = 20 * 1024


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"
    disabled = "disabled"


class LoggingSettings(BaseModel):
    # Default level for the smartedit logger if not overridden.
    default_level: LogLevel = LogLevel.warning
    # Mapping of logger name -> level override (e.g., {"smartedit.cascade": "debug"})
    enabled_loggers: Dict[str, LogLevel] = Field(default_factory=dict)
    # Keep the last N smartedit log records in memory (see logger.LogManager).
    # None => no in-memory capture.
    capture_max_entries: Optional[int] = Field(default=None, gt=0)


class EngineSettings(BaseModel):
    # Strategy used when a request does not name one explicitly
    default_strategy: MatchingStrategy = MatchingStrategy.auto
    fail_on_ambiguous: bool = True
    max_old_text_chars: int = Field(default=MAX_OLD_TEXT_CHARS_DEFAULT, gt=0)


class Settings(BaseModel):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
