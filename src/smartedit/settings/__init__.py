from .models import (  # noqa: F401
    EngineSettings,
    LoggingSettings,
    LogLevel,
    Settings,
    MAX_OLD_TEXT_CHARS_DEFAULT,
)
from .loader import load_settings  # noqa: F401
