from .logging_config import configure_logging
from .logging_protocol import LoggingProtocol, NullLogger, ProgressTask

__all__ = [
    "LoggingProtocol",
    "NullLogger",
    "ProgressTask",
    "configure_logging",
]
