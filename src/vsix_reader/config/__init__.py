"""Configuration management."""

from .loader import ConfigLoader
from .schema import LoggingConfig, ReaderConfig, VSIXReaderConfig

__all__ = ["ConfigLoader", "LoggingConfig", "ReaderConfig", "VSIXReaderConfig"]
