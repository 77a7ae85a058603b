"""Configuration schema definitions using Pydantic."""

from typing import Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Log format type"
    )
    file: str | None = Field(default=None, description="Optional log file path")
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        description="Size in MB at which the log file is rotated"
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        description="Number of rotated log files to keep"
    )

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Normalize log level to uppercase for case-insensitive input."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('format', mode='before')
    @classmethod
    def normalize_format(cls, v: str) -> str:
        """Normalize format to lowercase for case-insensitive input."""
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator('file', mode='before')
    @classmethod
    def coerce_file(cls, v):
        """Keep numeric-looking paths from environment overrides as strings."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ReaderConfig(BaseModel):
    """Configuration for reading VSIX packages."""

    model_config = ConfigDict(extra='forbid')

    chunk_size: int = Field(
        default=65536,
        ge=1,
        description="Read size in bytes when buffering an archive entry"
    )
    check_consistency: bool = Field(
        default=True,
        description="Cross-check package.json against extension.vsixmanifest"
    )


class VSIXReaderConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
