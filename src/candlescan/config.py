"""
Configuration management for Candlescan.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class LoaderConfig(BaseModel):
    """CSV loader settings."""

    date_format: str = Field(default="%d/%m/%Y")
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    has_header: bool = Field(default=True)
    skip_invalid_rows: bool = Field(default=True)
    encoding: str = Field(default="utf-8")


class ReportConfig(BaseModel):
    """Report rendering settings."""

    date_format: str = Field(default="%Y-%m-%d")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file_path: Optional[str] = Field(default="./logs/candlescan.log")
    max_size: str = Field(default="10MB")
    backup_count: int = Field(default=5, ge=0)
    console_output: bool = Field(default=True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper().strip()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Config(BaseModel):
    """Main configuration class."""

    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    pattern_config_path: Optional[Path] = None

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to load from .env file in current directory
            env_path = Path(".env")
            if env_path.exists():
                load_dotenv(env_path)

        loader = LoaderConfig(
            date_format=os.getenv("CANDLESCAN_DATE_FORMAT", "%d/%m/%Y"),
            delimiter=os.getenv("CANDLESCAN_DELIMITER", ","),
            has_header=_env_bool("CANDLESCAN_HAS_HEADER", True),
            skip_invalid_rows=_env_bool("CANDLESCAN_SKIP_INVALID_ROWS", True),
            encoding=os.getenv("CANDLESCAN_ENCODING", "utf-8")
        )

        report = ReportConfig(
            date_format=os.getenv("CANDLESCAN_REPORT_DATE_FORMAT", "%Y-%m-%d")
        )

        logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file_path=os.getenv("LOG_FILE_PATH", "./logs/candlescan.log") or None,
            max_size=os.getenv("LOG_MAX_SIZE", "10MB"),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            console_output=_env_bool("LOG_CONSOLE_OUTPUT", True)
        )

        pattern_config = os.getenv("CANDLESCAN_PATTERN_CONFIG")

        return cls(
            loader=loader,
            report=report,
            logging=logging,
            pattern_config_path=Path(pattern_config) if pattern_config else None
        )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
