"""
Configuration management for the analytics core.

Settings come from environment variables, optionally seeded from a
``.env`` file. Every field is optional so the CLI runs with no
configuration against ``data/snapshot.json``.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")
ENVIRONMENTS = ("development", "testing", "production")


class FlowChainConfig(BaseSettings):
    """Configuration settings for the analytics core and its CLI."""

    # Data sources and outputs
    data_file: str = Field(default="data/snapshot.json", alias="FLOWCHAIN_DATA_FILE")
    report_output_dir: str = Field(default="reports", alias="REPORT_OUTPUT_DIR")

    # Receipt OCR
    ocr_language: str = Field(default="eng", alias="OCR_LANGUAGE")
    tesseract_cmd: Optional[str] = Field(default=None, alias="TESSERACT_CMD")

    # Runtime
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_console: bool = Field(default=True, alias="LOG_CONSOLE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name to upper case."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {list(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"Log format must be one of: {list(LOG_FORMATS)}")
        return fmt

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        env = v.strip().lower()
        if env not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {list(ENVIRONMENTS)}")
        return env

    @field_validator("ocr_language")
    @classmethod
    def validate_ocr_language(cls, v: str) -> str:
        """Tesseract takes "eng" or a "+"-joined list such as "eng+deu"."""
        language = v.strip()
        if not language or any(not part for part in language.split("+")):
            raise ValueError("OCR language must name at least one tesseract model")
        return language

    @field_validator("tesseract_cmd", "log_file")
    @classmethod
    def blank_path_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def data_path(self) -> Path:
        return Path(self.data_file)

    @property
    def report_output_path(self) -> Path:
        return Path(self.report_output_dir)


def load_config(env_file: Optional[str] = None) -> FlowChainConfig:
    """Load configuration, seeding the environment from a .env file first."""
    # With no path, python-dotenv searches upwards for a .env file
    load_dotenv(env_file)
    return FlowChainConfig()


# Process-wide settings, loaded on first use
_config: Optional[FlowChainConfig] = None


def get_config() -> FlowChainConfig:
    """Return the process-wide settings, loading them on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> FlowChainConfig:
    """Discard cached settings and load them again."""
    global _config
    _config = load_config(env_file)
    return _config
