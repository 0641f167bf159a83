"""Configuration for line protocol metric containers"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "LINE_PROTOCOL_"


class Config(BaseSettings):
    """Formatting settings with Pydantic validation and environment-based overrides"""

    sort_keys: bool = Field(default=True, description="Render tags and fields in lexicographic key order")
    omit_empty_tag_separator: bool = Field(
        default=False,
        description="Drop the comma after the name when a metric has no tags",
    )
    strict_line_protocol: bool = Field(
        default=False,
        description="Escape identifiers, quote string fields and suffix integers with 'i'",
    )

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False)


class LoggingConfig(BaseSettings):
    """Logging settings, only read by setup_structured_logging"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False)

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names from the environment"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator('log_file')
    @classmethod
    def ensure_parent_directories(cls, v):
        """Ensure the parent directory exists for the log file"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v


@lru_cache(maxsize=1)
def load_config() -> Config:
    """Process-wide formatting configuration read once from the environment"""
    return Config()
