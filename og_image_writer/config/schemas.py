"""Pydantic schemas for the writer settings.

`WriterSettings` inherits from `pydantic_settings.BaseSettings`, so every
field can be given in the YAML configuration file, in the environment with the
`OG_IMAGE_WRITER_` prefix, or in a `.env` file.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from og_image_writer.style import WindowStyle


class WriterSettings(BaseSettings):
    """Settings for generating images from the command line or a script."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="OG_IMAGE_WRITER_",
        env_nested_delimiter="__",
    )

    fallback_fonts: List[Path] = Field(default_factory=list, description="Fallback font files, tried in order.")
    fallback_font_dirs: List[Path] = Field(default_factory=list, description="Directories scanned for more fallback fonts.")
    default_font_size: Optional[float] = Field(None, gt=0, description="Font size used when the style does not set one.")
    window: WindowStyle = Field(default_factory=WindowStyle, description="The image size, background and padding.")
    log_level: str = Field("INFO", description="The loguru level for the console sink.")

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        v = v.upper()
        if v not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v
