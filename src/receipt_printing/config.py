"""
Receipt printer settings.

Settings are loaded from environment variables (prefix ``RECEIPT_``) with
.env file support.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrinterSettings(BaseSettings):
    """Thermal, system and mock printer settings."""

    model_config = SettingsConfigDict(
        env_prefix="RECEIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Serial thermal printer
    thermal_baudrate: int = 9600
    thermal_timeout: float = Field(default=5.0, gt=0)
    thermal_profile: str = "default"
    thermal_image_width: int = Field(default=200, ge=8)
    # Friendly-name fragments that mark a serial port as a receipt printer
    thermal_keywords: Tuple[str, ...] = ("bluetooth", "thermal", "pos", "epson")

    # System printer document
    paper_width_mm: float = Field(default=57.0, gt=0)
    dpi: int = Field(default=203, ge=72)
    job_name: str = "receipt"

    # Receipt text
    default_title: str = "レシート"
    footer_text: str = "ありがとうございました"
    currency_symbol: str = "¥"
    total_label: str = "合計"

    # Demo printer
    mock_print_delay: float = Field(default=0.0, ge=0.0)


@lru_cache
def get_settings() -> PrinterSettings:
    """Get cached settings instance."""
    return PrinterSettings()
