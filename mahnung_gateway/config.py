"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mahnung_gateway.domain.exceptions import ConfigurationError
from mahnung_gateway.domain.models import RvgOptions


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "mahnung-gateway"
    log_level: str = "INFO"
    reference_timezone: str = "Europe/Berlin"

    # Verzugszinsen - Basiszinssatz changes every 1 January and 1 July
    base_interest_rate: Decimal = Decimal("0.0362")
    company_flat_fee: Decimal = Decimal("40.00")
    day_count_basis: int = 365

    # Workflow gate
    minimum_invoice_age_days: int = 30

    # RVG estimate
    default_fee_multiplier: Decimal = Decimal("1.3")
    rvg_increment_per_50k: Decimal = Decimal("175")
    rvg_bracket_width: Decimal = Decimal("50000")
    vat_rate: Decimal = Decimal("0.19")
    auslagen_rate: Decimal = Decimal("0.20")
    auslagen_cap: Decimal = Decimal("20.00")
    rvg_table_path: Optional[Path] = None

    @field_validator(
        "company_flat_fee",
        "default_fee_multiplier",
        "rvg_increment_per_50k",
        "rvg_bracket_width",
        "auslagen_cap",
    )
    @classmethod
    def _positive_amount(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value <= 0:
            raise ValueError("must be a positive amount")
        return value

    @field_validator("base_interest_rate")
    @classmethod
    def _base_rate_fraction(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or abs(value) >= 1:
            raise ValueError("must be a fraction such as 0.0362")
        return value

    @field_validator("vat_rate", "auslagen_rate")
    @classmethod
    def _share_fraction(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or not 0 <= value < 1:
            raise ValueError("must be a fraction between 0 and 1")
        return value

    @field_validator("day_count_basis")
    @classmethod
    def _positive_day_count(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive number of days")
        return value

    @field_validator("minimum_invoice_age_days")
    @classmethod
    def _non_negative_age(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("reference_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone {value!r}") from None
        return value

    def rvg_options(self, **overrides) -> RvgOptions:
        """RvgOptions carrying the configured statutory constants"""
        values = dict(
            increment_per_50k=self.rvg_increment_per_50k,
            bracket_width=self.rvg_bracket_width,
            vat_rate=self.vat_rate,
            auslagen_rate=self.auslagen_rate,
            auslagen_cap=self.auslagen_cap,
        )
        values.update(overrides)
        return RvgOptions(**values)


def load_settings(**values) -> Settings:
    """Build Settings, failing fast with ConfigurationError on bad values"""
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


settings = load_settings()
