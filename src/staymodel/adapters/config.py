# src/staymodel/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_percent(v: Any) -> float:
    if isinstance(v, str):
        v = v.strip().replace("%", "")
    try:
        return float(v)
    except Exception as err:
        raise ValueError("percent must be numeric or percent-like") from err


def _check_percent(f: float) -> float:
    if f < 0 or f > 100:
        raise ValueError("percent must be between 0 and 100")
    return f


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Baseline inputs for properties with missing financing / income rows
    # (percent fields use the 0-100 scale)
    # -----------------------------
    DEFAULT_DOWN_PAYMENT_PCT: float = Field(default=20.0)
    DEFAULT_INTEREST_RATE: float = Field(default=7.0)
    DEFAULT_LOAN_TERM_YEARS: int = Field(default=30)
    DEFAULT_OCCUPANCY_PCT: float = Field(default=65.0)
    DEFAULT_AVG_STAY_NIGHTS: float = Field(default=3.0)

    # -----------------------------
    # ALOS sweep bounds (nights, inclusive)
    # -----------------------------
    ALOS_MIN: int = Field(default=2, le=365)
    ALOS_MAX: int = Field(default=14, le=365)

    # Thread pool size for portfolio / comparison fan-out
    PORTFOLIO_WORKERS: int = Field(default=8)

    model_config = SettingsConfigDict(
        env_prefix="STAYMODEL_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("DEFAULT_DOWN_PAYMENT_PCT", "DEFAULT_OCCUPANCY_PCT", mode="before")
    @classmethod
    def _to_whole_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        f = _parse_percent(v)
        # 0.2 means 20%
        if 0 < f < 1.0:
            f = f * 100.0
        return _check_percent(f)

    @field_validator("DEFAULT_INTEREST_RATE", mode="before")
    @classmethod
    def _rate_percent(cls, v: Any) -> Any:
        # rates below 1% are real, so 0.5 stays 0.5%
        if v is None:
            return v
        return _check_percent(_parse_percent(v))

    @field_validator("ALOS_MIN", "ALOS_MAX", "PORTFOLIO_WORKERS", "DEFAULT_LOAN_TERM_YEARS", mode="before")
    @classmethod
    def _positive_int(cls, v: Any) -> Any:
        i = int(v)
        if i <= 0:
            raise ValueError("must be > 0")
        return i


config = AppConfig()
