"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from marketpulse.models import PeriodSettings


class RotationSettings(BaseSettings):
    """Relative rotation graph defaults.

    These are the values the period form starts with; callers may pass an
    explicit PeriodSettings per computation to override them.
    All fields configurable via ROTATION_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="ROTATION_")

    period: int = Field(default=125, ge=1)  # RS-Ratio lookback
    momentum_period: int = Field(default=10, ge=1)
    smoothing_period: int = Field(default=0, ge=0)  # 0 = no smoothing
    trail_length: int = Field(default=10, ge=1)  # observations per trail

    # Memoization of per-symbol trails
    cache_enabled: bool = True
    cache_max_entries: int = Field(default=256, ge=1)

    def period_settings(self) -> PeriodSettings:
        """Return the configured lookbacks as an immutable PeriodSettings."""
        return PeriodSettings(
            period=self.period,
            momentum_period=self.momentum_period,
            smoothing_period=self.smoothing_period,
        )


class BreadthSettings(BaseSettings):
    """Breadth aggregation parameters.

    All fields configurable via BREADTH_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="BREADTH_")

    momentum_lookback: int = Field(default=10, ge=1)  # trailing window for tenDayRatio
    short_window: int = Field(default=5, ge=1)  # trailing window for fiveDayRatio
    ratio_floor: int = Field(default=1, ge=1)  # divide-by-zero guard for up/down ratios
    table_rows: int = Field(default=252, ge=1)  # one trading year of snapshot rows


class AppSettings(BaseSettings):
    """Root settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    rotation: RotationSettings = RotationSettings()
    breadth: BreadthSettings = BreadthSettings()
