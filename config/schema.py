"""
Configuration schema with validation.

All configuration is validated at load time using Pydantic.
"""

from pydantic import BaseModel, Field, field_validator


class IndicatorConfig(BaseModel):
    """Windows and multipliers of the indicator calculation."""

    minimum_history_days: int = Field(default=10, ge=1, le=50, description="Bars required before an indicator set is created")
    bollinger_days: int = Field(default=10, ge=2, le=100)
    bollinger_std_dev: float = Field(default=2.0, gt=0.0, le=5.0)
    bollinger_threshold_percent: int = Field(default=25, ge=1, le=99)
    atrp_days: int = Field(default=20, ge=1, le=100)
    stochastic_days: int = Field(default=14, ge=2, le=100)
    stochastic_smoothing: int = Field(default=3, ge=1, le=10)
    performance_days: int = Field(default=5, ge=1, le=50)
    up_down_volume_days: int = Field(default=50, ge=1, le=252)
    liquidity_days: int = Field(default=20, ge=1, le=252)
    volume_differential_long_days: int = Field(default=30, ge=2, le=252)
    volume_differential_short_days: int = Field(default=5, ge=1, le=100)

    @field_validator("volume_differential_short_days")
    @classmethod
    def short_lt_long(cls, v: int, info) -> int:
        long_days = info.data.get("volume_differential_long_days", 30)
        if v >= long_days:
            raise ValueError("volume_differential_short_days must be less than volume_differential_long_days")
        return v


class HealthCheckThresholds(BaseModel):
    """Thresholds of the health check rules (percent values unless noted)."""

    up_on_volume_percent: float = Field(default=3.0, gt=0.0, le=50.0)
    down_on_volume_percent: float = Field(default=-3.0, lt=0.0, ge=-50.0)
    churning_percent: float = Field(default=1.0, gt=0.0, le=10.0, description="Maximum absolute move of a churning day")
    bearish_reversal_range: float = Field(default=0.4, gt=0.0, lt=1.0, description="Share of the day's range from the low")
    bullish_reversal_range: float = Field(default=0.6, gt=0.0, lt=1.0, description="Share of the day's range from the low")
    close_near_high_range: float = Field(default=0.9, gt=0.0, lt=1.0)
    close_near_low_range: float = Field(default=0.1, gt=0.0, lt=1.0)
    climax_one_week_percent: float = Field(default=25.0, gt=0.0, le=500.0)
    climax_three_weeks_percent: float = Field(default=50.0, gt=0.0, le=500.0)
    time_climax_up_days: int = Field(default=7, ge=1, le=50)
    time_climax_days: int = Field(default=10, ge=2, le=50)
    extended_above_sma200_percent: float = Field(default=100.0, gt=0.0, le=1000.0)
    extended_one_year_percentile: int = Field(default=95, ge=1, le=99, description="Share of the year's SMA(50) extensions a day must exceed")
    extended_one_year_days: int = Field(default=252, ge=20, le=1000)
    gap_up_percent: float = Field(default=1.0, gt=0.0, le=50.0)
    distribution_day_percent: float = Field(default=-0.2, lt=0.0, ge=-10.0)
    distribution_negation_days: int = Field(default=25, ge=1, le=100)
    distribution_negation_percent: float = Field(default=5.0, gt=0.0, le=50.0)
    follow_through_day_percent: float = Field(default=1.7, gt=0.0, le=20.0)
    pocket_pivot_lookback_days: int = Field(default=10, ge=1, le=50)
    pocket_pivot_extension_percent: float = Field(default=2.0, ge=0.0, le=20.0)
    consecutive_closes: int = Field(default=3, ge=2, le=10)

    @field_validator("bullish_reversal_range")
    @classmethod
    def bullish_gt_bearish(cls, v: float, info) -> float:
        bearish = info.data.get("bearish_reversal_range", 0.4)
        if v <= bearish:
            raise ValueError("bullish_reversal_range must be greater than bearish_reversal_range")
        return v

    @field_validator("time_climax_days")
    @classmethod
    def window_holds_up_days(cls, v: int, info) -> int:
        up_days = info.data.get("time_climax_up_days", 7)
        if up_days > v:
            raise ValueError("time_climax_up_days must not exceed time_climax_days")
        return v


class ScanConfig(BaseModel):
    """Multi-instrument scan configuration."""

    max_workers: int = Field(default=4, ge=1, le=64)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def valid_level(cls, v: str) -> str:
        v = v.upper().strip()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


class TradeHealthConfig(BaseModel):
    """Root configuration."""

    indicators: IndicatorConfig = Field(default_factory=IndicatorConfig)
    health_check: HealthCheckThresholds = Field(default_factory=HealthCheckThresholds)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
