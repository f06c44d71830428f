"""
Pydantic models for the Levels API.

Wire names are camelCase (barIndex, swingHighs) to match the chart and
prompt-builder front end; Python attributes stay snake_case.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Requests
# ============================================================================


class CandleRequest(BaseModel):
    """One candle. Extra fields (open, volume, ...) are ignored."""
    high: float
    low: float
    close: float
    timestamp: Union[int, float, str]


class SwingSettingsRequest(CamelModel):
    """Indicator settings sent by the application shell.

    Only provided fields are applied; omitted fields keep their defaults.
    Keys are camelCase (fastMALength) or snake_case; unknown keys are
    rejected. Range checks (>= 1, 0-100) happen in SwingZoneSettings.
    """
    show_highs: Optional[StrictBool] = None
    show_lows: Optional[StrictBool] = None
    sensitivity: Optional[int] = None
    max_swing_points: Optional[int] = None
    show_regime: Optional[StrictBool] = None
    fast_ma_length: Optional[int] = Field(default=None, alias="fastMALength")
    slow_ma_length: Optional[int] = Field(default=None, alias="slowMALength")
    regime_confirmation_bars: Optional[int] = None  # accepted, not used
    enable_rays: Optional[StrictBool] = None
    ray_sensitivity: Optional[int] = None
    num_rays_to_show: Optional[int] = None
    line_width: Optional[int] = None
    line_opacity: Optional[float] = None
    ray_line_width: Optional[int] = None
    ray_opacity: Optional[float] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "sensitivity": 2,
                "maxSwingPoints": 2,
                "fastMALength": 21,
                "slowMALength": 50,
                "enableRays": True,
                "numRaysToShow": 3,
            }
        },
    )


class SwingRequest(BaseModel):
    """Candle slice plus optional settings."""
    candles: List[CandleRequest]
    settings: Optional[SwingSettingsRequest] = None
    tail: Optional[int] = Field(default=None, ge=1)


# ============================================================================
# Responses
# ============================================================================


class SwingPointResponse(CamelModel):
    bar_index: int
    price: float
    kind: str  # "high" or "low"
    time: int  # Unix seconds


class RegimeResponse(BaseModel):
    regime: str
    recommendation: str
    color: str


class SwingZoneResponse(CamelModel):
    swing_highs: List[SwingPointResponse]
    swing_lows: List[SwingPointResponse]
    regime: Optional[RegimeResponse] = None


class SwingRayResponse(CamelModel):
    ray_highs: List[SwingPointResponse]
    ray_lows: List[SwingPointResponse]


class FormattedPointResponse(CamelModel):
    """Swing point as handed to the prompt builder (ISO timestamp)."""
    price: float
    timestamp: str
    bar_index: int


class IndicatorLevelsResponse(CamelModel):
    support: List[float]
    resistance: List[float]
    swing_highs: List[FormattedPointResponse]
    swing_lows: List[FormattedPointResponse]
    ray_highs: List[FormattedPointResponse]
    ray_lows: List[FormattedPointResponse]
    regime: Optional[RegimeResponse] = None
    indicator_text: str


class HealthResponse(BaseModel):
    status: str
