"""
Levels router.

Runs the swing zone engine over a candle slice posted by the application
shell (signal generation, position analysis, chart).

Endpoints:
- GET  /api/settings/presets   - Preset label to settings
- POST /api/swing-zone         - Zones + regime
- POST /api/swing-rays         - Rays
- POST /api/indicator-levels   - Prompt-ready levels payload
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from ...swing_zone.constants import DEFAULT_CANDLE_TAIL, PRESETS
from ...swing_zone.levels import build_indicator_levels, format_indicator_section
from ...swing_zone.swing_config import SwingZoneSettings
from ...swing_zone.swing_detector import analyze, calculate_swing_rays, calculate_swing_zone
from ...swing_zone.types import Candle
from ..schemas import (
    IndicatorLevelsResponse,
    SwingRayResponse,
    SwingRequest,
    SwingSettingsRequest,
    SwingZoneResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["levels"])


def _settings(request: SwingRequest, **defaults: Any) -> SwingZoneSettings:
    """Provided settings on top of `defaults` on top of the indicator defaults."""
    values = dict(defaults)
    if request.settings is not None:
        values.update(request.settings.model_dump(exclude_none=True))
    try:
        return SwingZoneSettings.from_dict(values)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid settings: {e}")


def _candles(request: SwingRequest, default_tail: int = None) -> List[Candle]:
    candles = [
        Candle(high=c.high, low=c.low, close=c.close, timestamp=c.timestamp)
        for c in request.candles
    ]
    tail = request.tail or default_tail
    return candles[-tail:] if tail else candles


@router.get("/api/settings/presets")
async def get_presets() -> Dict[str, Dict[str, Any]]:
    """Settings for each UI preset label, camelCase keys."""
    return {
        name: SwingSettingsRequest(**SwingZoneSettings.preset(name).to_dict()).model_dump(by_alias=True)
        for name in PRESETS
    }


@router.post("/api/swing-zone", response_model=SwingZoneResponse)
async def post_swing_zone(request: SwingRequest):
    """Swing zones (high/low priced) and market regime."""
    settings = _settings(request)
    try:
        result = calculate_swing_zone(_candles(request), settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SwingZoneResponse.model_validate(result.to_dict())


@router.post("/api/swing-rays", response_model=SwingRayResponse)
async def post_swing_rays(request: SwingRequest):
    """Swing rays (close priced). Empty unless settings enable rays."""
    settings = _settings(request)
    try:
        result = calculate_swing_rays(_candles(request), settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SwingRayResponse.model_validate(result.to_dict())


@router.post("/api/indicator-levels", response_model=IndicatorLevelsResponse)
async def post_indicator_levels(request: SwingRequest):
    """
    Levels payload for the signal prompt.

    Uses the last 100 candles unless `tail` says otherwise and computes
    rays unless the settings turn them off, like the signal route.
    """
    settings = _settings(request, enable_rays=True)
    candles = _candles(request, default_tail=DEFAULT_CANDLE_TAIL)
    try:
        analysis = analyze(candles, settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    levels = build_indicator_levels(analysis.zone, analysis.rays)
    logger.info(
        f"Indicator levels over {len(candles)} candles: "
        f"{len(levels['swingHighs'])} highs, {len(levels['swingLows'])} lows, "
        f"{len(levels['rayHighs'])} ray highs, {len(levels['rayLows'])} ray lows"
    )
    return IndicatorLevelsResponse.model_validate(
        dict(levels, indicatorText=format_indicator_section(levels))
    )
