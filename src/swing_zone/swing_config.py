"""
Swing Zone Configuration

Tuning knobs for the swing zone indicator in one frozen config object.

The chart UI exposes the numeric knobs through three labels
(Aggressive / Balanced / Conservative). Those labels are only a way to pick
numbers; `SwingZoneSettings.preset()` maps them, everything downstream works
on the numeric fields.
"""

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping

from .constants import (
    DEFAULT_FAST_MA_LENGTH,
    DEFAULT_LINE_OPACITY,
    DEFAULT_LINE_WIDTH,
    DEFAULT_MAX_SWING_POINTS,
    DEFAULT_NUM_RAYS_TO_SHOW,
    DEFAULT_RAY_LINE_WIDTH,
    DEFAULT_RAY_OPACITY,
    DEFAULT_RAY_SENSITIVITY,
    DEFAULT_REGIME_CONFIRMATION_BARS,
    DEFAULT_SENSITIVITY,
    DEFAULT_SLOW_MA_LENGTH,
    PRESETS,
)

_POSITIVE_INT_FIELDS = (
    "sensitivity",
    "max_swing_points",
    "fast_ma_length",
    "slow_ma_length",
    "ray_sensitivity",
    "num_rays_to_show",
)

_BOOL_FIELDS = ("show_highs", "show_lows", "show_regime", "enable_rays")

_PERCENT_FIELDS = ("line_opacity", "ray_opacity")


@dataclass(frozen=True)
class SwingZoneSettings:
    """
    All configurable parameters for swing zones, rays and regime.

    Attributes:
        show_highs: Detect swing highs (zones). Default True.
        show_lows: Detect swing lows (zones). Default True.
        sensitivity: Pivot window half-width for zones. Default 2.
        max_swing_points: Keep only the N most recently confirmed zones
            per side. Default 2.
        show_regime: Compute the market regime. Default True.
        fast_ma_length: Fast SMA period for the regime. Default 21.
        slow_ma_length: Slow SMA period for the regime. Default 50.
        regime_confirmation_bars: Accepted for compatibility with stored
            settings. Not used by the classifier.
        enable_rays: Compute swing rays. Default False.
        ray_sensitivity: Pivot window half-width for rays. Default 2.
        num_rays_to_show: Keep only the N most recently confirmed rays
            per side. Default 3.
        line_width: Zone line width in pixels (chart only).
        line_opacity: Zone opacity 0-100, 0 is opaque (chart only).
        ray_line_width: Ray line width in pixels (chart only).
        ray_opacity: Ray opacity 0-100 (chart only).

    Example:
        >>> SwingZoneSettings.default().sensitivity
        2
        >>> SwingZoneSettings.preset("balanced").num_rays_to_show
        5
    """
    show_highs: bool = True
    show_lows: bool = True
    sensitivity: int = DEFAULT_SENSITIVITY
    max_swing_points: int = DEFAULT_MAX_SWING_POINTS
    show_regime: bool = True
    fast_ma_length: int = DEFAULT_FAST_MA_LENGTH
    slow_ma_length: int = DEFAULT_SLOW_MA_LENGTH
    regime_confirmation_bars: int = DEFAULT_REGIME_CONFIRMATION_BARS
    enable_rays: bool = False
    ray_sensitivity: int = DEFAULT_RAY_SENSITIVITY
    num_rays_to_show: int = DEFAULT_NUM_RAYS_TO_SHOW
    line_width: int = DEFAULT_LINE_WIDTH
    line_opacity: float = DEFAULT_LINE_OPACITY
    ray_line_width: int = DEFAULT_RAY_LINE_WIDTH
    ray_opacity: float = DEFAULT_RAY_OPACITY

    def __post_init__(self):
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a boolean, got {value!r}")
        for name in _POSITIVE_INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be an integer >= 1, got {value!r}")
        for name in _PERCENT_FIELDS:
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value!r}")

    @classmethod
    def default(cls) -> "SwingZoneSettings":
        """Create settings with default values."""
        return cls()

    @classmethod
    def preset(cls, name: str, **overrides: Any) -> "SwingZoneSettings":
        """
        Create settings from a UI preset label.

        Args:
            name: "aggressive", "balanced" or "conservative" (case-insensitive).
            **overrides: Any other field to set on top of the preset.

        Raises:
            ValueError: If the preset name is unknown.
        """
        key = name.strip().lower()
        if key not in PRESETS:
            raise ValueError(
                f"Unknown preset '{name}'. Must be one of: {', '.join(PRESETS)}"
            )
        sensitivity, max_points, ray_sensitivity, num_rays = PRESETS[key]
        values = dict(
            sensitivity=sensitivity,
            max_swing_points=max_points,
            ray_sensitivity=ray_sensitivity,
            num_rays_to_show=num_rays,
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SwingZoneSettings":
        """
        Build settings from a stored options mapping with snake_case keys.

        Missing keys take defaults and None values are treated as missing.
        The HTTP layer translates camelCase wire names before calling this.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        unknown = []
        for key, value in data.items():
            if key not in known:
                unknown.append(key)
            elif value is not None:
                values[key] = value
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **kwargs: Any) -> "SwingZoneSettings":
        """
        Create a new config with some fields changed.

        Since SwingZoneSettings is frozen, this creates a new instance.

        Example:
            >>> SwingZoneSettings.default().with_overrides(enable_rays=True).enable_rays
            True
        """
        return replace(self, **kwargs)
