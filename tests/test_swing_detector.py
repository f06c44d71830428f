"""
Tests for the swing zone scanner.

Verifies:
- Confirmation lag (a pivot is reported only once `sensitivity` bars follow it)
- Recency cap keeps the most recent confirmations, oldest first
- show_highs / show_lows gating
- Short and flat inputs yield nothing
"""

import pytest

from conftest import candles_from_highs, candles_from_lows, make_candle, time_at

from src.swing_zone.candles import CandleValidationError
from src.swing_zone.swing_config import SwingZoneSettings
from src.swing_zone.swing_detector import (
    SwingScan,
    analyze,
    calculate_swing_zone,
    iter_swing_confirmations,
    scan_swing_zones,
)
from src.swing_zone.types import SwingKind


def _spaced_spikes():
    """Spikes at bars 2, 6, 10, 14 with increasing heights on a flat base."""
    highs = [1.0] * 19
    for bar, value in zip((2, 6, 10, 14), (5.0, 6.0, 7.0, 8.0)):
        highs[bar] = value
    return candles_from_highs(highs)


class TestScanSwingZones:
    """Tests for scan_swing_zones()."""

    def test_single_spike(self, spike_candles):
        """Highs 1,2,3,10,3,2,1,5,6,7 with sensitivity 2 give one high at bar 3."""
        scan = scan_swing_zones(spike_candles, 2, True, True, 2)

        assert isinstance(scan, SwingScan)
        assert len(scan.highs) == 1
        point = scan.highs[0]
        assert point.bar_index == 3
        assert point.price == 10.0
        assert point.kind is SwingKind.HIGH
        assert point.time == time_at(3) == 1700000180
        assert scan.lows == []

    def test_trailing_pivots_are_not_evaluated(self, spike_candles):
        """Bar 6 is a clean low inside its window but sits past the scan range."""
        scan = scan_swing_zones(spike_candles, 2, True, True, 5)
        assert all(p.bar_index <= len(spike_candles) - 2 * 2 - 1 for p in scan.highs)
        assert 6 not in [p.bar_index for p in scan.lows]

    def test_recency_cap_keeps_latest(self):
        scan = scan_swing_zones(_spaced_spikes(), 2, True, True, 2)
        assert [p.bar_index for p in scan.highs] == [10, 14]
        assert [p.price for p in scan.highs] == [7.0, 8.0]

    def test_recency_cap_three(self):
        scan = scan_swing_zones(_spaced_spikes(), 2, True, True, 3)
        assert [p.bar_index for p in scan.highs] == [6, 10, 14]

    def test_cap_larger_than_found(self):
        scan = scan_swing_zones(_spaced_spikes(), 2, True, True, 10)
        assert [p.bar_index for p in scan.highs] == [2, 6, 10, 14]

    def test_swing_low_priced_at_low(self):
        candles = candles_from_lows([9, 8, 7, 1, 7, 8, 9, 9, 9, 9])
        scan = scan_swing_zones(candles, 2, True, True, 2)
        assert [p.bar_index for p in scan.lows] == [3]
        assert scan.lows[0].price == 1.0
        assert scan.lows[0].kind is SwingKind.LOW

    def test_show_highs_false(self, spike_candles):
        scan = scan_swing_zones(spike_candles, 2, False, True, 2)
        assert scan.highs == []

    def test_show_lows_false(self):
        candles = candles_from_lows([9, 8, 7, 1, 7, 8, 9, 9, 9, 9])
        scan = scan_swing_zones(candles, 2, True, False, 2)
        assert scan.lows == []

    def test_short_series_is_empty(self):
        candles = candles_from_highs([1, 5, 1, 2])
        scan = scan_swing_zones(candles, 2, True, True, 2)
        assert scan.highs == [] and scan.lows == []

    def test_empty_input(self):
        scan = scan_swing_zones([], 2, True, True, 2)
        assert scan == SwingScan(highs=[], lows=[])

    def test_flat_series_has_no_swings(self):
        candles = [make_candle(i, 10, 9, 9.5) for i in range(30)]
        scan = scan_swing_zones(candles, 2, True, True, 5)
        assert scan.highs == [] and scan.lows == []

    def test_sensitivity_zero_raises(self, spike_candles):
        with pytest.raises(ValueError):
            scan_swing_zones(spike_candles, 0, True, True, 2)

    def test_cap_zero_raises(self, spike_candles):
        with pytest.raises(ValueError):
            scan_swing_zones(spike_candles, 2, True, True, 0)

    def test_accepts_dict_records(self):
        records = [
            {"high": h, "low": h - 1, "close": h - 0.5, "timestamp": time_at(i)}
            for i, h in enumerate([1, 2, 3, 10, 3, 2, 1, 5, 6, 7])
        ]
        scan = scan_swing_zones(records, 2, True, True, 2)
        assert [p.bar_index for p in scan.highs] == [3]

    def test_malformed_record_raises(self):
        records = [{"high": 1, "low": 0, "timestamp": 0}]
        with pytest.raises(CandleValidationError):
            scan_swing_zones(records, 2, True, True, 2)


class TestConfirmationLag:
    """A pivot becomes known exactly `sensitivity` bars after it formed."""

    def test_confirmed_at_pivot_plus_sensitivity(self, spike_candles):
        confirmations = list(iter_swing_confirmations(spike_candles, 2))
        assert [(i, p.bar_index) for i, p in confirmations] == [(5, 3)]

    def test_not_reported_before_right_side_exists(self, spike_candles):
        # The last evaluated pivot is len - 2 * sensitivity - 1
        assert list(iter_swing_confirmations(spike_candles[:7], 2)) == []
        assert len(list(iter_swing_confirmations(spike_candles[:8], 2))) == 1

    def test_every_confirmation_respects_lag(self):
        for s in (1, 2, 3):
            for scan_index, point in iter_swing_confirmations(_spaced_spikes(), s):
                assert scan_index == point.bar_index + s

    def test_each_pivot_reported_once(self):
        confirmations = list(iter_swing_confirmations(_spaced_spikes(), 1))
        keys = [(p.bar_index, p.kind) for _, p in confirmations]
        assert len(keys) == len(set(keys))

    def test_use_close_prices_at_close(self, spike_candles):
        confirmations = list(iter_swing_confirmations(spike_candles, 2, use_close=True))
        assert confirmations[0][1].price == spike_candles[3].close


class TestCalculateSwingZone:
    """Tests for calculate_swing_zone() and analyze()."""

    def test_defaults(self, spike_candles):
        result = calculate_swing_zone(spike_candles)
        assert [p.bar_index for p in result.swing_highs] == [3]
        # 10 candles is not enough history for a 50-bar SMA
        assert result.regime is None

    def test_settings_flags(self, spike_candles):
        settings = SwingZoneSettings(show_highs=False)
        result = calculate_swing_zone(spike_candles, settings)
        assert result.swing_highs == []

    def test_to_dict(self, spike_candles):
        data = calculate_swing_zone(spike_candles).to_dict()
        assert data == {
            "swing_highs": [
                {"bar_index": 3, "price": 10.0, "kind": "high", "time": 1700000180}
            ],
            "swing_lows": [],
            "regime": None,
        }

    def test_analyze_without_rays(self, spike_candles):
        analysis = analyze(spike_candles)
        assert [p.bar_index for p in analysis.zone.swing_highs] == [3]
        assert analysis.rays.ray_highs == []
        assert analysis.rays.ray_lows == []

    def test_analyze_to_dict_merges_sections(self, spike_candles):
        data = analyze(spike_candles, SwingZoneSettings(enable_rays=True)).to_dict()
        assert set(data) == {"swing_highs", "swing_lows", "regime", "ray_highs", "ray_lows"}
        assert data["ray_highs"][0]["price"] == spike_candles[3].close
