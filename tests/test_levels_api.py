"""
Tests for the Levels Server endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.levels_server.api import create_app

SPIKE_HIGHS = [1, 2, 3, 10, 3, 2, 1, 5, 6, 7]


def candle_payload(highs, base_time=1704067200):
    return [
        {
            "open": h - 0.1,
            "high": h,
            "low": h - 0.5,
            "close": h - 0.25,
            "volume": 100,
            "timestamp": base_time + i * 60,
        }
        for i, h in enumerate(highs)
    ]


@pytest.fixture
def client():
    return TestClient(create_app())


class TestHealthAndPresets:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_presets(self, client):
        data = client.get("/api/settings/presets").json()
        assert set(data) == {"aggressive", "balanced", "conservative"}
        assert data["balanced"]["sensitivity"] == 3
        assert data["conservative"]["numRaysToShow"] == 7
        assert data["aggressive"]["fastMALength"] == 21


class TestSwingZoneEndpoint:

    def test_swing_zone(self, client):
        response = client.post("/api/swing-zone", json={"candles": candle_payload(SPIKE_HIGHS)})
        assert response.status_code == 200
        data = response.json()
        assert data["swingHighs"] == [
            {"barIndex": 3, "price": 10.0, "kind": "high", "time": 1704067380}
        ]
        assert data["swingLows"] == []
        assert data["regime"] is None

    def test_iso_timestamps(self, client):
        candles = candle_payload(SPIKE_HIGHS)
        candles[3]["timestamp"] = "2024-01-01T00:03:00Z"
        data = client.post("/api/swing-zone", json={"candles": candles}).json()
        assert data["swingHighs"][0]["time"] == 1704067380

    def test_camel_case_settings(self, client):
        response = client.post(
            "/api/swing-zone",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"showHighs": False}},
        )
        assert response.status_code == 200
        assert response.json()["swingHighs"] == []

    def test_regime(self, client):
        highs = [100 + i for i in range(60)]
        data = client.post("/api/swing-zone", json={"candles": candle_payload(highs)}).json()
        assert data["regime"]["regime"] == "Bull Trend"
        assert data["regime"]["color"] == "#00ff00"

    def test_unknown_setting(self, client):
        response = client.post(
            "/api/swing-zone",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"nope": 1}},
        )
        assert response.status_code == 422

    def test_snake_case_settings(self, client):
        response = client.post(
            "/api/swing-zone",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"show_highs": False}},
        )
        assert response.status_code == 200
        assert response.json()["swingHighs"] == []

    def test_whole_float_accepted_for_int_setting(self, client):
        response = client.post(
            "/api/swing-zone",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"sensitivity": 2.0}},
        )
        assert response.status_code == 200
        assert response.json()["swingHighs"][0]["barIndex"] == 3

    def test_invalid_setting_value(self, client):
        response = client.post(
            "/api/swing-zone",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"sensitivity": 0}},
        )
        assert response.status_code == 400

    def test_bad_timestamp(self, client):
        candles = candle_payload(SPIKE_HIGHS)
        candles[0]["timestamp"] = "yesterday-ish"
        response = client.post("/api/swing-zone", json={"candles": candles})
        assert response.status_code == 400

    def test_missing_field(self, client):
        candles = candle_payload(SPIKE_HIGHS)
        del candles[0]["close"]
        response = client.post("/api/swing-zone", json={"candles": candles})
        assert response.status_code == 422

    def test_empty_candles(self, client):
        data = client.post("/api/swing-zone", json={"candles": []}).json()
        assert data == {"swingHighs": [], "swingLows": [], "regime": None}


class TestSwingRaysEndpoint:

    def test_disabled_by_default(self, client):
        data = client.post("/api/swing-rays", json={"candles": candle_payload(SPIKE_HIGHS)}).json()
        assert data == {"rayHighs": [], "rayLows": []}

    @pytest.mark.parametrize("flag", ["enableRays", "showHighs", "showLows", "showRegime"])
    def test_string_flag_rejected(self, client, flag):
        """A string "false" is a schema error, not a truthy flag."""
        response = client.post(
            "/api/swing-rays",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {flag: "false"}},
        )
        assert response.status_code == 422

    def test_enabled(self, client):
        data = client.post(
            "/api/swing-rays",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"enableRays": True}},
        ).json()
        assert data["rayHighs"][0]["price"] == 9.75
        assert data["rayHighs"][0]["barIndex"] == 3


class TestIndicatorLevelsEndpoint:

    def test_levels(self, client):
        response = client.post(
            "/api/indicator-levels",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"enableRays": True}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["resistance"] == [10.0]
        assert data["support"] == []
        assert data["swingHighs"] == [
            {"price": 10.0, "timestamp": "2024-01-01T00:03:00.000Z", "barIndex": 3}
        ]
        assert data["rayHighs"][0]["price"] == 9.75
        assert "1. SWING ZONES:" in data["indicatorText"]
        assert "- Resistance Levels (Swing Highs): 10" in data["indicatorText"]

    def test_rays_on_by_default(self, client):
        data = client.post("/api/indicator-levels", json={"candles": candle_payload(SPIKE_HIGHS)}).json()
        assert data["rayHighs"][0]["price"] == 9.75
        assert "- Ray Highs (Resistance Rays): 9.75" in data["indicatorText"]

    def test_rays_can_be_turned_off(self, client):
        data = client.post(
            "/api/indicator-levels",
            json={"candles": candle_payload(SPIKE_HIGHS), "settings": {"enableRays": False}},
        ).json()
        assert data["rayHighs"] == []

    def test_default_tail(self, client):
        # Spike at bar 3 falls outside the last 100 candles
        highs = SPIKE_HIGHS + [1.0] * 100
        data = client.post("/api/indicator-levels", json={"candles": candle_payload(highs)}).json()
        assert data["swingHighs"] == []

    def test_explicit_tail(self, client):
        highs = [1.0] * 20 + SPIKE_HIGHS
        data = client.post(
            "/api/indicator-levels",
            json={"candles": candle_payload(highs), "tail": 10},
        ).json()
        assert [p["barIndex"] for p in data["swingHighs"]] == [3]

    def test_invalid_tail(self, client):
        response = client.post(
            "/api/indicator-levels",
            json={"candles": candle_payload(SPIKE_HIGHS), "tail": 0},
        )
        assert response.status_code == 422
