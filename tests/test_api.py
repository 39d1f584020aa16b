"""Tests for the HTTP API layer.

Covers:
  - Metadata endpoints (/health, /config/defaults, /config/schema, /tables)
  - Validation without running (/validate)
  - Simulation endpoints (/simulate, /simulate/sweep, /simulate/report)
  - Plain-text report rendering
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from voltiq_simulator.api.report import generate_report, range_warnings
from voltiq_simulator.api.server import app
from voltiq_simulator.config import SimulationConfig


client = TestClient(app)


# ═══════════════════════════════════════════════════════════════════════════
# Metadata endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestMetadata:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_defaults(self):
        data = client.get("/config/defaults").json()
        assert data == {
            "num_chargers": 20,
            "charger_power_kw": 11.0,
            "car_efficiency_kwh_per_100km": 18.0,
            "arrival_multiplier": 1.0,
            "seed": None,
        }

    def test_schema_carries_bounds(self):
        schema = client.get("/config/schema").json()
        props = schema["properties"]
        assert props["num_chargers"]["minimum"] == 1
        assert props["num_chargers"]["maximum"] == 30
        assert props["charger_power_kw"]["minimum"] == 3.7
        assert props["arrival_multiplier"]["maximum"] == 2.0

    def test_tables(self):
        data = client.get("/tables").json()
        assert len(data["arrival_probabilities"]) == 24
        assert data["arrival_probabilities"][17] == {"hour": 17, "probability": 0.1038}
        assert data["charging_demands"][0]["distance_km"] == 0
        assert data["expected_ranges"]["concurrency_factor"] == [0.35, 0.55]


# ═══════════════════════════════════════════════════════════════════════════
# /validate
# ═══════════════════════════════════════════════════════════════════════════

class TestValidate:

    def test_valid(self):
        resp = client.post("/validate", json={"config": {"num_chargers": 10}})
        assert resp.status_code == 200
        assert resp.json() == {"valid": True, "issues": []}

    def test_empty_body_is_reference_station(self):
        assert client.post("/validate", json={}).json()["valid"] is True

    def test_every_issue_reported(self):
        resp = client.post("/validate", json={"config": {
            "num_chargers": 0, "car_efficiency_kwh_per_100km": 50,
        }})
        data = resp.json()
        assert resp.status_code == 200
        assert data["valid"] is False
        assert [i["field"] for i in data["issues"]] == [
            "num_chargers", "car_efficiency_kwh_per_100km",
        ]
        assert data["issues"][0]["value"] == 0

    def test_boolean_charger_count_rejected(self):
        data = client.post("/validate", json={"config": {"num_chargers": True}}).json()
        assert data["valid"] is False
        assert data["issues"] == [
            {"field": "num_chargers", "message": "Must be an integer", "value": True},
        ]

    def test_empty_seed_simulates_unseeded(self):
        body = {"config": {"num_chargers": 1, "seed": ""}}
        data = client.post("/simulate?include_series=false", json=body).json()
        assert data["result"]["metadata"]["seed_used"].isdigit()


# ═══════════════════════════════════════════════════════════════════════════
# Simulation endpoints
# ═══════════════════════════════════════════════════════════════════════════

class TestSimulate:

    def test_simulate_full(self):
        resp = client.post("/simulate", json={"config": {"num_chargers": 4, "seed": "api"}})
        assert resp.status_code == 200
        data = resp.json()
        assert data["error"] is None
        result = data["result"]
        assert result["theoretical_max_power_kw"] == 44
        assert len(result["power_demand_per_tick"]) == 35_040
        assert len(result["charging_sessions"]) == data["sessions"]["session_count"]
        assert len(data["average_day_kw"]) == 96
        assert result["metadata"]["seed_used"] == "api"

    def test_simulate_without_series(self):
        resp = client.post(
            "/simulate?include_series=false",
            json={"config": {"num_chargers": 4, "seed": "api"}},
        )
        data = resp.json()
        assert resp.status_code == 200
        assert data["result"]["power_demand_per_tick"] == []
        assert data["result"]["charging_sessions"] == []
        assert data["sessions"]["session_count"] > 0
        assert data["result"]["total_energy_kwh"] > 0

    def test_seeded_requests_match(self):
        body = {"config": {"num_chargers": 3, "seed": "repeat"}}
        a = client.post("/simulate?include_series=false", json=body).json()
        b = client.post("/simulate?include_series=false", json=body).json()
        assert a["result"]["total_energy_kwh"] == b["result"]["total_energy_kwh"]
        assert a["result"]["metadata"]["config_hash"] == b["result"]["metadata"]["config_hash"]

    def test_invalid_config_returns_422_with_issues(self):
        resp = client.post("/simulate", json={"config": {
            "num_chargers": 100, "charger_power_kw": 1, "arrival_multiplier": 3,
        }})
        assert resp.status_code == 422
        data = resp.json()
        assert data["result"] is None
        assert data["error"]["type"] == "CONFIG"
        assert data["error"]["message"].startswith("Invalid configuration:")
        assert [i["field"] for i in data["error"]["issues"]] == [
            "num_chargers", "charger_power_kw", "arrival_multiplier",
        ]

    def test_sweep(self):
        resp = client.post("/simulate/sweep", json={"config": {"seed": "api"}, "counts": [2, 6]})
        assert resp.status_code == 200
        points = resp.json()["points"]
        assert [p["num_chargers"] for p in points] == [2, 6]
        assert points[1]["theoretical_max_power_kw"] == 66

    def test_sweep_invalid_count(self):
        resp = client.post("/simulate/sweep", json={"counts": [0]})
        assert resp.status_code == 422
        assert resp.json()["error"]["issues"][0]["field"] == "num_chargers"

    def test_sweep_empty_counts_rejected_by_request_model(self):
        resp = client.post("/simulate/sweep", json={"counts": []})
        assert resp.status_code == 422

    def test_report(self):
        resp = client.post("/simulate/report", json={"config": {"num_chargers": 2, "seed": "r"}})
        assert resp.status_code == 200
        data = resp.json()
        assert "ENERGY & POWER" in data["report"]
        assert data["headline_metrics"]["theoretical_max_power_kw"] == 22
        assert data["headline_metrics"]["session_count"] >= 0

    def test_report_invalid(self):
        resp = client.post("/simulate/report", json={"config": {"seed": "x", "bogus": 1}})
        assert resp.status_code == 422
        assert resp.json()["error"]["issues"][0]["message"] == "Unknown configuration field"


# ═══════════════════════════════════════════════════════════════════════════
# Report rendering
# ═══════════════════════════════════════════════════════════════════════════

class TestReport:

    def test_sections_present(self, reference_run):
        simulator, result = reference_run
        report = generate_report(simulator.config, result)
        for heading in ("STATION", "ENERGY & POWER", "SESSIONS", "RUN"):
            assert heading in report
        assert "Chargers: 20 × 11 kW" in report
        assert "Seed: integrity-test" in report
        assert f"Config hash: {result.metadata.config_hash}" in report
        assert "Busiest day: Day " in report
        assert "Expected distance per arrival: 41.5 km" in report

    def test_no_range_warnings_for_non_reference_station(self):
        config = SimulationConfig(num_chargers=2, seed="w")
        from voltiq_simulator.engine.simulator import ChargingSimulator

        result = ChargingSimulator(config).run()
        assert range_warnings(config, result) == []

    def test_range_warning_for_out_of_range_reference_result(self, reference_result):
        config = SimulationConfig(seed="integrity-test")
        forced = reference_result.model_copy(update={"concurrency_factor": 0.99})
        warnings = range_warnings(config, forced)
        assert any(w.startswith("concurrency_factor = 0.99") for w in warnings)
        assert "Warnings:" in generate_report(config, forced)
