"""FastAPI server — HTTP access to the charging simulator.

Run with:
    uvicorn voltiq_simulator.api.server:app --reload --port 8000

Or:
    voltiq-api

Endpoints:
    GET  /health             — liveness
    GET  /config/defaults    — reference station configuration
    GET  /config/schema      — JSON Schema for SimulationConfig (with bounds)
    GET  /tables             — arrival and demand probability tables
    POST /validate           — every field issue, without running
    POST /simulate           — run one simulation (partial config accepted)
    POST /simulate/sweep     — concurrency factor vs. charger count
    POST /simulate/report    — run + plain-text summary
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from voltiq_simulator.api.report import generate_report
from voltiq_simulator.config.simulation import SimulationConfig
from voltiq_simulator.config.validation import ConfigIssue, ConfigurationError, validate_config
from voltiq_simulator.engine.metrics import average_daily_profile, summarize_sessions
from voltiq_simulator.engine.simulator import ChargingSimulator
from voltiq_simulator.engine.sweep import DEFAULT_CHARGER_COUNTS, sweep_num_chargers
from voltiq_simulator.engine.tables import ARRIVAL_PROBABILITIES, CHARGING_DEMANDS, EXPECTED_RANGES
from voltiq_simulator.models.results import SessionSummary, SimulationResult, SweepPoint
from voltiq_simulator.settings import configure_logging, settings

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Voltiq Charging Station Simulator API",
    version="1.0",
    description=(
        "Simulate one year of EV charging demand at a single station in "
        "15-minute steps. Returns energy delivered, peak and average power, "
        "and the concurrency factor."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate. Missing fields use the reference station."""
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full SimulationConfig. "
                    "Example: {'num_chargers': 10, 'charger_power_kw': 22, 'seed': 'demo'}",
    )


class SweepRequest(BaseModel):
    """Request body for /simulate/sweep."""
    config: dict[str, Any] = Field(default_factory=dict)
    counts: list[int] = Field(
        default_factory=lambda: list(DEFAULT_CHARGER_COUNTS),
        min_length=1,
        max_length=30,
        description="Station sizes to simulate (each must be a valid num_chargers)",
    )


class IssueModel(BaseModel):
    field: str
    message: str
    value: Any = None


class SimulationError(BaseModel):
    """Why a request produced no result."""
    type: Literal["CONFIG"] = "CONFIG"
    message: str
    issues: list[IssueModel] = Field(default_factory=list)


class SimulateResponse(BaseModel):
    result: SimulationResult | None = None
    sessions: SessionSummary | None = None
    average_day_kw: list[float] = Field(default_factory=list)
    """Mean station power per tick-of-day (96 values)."""
    error: SimulationError | None = None


class ValidateResponse(BaseModel):
    valid: bool
    issues: list[IssueModel]


class SweepResponse(BaseModel):
    points: list[SweepPoint] = Field(default_factory=list)
    error: SimulationError | None = None


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _issue_models(issues: list[ConfigIssue]) -> list[IssueModel]:
    return [IssueModel(field=i.field, message=i.message, value=i.value) for i in issues]


def _config_error_response(exc: ConfigurationError, model: type[BaseModel]) -> JSONResponse:
    """422 body carrying every configuration issue."""
    body = model(error=SimulationError(message=str(exc), issues=_issue_models(exc.issues)))
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health():
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/config/defaults")
def config_defaults():
    """Reference station: 20 chargers × 11 kW, 18 kWh/100km, nominal traffic."""
    return SimulationConfig().model_dump()


@app.get("/config/schema")
def config_schema():
    return SimulationConfig.model_json_schema()


@app.get("/tables")
def tables():
    """The fixed probability tables driving arrivals and charging demand."""
    return {
        "arrival_probabilities": [
            {"hour": hour, "probability": p} for hour, p in enumerate(ARRIVAL_PROBABILITIES)
        ],
        "charging_demands": [
            {"distance_km": km, "probability": p} for km, p in CHARGING_DEMANDS
        ],
        "expected_ranges": {k: list(v) for k, v in EXPECTED_RANGES.items()},
    }


@app.post("/validate", response_model=ValidateResponse)
def validate(req: SimulateRequest):
    issues = validate_config(req.config)
    return ValidateResponse(valid=not issues, issues=_issue_models(issues))


@app.post("/simulate", response_model=SimulateResponse)
def simulate(
    req: SimulateRequest,
    include_series: bool = Query(
        default=True,
        description="Include the 35 040-point power series and full session list",
    ),
):
    """Run one simulation.

    Invalid configurations return HTTP 422 with every field issue.
    """
    try:
        simulator = ChargingSimulator(req.config)
    except ConfigurationError as exc:
        logger.info("rejected configuration issues=%d", len(exc.issues))
        return _config_error_response(exc, SimulateResponse)

    result = simulator.run()
    response = SimulateResponse(
        result=result,
        sessions=summarize_sessions(result.charging_sessions),
        average_day_kw=[round(v, 2) for v in average_daily_profile(result.power_demand_per_tick)],
    )
    if not include_series:
        response.result = result.model_copy(
            update={"power_demand_per_tick": [], "charging_sessions": []}
        )
    return response


@app.post("/simulate/sweep", response_model=SweepResponse)
def simulate_sweep(req: SweepRequest):
    """Concurrency factor for each station size, other inputs held fixed."""
    try:
        points = sweep_num_chargers(req.config, req.counts)
    except ConfigurationError as exc:
        return _config_error_response(exc, SweepResponse)
    return SweepResponse(points=points)


@app.post("/simulate/report")
def simulate_report(req: SimulateRequest):
    """Run a simulation and return only the plain-text summary."""
    try:
        simulator = ChargingSimulator(req.config)
    except ConfigurationError as exc:
        return _config_error_response(exc, SimulateResponse)
    result = simulator.run()
    return {
        "report": generate_report(simulator.config, result),
        "headline_metrics": {
            "total_energy_kwh": result.total_energy_kwh,
            "actual_max_power_kw": result.actual_max_power_kw,
            "theoretical_max_power_kw": result.theoretical_max_power_kw,
            "concurrency_factor": result.concurrency_factor,
            "session_count": len(result.charging_sessions),
        },
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "voltiq_simulator.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    main()
