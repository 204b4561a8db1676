"""HTTP routes for the Stellarion API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from stellarion.api.runtime import ApiState, CombatService
from stellarion.domain import units as catalog
from stellarion.domain.models import Mission, Planet
from stellarion.domain.report import MissionReport

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class PriceSummary(BaseModel):
    metal: int
    crystal: int
    deuterium: int


class UnitSummary(BaseModel):
    kind: str
    name: str
    family: str
    hull: int
    shield: int
    damage: int
    speed: float
    fuel_consumption: int
    production: int
    price: PriceSummary
    rapid_fire: dict[str, int]


class SimulationRequest(BaseModel):
    turn: int = Field(default=0, ge=0)
    seed: str | None = Field(default=None, min_length=1)
    mission: Mission
    destination: Planet


class SimulationResponse(BaseModel):
    seed: str
    winner: int | None
    report: MissionReport


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {"status": "ok", "rules_version": state.settings.rules_version}


@router.get("/rules")
async def get_rules(state: ApiStateDep) -> dict[str, object]:
    return asdict(state.rules)


@router.get("/units", response_model=list[UnitSummary])
async def list_units() -> list[UnitSummary]:
    return [UnitSummary.model_validate(CombatService.describe(unit)) for unit in catalog.ALL_UNITS]


@router.get("/units/{kind}", response_model=UnitSummary)
async def get_unit(kind: str) -> UnitSummary:
    try:
        unit = catalog.unit_from_kind(kind)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return UnitSummary.model_validate(CombatService.describe(unit))


@router.post("/combat/simulate", response_model=SimulationResponse)
async def simulate_combat(request: SimulationRequest, state: ApiStateDep) -> SimulationResponse:
    try:
        simulation = state.combat.simulate(
            request.turn, request.mission, request.destination, seed=request.seed
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    report = simulation.report
    return SimulationResponse(seed=simulation.seed, winner=report.winner(), report=report)
