from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from lifesim.api.deps import get_repository
from lifesim.models.simulation import CompareRequest, SimulationRequest, SimulationResult
from lifesim.services.simulation_service import (
    compare_scenarios,
    load_baseline,
    run_user_simulation,
)

router = APIRouter(tags=["simulations"])


@router.post("/simulations/run", response_model=SimulationResult)
def run_simulation_endpoint(request: SimulationRequest, repository=Depends(get_repository)):
    """Project a scenario month by month from the user's current finances."""
    try:
        return run_user_simulation(
            repository,
            request.user_id,
            request.scenario_type,
            request.parameters,
            request.start_date,
            request.duration_months,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/simulations/compare", response_model=dict[str, SimulationResult])
def compare_simulations_endpoint(request: CompareRequest, repository=Depends(get_repository)):
    start_date = request.start_date or date.today()
    baseline = load_baseline(repository, request.user_id, start_date)
    try:
        return compare_scenarios(
            baseline,
            request.scenario_types,
            start_date,
            request.duration_months,
            request.parameters,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
