from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from lifesim.api.deps import get_repository
from lifesim.db.repository import PersistenceError
from lifesim.models.scenario import SavedScenario, ScenarioTemplate
from lifesim.models.simulation import SaveScenarioRequest, SaveScenarioResponse
from lifesim.services.simulation_service import list_templates, save_user_scenario

router = APIRouter(tags=["scenarios"])


@router.post("/scenarios", response_model=SaveScenarioResponse)
def save_scenario_endpoint(request: SaveScenarioRequest, repository=Depends(get_repository)):
    """Run a scenario and save it with its monthly snapshots."""
    try:
        result = save_user_scenario(
            repository,
            repository,
            request.user_id,
            request.name,
            request.description,
            request.scenario_type,
            request.parameters,
            request.tags,
            request.start_date,
            request.duration_months,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return SaveScenarioResponse(scenario_id=result.scenario_id, result=result)


@router.get("/scenarios", response_model=list[SavedScenario])
def list_scenarios(user_id: str, repository=Depends(get_repository)):
    return repository.list_saved_scenarios(user_id)


@router.get("/scenarios/templates", response_model=list[ScenarioTemplate])
def get_templates(repository=Depends(get_repository)):
    return list_templates(repository)
