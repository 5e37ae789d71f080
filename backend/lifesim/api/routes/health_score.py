from fastapi import APIRouter, Depends, HTTPException

from lifesim.api.deps import get_benchmark_provider, get_repository
from lifesim.db.repository import PersistenceError
from lifesim.models.health import FinancialHealthScore, HealthScoreRecord
from lifesim.services import health_score_service

router = APIRouter(tags=["health-score"])


@router.post("/health-score/{user_id}", response_model=FinancialHealthScore)
def calculate_health_score_endpoint(
    user_id: str,
    repository=Depends(get_repository),
    provider=Depends(get_benchmark_provider),
):
    """Recalculate the user's health score and make it current."""
    try:
        return health_score_service.calculate_and_store(repository, repository, user_id, provider)
    except PersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/health-score/{user_id}/history", response_model=list[HealthScoreRecord])
def get_health_score_history(user_id: str, limit: int = 12, repository=Depends(get_repository)):
    return health_score_service.get_score_history(repository, user_id, limit)
