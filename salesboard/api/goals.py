from __future__ import annotations

from fastapi import APIRouter, Depends

from salesboard.api.dependencies import get_goals_service
from salesboard.schemas.goals import GoalsResponse, GoalUpdateRequest, GoalUpdateResult
from salesboard.services.goals_service import GoalsService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("")
def list_goals(
    service: GoalsService = Depends(get_goals_service),
) -> ResponseEnvelope[GoalsResponse]:
    return ResponseEnvelope(data=service.get_goals(), meta=build_meta("monthly"))


@router.post("")
def update_goal(
    request: GoalUpdateRequest,
    service: GoalsService = Depends(get_goals_service),
) -> ResponseEnvelope[GoalUpdateResult]:
    return ResponseEnvelope(data=service.update_goal(request), meta=build_meta("monthly"))
