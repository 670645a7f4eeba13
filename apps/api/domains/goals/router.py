"""Financial goals router.

Progress is never stored. Every read projects the goal again from the
caller's transactions and cards.
"""

from datetime import date

from fastapi import APIRouter, Depends, Response

from apps.api.core.config import Settings, get_settings
from apps.api.core.repository import FinanceRepository, get_repository
from apps.api.domains.goals.schemas import GoalIn, GoalListResponse
from packages.finance_core.goal_projector import project_goal
from packages.finance_core.models import FinancialGoal, GoalProjection

router = APIRouter(prefix="/goals", tags=["goals"])


def _project(
    repository: FinanceRepository,
    goal: FinancialGoal,
    settings: Settings,
    include_history: bool = False,
) -> GoalProjection:
    return project_goal(
        goal,
        repository.list_transactions(),
        repository.list_cards(),
        today=date.today(),
        include_history=include_history,
        locale=settings.LOCALE,
    )


@router.get("", response_model=GoalListResponse)
async def list_goals(
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """Every goal with its current projection, without the monthly series."""
    goals = repository.list_goals()
    if not goals:
        return GoalListResponse(goals=[], count=0)

    transactions = repository.list_transactions()
    cards = repository.list_cards()
    today = date.today()
    projections = [
        project_goal(
            goal, transactions, cards, today=today, include_history=False, locale=settings.LOCALE
        )
        for goal in goals
    ]
    return GoalListResponse(goals=projections, count=len(projections))


@router.get("/{goal_id}/projection", response_model=GoalProjection)
async def get_goal_projection(
    goal_id: str,
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    """One goal's projection including its month-by-month progress."""
    goal = repository.get_goal(goal_id)
    return _project(repository, goal, settings, include_history=True)


@router.post("", response_model=GoalProjection, status_code=201)
async def create_goal(
    body: GoalIn,
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    goal = repository.create_goal(body.model_dump())
    return _project(repository, goal, settings)


@router.put("/{goal_id}", response_model=GoalProjection)
async def replace_goal(
    goal_id: str,
    body: GoalIn,
    repository: FinanceRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    goal = repository.update_goal(goal_id, body.model_dump())
    return _project(repository, goal, settings)


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: str, repository: FinanceRepository = Depends(get_repository)):
    repository.delete_goal(goal_id)
    return Response(status_code=204)
