"""Admin router — users, roles, access logs and preferences. Admin role required."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query

from apps.api.core.repository import ACCESS_LOG_LIMIT, FinanceRepository, require_admin
from apps.api.domains.admin.schemas import (
    AccessLogListResponse,
    AccessLogOut,
    RoleUpdate,
    UserListResponse,
    UserOut,
    UserPreferenceListResponse,
    UserPreferenceOut,
)

router = APIRouter(prefix="/admin", tags=["admin"])

UNKNOWN_USER = "Unknown user"


def user_name(row: dict) -> str:
    profile = row.get("profiles") or {}
    return profile.get("full_name") or UNKNOWN_USER


@router.get("/users", response_model=UserListResponse)
async def list_users(
    user_agent: Optional[str] = Header(default=None),
    repository: FinanceRepository = Depends(require_admin),
):
    """Every profile with its role. The visit is recorded in the access log."""
    repository.log_access("admin_page_access", user_agent)
    users = [UserOut.model_validate(row) for row in repository.list_users()]
    return UserListResponse(users=users, count=len(users))


@router.get("/access-logs", response_model=AccessLogListResponse)
async def list_access_logs(
    limit: int = Query(default=ACCESS_LOG_LIMIT, ge=1, le=500),
    repository: FinanceRepository = Depends(require_admin),
):
    logs = [
        AccessLogOut.model_validate({**row, "user_name": user_name(row)})
        for row in repository.list_access_logs(limit)
    ]
    return AccessLogListResponse(logs=logs, count=len(logs))


@router.patch("/users/{user_id}/role", response_model=UserOut)
async def change_role(
    user_id: str,
    body: RoleUpdate,
    repository: FinanceRepository = Depends(require_admin),
):
    row = repository.set_role(user_id, body.role)
    return UserOut(id=user_id, role=row.get("role", body.role))


@router.get("/preferences", response_model=UserPreferenceListResponse)
async def list_preferences(repository: FinanceRepository = Depends(require_admin)):
    """Every user's display preferences, newest first."""
    preferences = [
        UserPreferenceOut.model_validate({**row, "user_name": user_name(row)})
        for row in repository.list_user_preferences()
    ]
    return UserPreferenceListResponse(preferences=preferences, count=len(preferences))
