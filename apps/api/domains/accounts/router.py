"""Accounts router — profile and categories."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from apps.api.core.auth import CurrentUser, get_current_user
from apps.api.core.repository import FinanceRepository, get_repository
from packages.finance_core.models import Category

router = APIRouter(prefix="/accounts", tags=["accounts"])


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str


class CategoryListResponse(BaseModel):
    categories: list[Category]
    count: int


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: CurrentUser = Depends(get_current_user),
    repository: FinanceRepository = Depends(get_repository),
):
    """The caller's identity, display name and role."""
    profile = repository.get_profile() or {}
    return ProfileResponse(
        id=user.id,
        email=user.email,
        full_name=profile.get("full_name"),
        role=repository.get_role(),
    )


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(repository: FinanceRepository = Depends(get_repository)):
    categories = repository.list_categories()
    return CategoryListResponse(categories=categories, count=len(categories))
