"""Pydantic schemas for the admin domain."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from apps.api.core.repository import ROLES


class UserOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    full_name: Optional[str] = None
    role: str
    created_at: Optional[str] = None


class UserListResponse(BaseModel):
    users: list[UserOut]
    count: int


class AccessLogOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    action: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[str] = None


class AccessLogListResponse(BaseModel):
    logs: list[AccessLogOut]
    count: int


class RoleUpdate(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def known_role(cls, value: str) -> str:
        if value not in ROLES:
            raise ValueError(f"role must be one of: {', '.join(ROLES)}")
        return value


class UserPreferenceOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    theme: Optional[str] = None
    language: Optional[str] = None
    currency_display: Optional[str] = None
    date_format: Optional[str] = None
    notifications_enabled: bool = False
    created_at: Optional[str] = None


class UserPreferenceListResponse(BaseModel):
    preferences: list[UserPreferenceOut]
    count: int
