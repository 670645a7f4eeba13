"""Centralized authentication dependencies.

Every request carries the caller's Supabase JWT. The gateway never holds
user credentials of its own: it builds a Supabase client from the anon key
and the caller's token so row-level security scopes every query.
"""

from typing import Optional

from fastapi import Depends, Header
from pydantic import BaseModel
from supabase import Client, create_client

from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import AuthenticationError


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None


async def get_user_token(authorization: str = Header(default="")) -> str:
    """Extract Bearer token from Authorization header.

    Returns the raw JWT string.
    """
    if not authorization.startswith("Bearer "):
        raise AuthenticationError(
            "Missing or invalid Authorization header. Expected: Bearer <token>"
        )

    token = authorization[7:].strip()
    if not token:
        raise AuthenticationError("Missing bearer token")
    return token


async def get_user_client(
    token: str = Depends(get_user_token),
    settings: Settings = Depends(get_settings),
) -> Client:
    """Provide a Supabase client authenticated with the user's JWT.

    RLS policies will be enforced for all queries.

    Note: We pass an empty string as the refresh token because the API
    gateway is stateless: each request carries a fresh token from the
    client. The backend never refreshes tokens.
    """
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    client.auth.set_session(token, "")
    return client


async def get_current_user(client: Client = Depends(get_user_client)) -> CurrentUser:
    """Resolve the caller behind the bearer token."""
    user_response = client.auth.get_user()
    if not user_response or not user_response.user:
        raise AuthenticationError("Invalid bearer token")
    return CurrentUser(id=user_response.user.id, email=user_response.user.email)

