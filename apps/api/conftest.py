"""Shared fixtures for the API tests.

Supabase is replaced by MagicMock chains: every query-builder method
returns the same table mock and ``execute()`` returns ``MagicMock(data=...)``.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.core.auth import get_user_client
from apps.api.core.config import Settings, get_settings
from apps.api.core.errors import register_error_handlers
from apps.api.core.logging import request_context_middleware

QUERY_METHODS = (
    "select",
    "insert",
    "update",
    "delete",
    "eq",
    "gte",
    "lte",
    "order",
    "limit",
)


def table_mock(data=None):
    table = MagicMock()
    for name in QUERY_METHODS:
        getattr(table, name).return_value = table
    table.execute.return_value = MagicMock(data=data if data is not None else [])
    return table


def supabase_mock(tables=None, user_id="test-user-123", email="test@example.com"):
    """A user-scoped client whose ``table(name)`` serves ``tables[name]``.

    Tables not listed return no rows.
    """
    tables = dict(tables or {})
    client = MagicMock()
    user = MagicMock()
    user.id = user_id
    user.email = email
    client.auth.get_user.return_value = MagicMock(user=user)

    def table(name):
        if name not in tables:
            tables[name] = table_mock()
        return tables[name]

    client.table.side_effect = table
    client.tables = tables
    return client


@pytest.fixture
def test_settings():
    return Settings(
        SUPABASE_URL="https://test.supabase.co",
        SUPABASE_ANON_KEY="test-anon-key",
        AI_API_KEY="test-ai-key",
        RESEND_API_KEY="test-resend-key",
        LOCALE="pt-BR",
    )


@pytest.fixture
def make_client(test_settings):
    """Build a TestClient for one router with Supabase and settings overridden."""
    apps = []

    def _make(router, supabase, overrides=None):
        app = FastAPI()
        register_error_handlers(app)
        app.middleware("http")(request_context_middleware)
        app.include_router(router, prefix="/api/v1")
        app.dependency_overrides[get_user_client] = lambda: supabase
        app.dependency_overrides[get_settings] = lambda: test_settings
        for dependency, value in (overrides or {}).items():
            app.dependency_overrides[dependency] = value
        apps.append(app)
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    for app in apps:
        app.dependency_overrides.clear()


TRANSACTION_ROWS = [
    {
        "id": "tx-1",
        "user_id": "test-user-123",
        "type": "receita",
        "amount": 5000.0,
        "currency": "BRL",
        "amount_brl": 5000.0,
        "description": "Salary",
        "category_id": "cat-salary",
        "categories": {"id": "cat-salary", "name": "Salary"},
        "date": "2024-01-05",
    },
    {
        "id": "tx-2",
        "user_id": "test-user-123",
        "type": "despesa",
        "amount": 20.0,
        "currency": "USD",
        "amount_brl": 100.0,
        "description": "Books",
        "category_id": "cat-edu",
        "categories": {"id": "cat-edu", "name": "Education"},
        "date": "2024-01-12",
    },
    {
        "id": "tx-3",
        "user_id": "test-user-123",
        "type": "despesa",
        "amount": 400.0,
        "currency": "BRL",
        "amount_brl": None,
        "description": "Market",
        "category_id": None,
        "categories": None,
        "date": "2024-02-03",
    },
]

CARD_ROWS = [
    {
        "id": "card-1",
        "user_id": "test-user-123",
        "card_name": "Nubank",
        "card_brand": "Mastercard",
        "credit_limit": 1000.0,
        "used_limit": 250.0,
        "closing_day": 5,
        "due_day": 15,
        "created_at": "2024-01-10T12:00:00+00:00",
    },
]

GOAL_ROWS = [
    {
        "id": "goal-1",
        "user_id": "test-user-123",
        "goal_name": "Emergency fund",
        "goal_type": "emergency",
        "target_amount": 12000.0,
        "current_amount": 0.0,
        "target_date": None,
        "monthly_contribution": 500.0,
        "created_at": "2024-01-01T00:00:00+00:00",
        "completed": False,
    },
]
