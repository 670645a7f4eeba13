"""Tests for the accounts domain router."""

import pytest

from apps.api.conftest import supabase_mock, table_mock
from apps.api.domains.accounts.router import router


@pytest.fixture
def mock_user_client():
    return supabase_mock(
        {
            "profiles": table_mock([{"id": "test-user-123", "full_name": "Ana Souza"}]),
            "user_roles": table_mock([{"user_id": "test-user-123", "role": "admin"}]),
            "categories": table_mock(
                [
                    {"id": "cat-1", "name": "Food", "icon": "utensils", "color": "#f97316"},
                    {"id": "cat-2", "name": "Salary", "icon": "wallet", "color": "#10b981"},
                ]
            ),
        }
    )


@pytest.fixture
def client(make_client, mock_user_client):
    return make_client(router, mock_user_client)


class TestProfile:
    def test_profile_returns_200(self, client):
        response = client.get("/api/v1/accounts/profile")
        assert response.status_code == 200

    def test_profile_returns_user_info(self, client):
        data = client.get("/api/v1/accounts/profile").json()
        assert data == {
            "id": "test-user-123",
            "email": "test@example.com",
            "full_name": "Ana Souza",
            "role": "admin",
        }

    def test_user_without_role_row_is_plain_user(self, make_client):
        client = make_client(router, supabase_mock())
        data = client.get("/api/v1/accounts/profile").json()
        assert data["role"] == "user"
        assert data["full_name"] is None


class TestCategories:
    def test_list_categories(self, client):
        data = client.get("/api/v1/accounts/categories").json()
        assert data["count"] == 2
        assert data["categories"][0]["name"] == "Food"
        assert data["categories"][1]["color"] == "#10b981"
