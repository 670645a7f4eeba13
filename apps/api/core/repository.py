"""Supabase-backed persistence for the finance records.

Rows are read through a client that carries the caller's JWT, so Supabase
RLS already scopes every query to the caller. ``user_id`` is still written
on inserts because the tables require it.

Any PostgREST or transport failure is logged and surfaced once as
``UpstreamError``.
"""

from datetime import date
from typing import Any, Optional

import httpx
import structlog
from fastapi import Depends
from postgrest.exceptions import APIError
from supabase import Client

from apps.api.core.auth import CurrentUser, get_current_user, get_user_client
from apps.api.core.errors import ForbiddenError, NotFoundError, UpstreamError
from packages.finance_core.models import (
    Category,
    CreditCard,
    FinancialGoal,
    Transaction,
    TransactionType,
)

logger = structlog.get_logger()

TRANSACTION_COLUMNS = "*, categories(*)"
ACCESS_LOG_LIMIT = 100
ADMIN_ROLE = "admin"
DEFAULT_ROLE = "user"
ROLES = (ADMIN_ROLE, DEFAULT_ROLE)

# Values stored in transactions.type
STORED_TYPE = {
    TransactionType.INCOME: "receita",
    TransactionType.EXPENSE: "despesa",
}


def transaction_row(values: dict[str, Any]) -> dict[str, Any]:
    """Map record field names onto the transactions table columns."""
    row = dict(values)
    if "type" in row:
        row["type"] = STORED_TYPE[TransactionType(row["type"])]
    if "amount_in_base_currency" in row:
        row["amount_brl"] = row.pop("amount_in_base_currency")
    if isinstance(row.get("date"), date):
        row["date"] = row["date"].isoformat()
    return row


def card_row(values: dict[str, Any]) -> dict[str, Any]:
    row = dict(values)
    for field, column in (("name", "card_name"), ("brand", "card_brand")):
        if field in row:
            row[column] = row.pop(field)
    return row


def goal_row(values: dict[str, Any]) -> dict[str, Any]:
    row = dict(values)
    for field, column in (("name", "goal_name"), ("type", "goal_type")):
        if field in row:
            row[column] = row.pop(field)
    if isinstance(row.get("target_date"), date):
        row["target_date"] = row["target_date"].isoformat()
    return row


class FinanceRepository:
    """CRUD over the caller's transactions, cards, goals and account tables."""

    def __init__(self, client: Client, user_id: str):
        self.client = client
        self.user_id = user_id

    def _execute(self, query, operation: str) -> list[dict]:
        try:
            result = query.execute()
        except (APIError, httpx.HTTPError) as e:
            logger.error("supabase_query_failed", operation=operation, error=str(e))
            raise UpstreamError("Could not reach the database, please try again later") from e
        return result.data or []

    def _single(self, query, operation: str, missing: str) -> dict:
        rows = self._execute(query, operation)
        if not rows:
            raise NotFoundError(missing)
        return rows[0]

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def list_transactions(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        query = (
            self.client.table("transactions")
            .select(TRANSACTION_COLUMNS)
            .eq("user_id", self.user_id)
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        if type is not None:
            query = query.eq("type", STORED_TYPE[type])
        rows = self._execute(query.order("date", desc=True), "list_transactions")
        return [Transaction.model_validate(row) for row in rows]

    def create_transaction(self, values: dict[str, Any]) -> Transaction:
        row = transaction_row(values) | {"user_id": self.user_id}
        created = self._single(
            self.client.table("transactions").insert(row),
            "create_transaction",
            "Transaction was not created",
        )
        logger.info("transaction_created", transaction_id=created.get("id"))
        return Transaction.model_validate(created)

    def update_transaction(self, transaction_id: str, values: dict[str, Any]) -> Transaction:
        updated = self._single(
            self.client.table("transactions")
            .update(transaction_row(values))
            .eq("id", transaction_id)
            .eq("user_id", self.user_id),
            "update_transaction",
            f"Transaction {transaction_id} not found",
        )
        return Transaction.model_validate(updated)

    def delete_transaction(self, transaction_id: str) -> None:
        self._single(
            self.client.table("transactions")
            .delete()
            .eq("id", transaction_id)
            .eq("user_id", self.user_id),
            "delete_transaction",
            f"Transaction {transaction_id} not found",
        )

    def list_categories(self) -> list[Category]:
        rows = self._execute(
            self.client.table("categories").select("*").order("name"),
            "list_categories",
        )
        return [Category.model_validate(row) for row in rows]

    # ------------------------------------------------------------------
    # Credit cards
    # ------------------------------------------------------------------

    def list_cards(self) -> list[CreditCard]:
        rows = self._execute(
            self.client.table("credit_cards")
            .select("*")
            .eq("user_id", self.user_id)
            .order("created_at", desc=True),
            "list_cards",
        )
        return [CreditCard.model_validate(row) for row in rows]

    def create_card(self, values: dict[str, Any]) -> CreditCard:
        row = card_row(values) | {"user_id": self.user_id}
        created = self._single(
            self.client.table("credit_cards").insert(row),
            "create_card",
            "Card was not created",
        )
        logger.info("card_created", card_id=created.get("id"))
        return CreditCard.model_validate(created)

    def update_card(self, card_id: str, values: dict[str, Any]) -> CreditCard:
        updated = self._single(
            self.client.table("credit_cards")
            .update(card_row(values))
            .eq("id", card_id)
            .eq("user_id", self.user_id),
            "update_card",
            f"Card {card_id} not found",
        )
        return CreditCard.model_validate(updated)

    def delete_card(self, card_id: str) -> None:
        self._single(
            self.client.table("credit_cards")
            .delete()
            .eq("id", card_id)
            .eq("user_id", self.user_id),
            "delete_card",
            f"Card {card_id} not found",
        )

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def list_goals(self) -> list[FinancialGoal]:
        rows = self._execute(
            self.client.table("financial_goals")
            .select("*")
            .eq("user_id", self.user_id)
            .order("created_at", desc=True),
            "list_goals",
        )
        return [FinancialGoal.model_validate(row) for row in rows]

    def get_goal(self, goal_id: str) -> FinancialGoal:
        row = self._single(
            self.client.table("financial_goals")
            .select("*")
            .eq("id", goal_id)
            .eq("user_id", self.user_id)
            .limit(1),
            "get_goal",
            f"Goal {goal_id} not found",
        )
        return FinancialGoal.model_validate(row)

    def create_goal(self, values: dict[str, Any]) -> FinancialGoal:
        row = goal_row(values) | {"user_id": self.user_id}
        created = self._single(
            self.client.table("financial_goals").insert(row),
            "create_goal",
            "Goal was not created",
        )
        logger.info("goal_created", goal_id=created.get("id"))
        return FinancialGoal.model_validate(created)

    def update_goal(self, goal_id: str, values: dict[str, Any]) -> FinancialGoal:
        updated = self._single(
            self.client.table("financial_goals")
            .update(goal_row(values))
            .eq("id", goal_id)
            .eq("user_id", self.user_id),
            "update_goal",
            f"Goal {goal_id} not found",
        )
        return FinancialGoal.model_validate(updated)

    def delete_goal(self, goal_id: str) -> None:
        self._single(
            self.client.table("financial_goals")
            .delete()
            .eq("id", goal_id)
            .eq("user_id", self.user_id),
            "delete_goal",
            f"Goal {goal_id} not found",
        )

    # ------------------------------------------------------------------
    # Account and administration
    # ------------------------------------------------------------------

    def get_profile(self) -> Optional[dict]:
        rows = self._execute(
            self.client.table("profiles").select("*").eq("id", self.user_id).limit(1),
            "get_profile",
        )
        return rows[0] if rows else None

    def get_role(self, user_id: Optional[str] = None) -> str:
        """Role stored for the user; users without a row are plain users."""
        rows = self._execute(
            self.client.table("user_roles")
            .select("role")
            .eq("user_id", user_id or self.user_id)
            .limit(1),
            "get_role",
        )
        if rows:
            return rows[0].get("role") or DEFAULT_ROLE
        return DEFAULT_ROLE

    def list_users(self) -> list[dict]:
        """Every profile with its role attached."""
        profiles = self._execute(self.client.table("profiles").select("*"), "list_profiles")
        roles = self._execute(self.client.table("user_roles").select("*"), "list_roles")
        role_by_user = {row["user_id"]: row.get("role") for row in roles}
        return [
            {**profile, "role": role_by_user.get(profile["id"]) or DEFAULT_ROLE}
            for profile in profiles
        ]

    def set_role(self, user_id: str, role: str) -> dict:
        """Change the role of ``user_id``. RLS only lets admins do this."""
        row = self._single(
            self.client.table("user_roles").update({"role": role}).eq("user_id", user_id),
            "set_role",
            f"User {user_id} not found",
        )
        logger.info("user_role_changed", target_user_id=user_id, role=role)
        return row

    def list_access_logs(self, limit: int = ACCESS_LOG_LIMIT) -> list[dict]:
        return self._execute(
            self.client.table("user_access_logs")
            .select("*, profiles:user_id (full_name)")
            .order("created_at", desc=True)
            .limit(limit),
            "list_access_logs",
        )

    def list_user_preferences(self) -> list[dict]:
        return self._execute(
            self.client.table("user_preferences")
            .select("*, profiles:user_id (full_name)")
            .order("created_at", desc=True),
            "list_user_preferences",
        )

    def log_access(self, action: str, user_agent: Optional[str] = None) -> None:
        self._execute(
            self.client.table("user_access_logs").insert(
                {
                    "user_id": self.user_id,
                    "action": action,
                    "ip_address": None,
                    "user_agent": user_agent,
                }
            ),
            "log_access",
        )


async def get_repository(
    user: CurrentUser = Depends(get_current_user),
    client: Client = Depends(get_user_client),
) -> FinanceRepository:
    """FastAPI dependency: a repository scoped to the authenticated caller."""
    return FinanceRepository(client, user.id)


async def require_admin(
    repository: FinanceRepository = Depends(get_repository),
) -> FinanceRepository:
    """Allow the request through only for callers with the admin role."""
    if repository.get_role() != ADMIN_ROLE:
        logger.warning("admin_access_denied", user_id=repository.user_id)
        raise ForbiddenError()
    return repository
