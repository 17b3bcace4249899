"""Integration tests for application-level routes and error handling"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from shareledger.main import app, settings
from shareledger.models.expense import Expense


class TestAppRoutes:
    """Test root and health endpoints"""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        """Root advertises the API prefix and default currency"""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["api_prefix"] == "/api/v1"
        assert len(data["default_currency"]) == 3

    def test_debug_follows_settings(self):
        """The app runs in debug mode only when configured to"""
        assert app.debug is settings.debug


class TestErrorHandling:
    """Test application exception rendering"""

    @pytest.mark.asyncio
    async def test_conflict_is_rendered(self, client: AsyncClient, repository, monkeypatch):
        """Errors without a route-level handler use the application error body"""
        existing = Expense(
            group_id=uuid4(),
            description="Existing",
            total_amount="1.00",
            paid_by_member_id=uuid4(),
            involved_member_ids=[],
        )
        repository.create(existing)

        # Force the next created expense to reuse the stored id
        original_create = repository.create

        def create_with_existing_id(expense):
            return original_create(expense.model_copy(update={"id": existing.id}))

        monkeypatch.setattr(repository, "create", create_with_existing_id)
        member = str(uuid4())

        response = await client.post(
            "/api/v1/expenses",
            json={
                "group_id": str(uuid4()),
                "description": "Duplicate",
                "total_amount": "5.00",
                "paid_by_member_id": member,
                "involved_member_ids": [member],
            },
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["type"] == "ConflictError"
        assert error["path"] == "/api/v1/expenses"
