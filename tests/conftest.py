"""Pytest fixtures and configuration"""

from typing import AsyncGenerator, List
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shareledger.api.deps import get_expense_repository
from shareledger.main import app
from shareledger.repositories.expense_repository import ExpenseRepository


def sorted_ids(count: int) -> List[UUID]:
    """Fresh member ids in canonical (string) order"""
    return sorted((uuid4() for _ in range(count)), key=str)


@pytest.fixture
def repository() -> ExpenseRepository:
    """Fresh expense store for each test"""
    return ExpenseRepository()


@pytest.fixture
def group_id() -> UUID:
    """Group ID"""
    return uuid4()


@pytest.fixture
def members() -> List[UUID]:
    """Three member ids in canonical order"""
    return sorted_ids(3)


@pytest_asyncio.fixture
async def client(repository: ExpenseRepository) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with repository override"""

    app.dependency_overrides[get_expense_repository] = lambda: repository

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_members():
    """Factory for canonically ordered member ids"""
    return sorted_ids
