"""Dependency injection (repository, settings)"""

from functools import lru_cache

from shareledger.repositories.expense_repository import ExpenseRepository


@lru_cache()
def get_expense_repository() -> ExpenseRepository:
    """
    Get the process-wide expense store.

    Returns:
        ExpenseRepository shared by all requests
    """
    return ExpenseRepository()
