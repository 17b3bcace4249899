"""Expense data access"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional
from uuid import UUID

from shareledger.core.exceptions import ConflictError
from shareledger.models.expense import Expense


class ExpenseRepository:
    """
    In-memory store for expenses.

    Each expense has its own lock; settlement writes on one expense are
    serialized while writes on different expenses proceed independently.
    """

    def __init__(self) -> None:
        self._expenses: Dict[UUID, Expense] = {}
        self._locks: Dict[UUID, threading.Lock] = {}
        self._guard = threading.Lock()

    def create(self, expense: Expense) -> Expense:
        """
        Store a new expense.

        Raises:
            ConflictError: If an expense with the same id exists
        """
        with self._guard:
            if expense.id in self._expenses:
                raise ConflictError(f"Expense {expense.id} already exists")
            self._expenses[expense.id] = expense
            self._locks[expense.id] = threading.Lock()
        return expense

    def get_by_id(self, expense_id: UUID) -> Optional[Expense]:
        """Expense if found, None otherwise"""
        with self._guard:
            return self._expenses.get(expense_id)

    def list_all(self) -> List[Expense]:
        """All expenses, oldest date first"""
        with self._guard:
            expenses = list(self._expenses.values())
        return sorted(expenses, key=lambda e: e.date)

    def list_by_group(self, group_id: UUID) -> List[Expense]:
        """Expenses of a group, oldest date first"""
        return [e for e in self.list_all() if e.group_id == group_id]

    def delete(self, expense_id: UUID) -> bool:
        """Remove an expense; True if it existed"""
        with self._guard:
            self._locks.pop(expense_id, None)
            return self._expenses.pop(expense_id, None) is not None

    @contextmanager
    def locked(self, expense_id: UUID) -> Iterator[Optional[Expense]]:
        """
        Hold an expense's write lock.

        Yields the expense, or None if it does not exist.
        """
        with self._guard:
            lock = self._locks.get(expense_id)
        if lock is None:
            yield None
            return
        with lock:
            yield self.get_by_id(expense_id)
