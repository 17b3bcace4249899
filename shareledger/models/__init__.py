"""Domain models"""
from shareledger.models.expense import Expense, ExpenseSplit, SplitType

__all__ = ["Expense", "ExpenseSplit", "SplitType"]
