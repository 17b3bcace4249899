"""Expense business logic"""
import logging
from datetime import date
from typing import List
from uuid import UUID

from shareledger.config import get_settings
from shareledger.core.exceptions import (AuthorizationError, NotFoundError,
                                         ValidationError)
from shareledger.models.expense import Expense, ExpenseSplit
from shareledger.repositories.expense_repository import ExpenseRepository
from shareledger.schemas.expense import ExpenseCreate
from shareledger.services import currency_service
from shareledger.services.settlement_service import SettlementService
from shareledger.services.split_strategies import (adjusted_total,
                                                   get_split_strategy)
from shareledger.utils.decimal_utils import round_decimal

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense operations"""

    @staticmethod
    def build_expense(expense_data: ExpenseCreate) -> Expense:
        """
        Run the split calculator and assemble an unsettled expense.

        The total is first rounded to the currency precision; with
        adjustments present the stored total is the adjusted total, so the
        splits always sum to it.

        Args:
            expense_data: Expense creation data

        Returns:
            New expense, not yet stored

        Raises:
            ValidationError: If the split produced no allocations
        """
        currency = currency_service.normalize_code(
            expense_data.currency or get_settings().default_currency
        )
        precision = currency_service.minor_units(currency)
        total_amount = round_decimal(expense_data.total_amount, precision)
        parameters = expense_data.to_parameters()

        strategy = get_split_strategy(
            expense_data.split_type, with_adjustments=bool(parameters.adjustments)
        )
        calculated_splits = strategy.calculate_splits(
            total_amount,
            expense_data.involved_member_ids,
            parameters,
            precision,
        )

        if not calculated_splits:
            raise ValidationError(
                f"Split produced no allocations for {expense_data.split_type.value} "
                f"split of {total_amount} {currency}"
            )

        if parameters.adjustments:
            total_amount = adjusted_total(
                total_amount, expense_data.involved_member_ids, parameters, precision
            )

        return Expense(
            group_id=expense_data.group_id,
            description=expense_data.description,
            date=expense_data.date or date.today(),
            total_amount=total_amount,
            currency=currency,
            paid_by_member_id=expense_data.paid_by_member_id,
            involved_member_ids=expense_data.involved_member_ids,
            splits=[
                ExpenseSplit(member_id=split.member_id, amount=split.amount)
                for split in calculated_splits
            ],
        )

    @staticmethod
    def create_expense(expense_data: ExpenseCreate, repository: ExpenseRepository) -> Expense:
        """
        Create a new expense.

        Args:
            expense_data: Expense creation data
            repository: Expense store

        Returns:
            Created expense with splits

        Raises:
            ValidationError: If validation fails
        """
        expense = repository.create(ExpenseService.build_expense(expense_data))
        logger.info(
            "Created expense %s in group %s: %s %s across %d splits",
            expense.id,
            expense.group_id,
            expense.total_amount,
            expense.currency,
            len(expense.splits),
        )
        return expense

    @staticmethod
    def get_expense(expense_id: UUID, repository: ExpenseRepository) -> Expense:
        """
        Get expense details.

        Raises:
            NotFoundError: If expense not found
        """
        expense = repository.get_by_id(expense_id)
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    @staticmethod
    def list_group_expenses(group_id: UUID, repository: ExpenseRepository) -> List[Expense]:
        """Expenses of a group, oldest first"""
        return repository.list_by_group(group_id)

    @staticmethod
    def delete_expense(expense_id: UUID, repository: ExpenseRepository) -> bool:
        """
        Delete an expense regardless of its settlement state.

        Raises:
            NotFoundError: If expense not found
        """
        if not repository.delete(expense_id):
            raise NotFoundError("Expense not found")

        logger.info("Deleted expense %s", expense_id)
        return True

    @staticmethod
    def settle_member(
        expense_id: UUID, member_id: UUID, repository: ExpenseRepository
    ) -> Expense:
        """
        Settle one member's share of an expense.

        A member without a share leaves the expense unchanged.

        Raises:
            NotFoundError: If expense not found
        """
        with repository.locked(expense_id) as expense:
            if expense is None:
                raise NotFoundError("Expense not found")
            return SettlementService.mark_settled(expense, member_id)

    @staticmethod
    def settle_all(
        expense_id: UUID, requested_by: UUID, repository: ExpenseRepository
    ) -> Expense:
        """
        Settle every share of an expense on the payer's behalf.

        Raises:
            NotFoundError: If expense not found
            AuthorizationError: If the requester is not the payer
        """
        with repository.locked(expense_id) as expense:
            if expense is None:
                raise NotFoundError("Expense not found")
            if not SettlementService.can_settle_for_all(expense, requested_by):
                raise AuthorizationError("Only the payer can settle the whole expense")
            return SettlementService.mark_all_settled(expense)
