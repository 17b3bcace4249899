"""Settlement tracking for expense splits"""

import logging
from uuid import UUID

from shareledger.models.expense import Expense

logger = logging.getLogger(__name__)


class SettlementService:
    """
    Service for marking shares reimbursed.

    Settlement is one-way: nothing here clears a split's flag. Operations
    on members without a split are no-ops. Callers sharing an expense
    across threads must hold the expense's lock while mutating it.
    """

    @staticmethod
    def mark_settled(expense: Expense, member_id: UUID) -> Expense:
        """
        Settle one member's share and recompute the expense flag.

        Args:
            expense: Expense to update in place
            member_id: Member whose share was reimbursed

        Returns:
            The same expense
        """
        split = expense.split_for(member_id)
        if split is None:
            return expense

        split.is_settled = True
        expense.is_settled = expense.all_splits_settled

        logger.info(
            "Settled share of member %s on expense %s (fully settled: %s)",
            member_id,
            expense.id,
            expense.is_settled,
        )
        return expense

    @staticmethod
    def mark_all_settled(expense: Expense) -> Expense:
        """
        Settle every share, as when the payer reconciles the whole expense.

        Args:
            expense: Expense to update in place

        Returns:
            The same expense
        """
        for split in expense.splits:
            split.is_settled = True
        expense.is_settled = True

        logger.info("Settled all %d shares on expense %s", len(expense.splits), expense.id)
        return expense

    @staticmethod
    def can_settle_for_all(expense: Expense, member_id: UUID) -> bool:
        """Only the payer can settle the whole expense"""
        return expense.paid_by_member_id == member_id

    @staticmethod
    def can_settle_for_self(expense: Expense, member_id: UUID) -> bool:
        """Any involved member can settle their own share"""
        return member_id in expense.involved_member_ids
