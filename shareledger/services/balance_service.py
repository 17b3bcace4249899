"""Balance calculation logic"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from shareledger.models.expense import Expense
from shareledger.schemas.balance import (BalanceType, GroupBalanceSummary,
                                         MemberBalance, PairwiseBalance)
from shareledger.services import currency_service
from shareledger.services.split_strategies import canonical_order
from shareledger.utils.decimal_utils import sum_decimals

DEFAULT_EPSILON = Decimal("0.0001")


class BalanceService:
    """
    Service for balance calculation operations.

    Balances are derived from stored splits only; the calculator is not
    re-run. Fully settled expenses contribute nothing.
    """

    @staticmethod
    def _select(
        expenses: Iterable[Expense],
        group_id: Optional[UUID] = None,
        currency: Optional[str] = None,
    ) -> List[Expense]:
        """Expenses of a group and/or currency"""
        if currency is not None:
            currency = currency_service.normalize_code(currency)

        selected = []
        for expense in expenses:
            if group_id is not None and expense.group_id != group_id:
                continue
            if currency is not None and expense.currency != currency:
                continue
            selected.append(expense)
        return selected

    @staticmethod
    def expense_contribution(expense: Expense, member_id: UUID) -> Decimal:
        """
        Signed contribution of one expense to a member's net balance.

        The payer is credited with the total minus the shares already
        reimbursed; a member with an unsettled share is debited that share.
        A payer who also holds an unsettled share gets both terms.

        Args:
            expense: Expense with its splits
            member_id: Member whose balance is computed

        Returns:
            Credit minus debit (zero for settled expenses)
        """
        if expense.is_settled:
            return Decimal("0")

        credit = Decimal("0")
        if expense.paid_by_member_id == member_id:
            reimbursed = sum_decimals(s.amount for s in expense.settled_splits)
            credit = expense.total_amount - reimbursed

        debit = Decimal("0")
        split = expense.split_for(member_id)
        if split is not None and not split.is_settled:
            debit = split.amount

        return credit - debit

    @staticmethod
    def net_balance(
        expenses: Iterable[Expense],
        member_id: UUID,
        group_id: Optional[UUID] = None,
        currency: Optional[str] = None,
    ) -> Decimal:
        """
        Net balance for a member across expenses.

        Args:
            expenses: Expenses to consider
            member_id: Member ID
            group_id: Optional group filter
            currency: Optional currency filter

        Returns:
            Positive when the member is owed money, negative when they owe
        """
        return sum_decimals(
            BalanceService.expense_contribution(expense, member_id)
            for expense in BalanceService._select(expenses, group_id, currency)
        )

    @staticmethod
    def group_balances(
        expenses: Iterable[Expense],
        group_id: UUID,
        currency: Optional[str] = None,
    ) -> Dict[UUID, Decimal]:
        """
        Net balance of every member appearing in a group's expenses.

        Members are payers or split holders; the mapping iterates in
        ascending member-id order.
        """
        group_expenses = BalanceService._select(expenses, group_id, currency)

        members = set()
        for expense in group_expenses:
            members.add(expense.paid_by_member_id)
            members.update(split.member_id for split in expense.splits)

        return {
            member_id: BalanceService.net_balance(group_expenses, member_id)
            for member_id in canonical_order(members)
        }

    @staticmethod
    def pairwise_balance(
        expenses: Iterable[Expense],
        member_id: UUID,
        other_member_id: UUID,
        currency: Optional[str] = None,
    ) -> Decimal:
        """
        Calculate the direct balance between two specific members.

        Positive means other member owes member, negative means member
        owes other member. Only unsettled shares on expenses paid by one
        of the two count.

        This method is symmetric: pairwise_balance(A, B) = -pairwise_balance(B, A)
        """
        total_balance = Decimal("0")

        for expense in BalanceService._select(expenses, currency=currency):
            if expense.is_settled:
                continue

            if expense.paid_by_member_id == member_id:
                split = expense.split_for(other_member_id)
                if split is not None and not split.is_settled:
                    total_balance += split.amount
            elif expense.paid_by_member_id == other_member_id:
                split = expense.split_for(member_id)
                if split is not None and not split.is_settled:
                    total_balance -= split.amount

        return total_balance

    @staticmethod
    def balance_status(amount: Decimal, epsilon: Decimal = DEFAULT_EPSILON) -> BalanceType:
        """Classify a net balance; values within epsilon of zero are settled"""
        if abs(amount) <= epsilon:
            return "settled"
        return "owed" if amount > 0 else "owes"

    @staticmethod
    def member_balance(
        expenses: Iterable[Expense],
        member_id: UUID,
        currency: str,
        group_id: Optional[UUID] = None,
        epsilon: Decimal = DEFAULT_EPSILON,
    ) -> MemberBalance:
        """Net balance of a member in one currency, with its status"""
        amount = BalanceService.net_balance(expenses, member_id, group_id, currency)
        return MemberBalance(
            member_id=member_id,
            amount=amount,
            type=BalanceService.balance_status(amount, epsilon),
            currency=currency_service.normalize_code(currency),
        )

    @staticmethod
    def get_pairwise_balance(
        expenses: Iterable[Expense],
        member_id: UUID,
        other_member_id: UUID,
        currency: str,
        epsilon: Decimal = DEFAULT_EPSILON,
    ) -> PairwiseBalance:
        """Pairwise balance in one currency, with its status"""
        amount = BalanceService.pairwise_balance(
            expenses, member_id, other_member_id, currency
        )
        return PairwiseBalance(
            member_id=member_id,
            other_member_id=other_member_id,
            amount=amount,
            type=BalanceService.balance_status(amount, epsilon),
            currency=currency_service.normalize_code(currency),
        )

    @staticmethod
    def group_summary(
        expenses: Iterable[Expense],
        group_id: UUID,
        currency: str,
        epsilon: Decimal = DEFAULT_EPSILON,
    ) -> GroupBalanceSummary:
        """
        Get balance summary for a group.

        Args:
            expenses: Expenses to consider
            group_id: Group ID
            currency: Only expenses in this currency are summed
            epsilon: Band treated as settled

        Returns:
            GroupBalanceSummary with one entry per member and the total
            still owed to creditors
        """
        currency = currency_service.normalize_code(currency)
        balances = BalanceService.group_balances(expenses, group_id, currency)

        member_balances = [
            MemberBalance(
                member_id=member_id,
                amount=amount,
                type=BalanceService.balance_status(amount, epsilon),
                currency=currency,
            )
            for member_id, amount in balances.items()
        ]
        total_outstanding = sum_decimals(
            b.amount for b in member_balances if b.type == "owed"
        )

        return GroupBalanceSummary(
            group_id=group_id,
            currency=currency,
            balances=member_balances,
            total_outstanding=total_outstanding,
        )
