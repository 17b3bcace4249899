"""Balance endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from shareledger.api.deps import get_expense_repository
from shareledger.config import Settings, get_settings
from shareledger.repositories.expense_repository import ExpenseRepository
from shareledger.schemas.balance import (GroupBalanceSummary, MemberBalance,
                                         PairwiseBalance)
from shareledger.services.balance_service import BalanceService

router = APIRouter(tags=["Balances"])


@router.get("/groups/{group_id}/balances", response_model=GroupBalanceSummary)
async def get_group_balances(
    group_id: UUID,
    currency: Optional[str] = Query(None, min_length=3, max_length=3),
    repository: ExpenseRepository = Depends(get_expense_repository),
    settings: Settings = Depends(get_settings),
):
    """
    Get net balance of every member of a group.

    Positive amounts are owed to the member, negative amounts are owed
    by the member. Only expenses in the requested currency are summed.

    Args:
        group_id: Group UUID
        currency: Currency code (defaults to the configured currency)
        repository: Expense store
        settings: Application settings

    Returns:
        Group balance summary
    """
    return BalanceService.group_summary(
        repository.list_by_group(group_id),
        group_id,
        currency or settings.default_currency,
        settings.balance_epsilon,
    )


@router.get("/members/{member_id}/balance", response_model=MemberBalance)
async def get_member_balance(
    member_id: UUID,
    group_id: Optional[UUID] = Query(None, description="Restrict to one group"),
    currency: Optional[str] = Query(None, min_length=3, max_length=3),
    repository: ExpenseRepository = Depends(get_expense_repository),
    settings: Settings = Depends(get_settings),
):
    """
    Get a member's overall net balance, optionally within one group.
    """
    return BalanceService.member_balance(
        repository.list_all(),
        member_id,
        currency or settings.default_currency,
        group_id=group_id,
        epsilon=settings.balance_epsilon,
    )


@router.get("/members/{member_id}/balance/{other_member_id}", response_model=PairwiseBalance)
async def get_pairwise_balance(
    member_id: UUID,
    other_member_id: UUID,
    currency: Optional[str] = Query(None, min_length=3, max_length=3),
    repository: ExpenseRepository = Depends(get_expense_repository),
    settings: Settings = Depends(get_settings),
):
    """
    Get balance between a member and one other member.

    Positive means the other member owes `member_id`.
    """
    return BalanceService.get_pairwise_balance(
        repository.list_all(),
        member_id,
        other_member_id,
        currency or settings.default_currency,
        settings.balance_epsilon,
    )
