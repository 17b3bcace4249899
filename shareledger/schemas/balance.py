"""Balance schemas"""
from decimal import Decimal
from typing import List, Literal
from uuid import UUID

from pydantic import BaseModel

BalanceType = Literal["owed", "owes", "settled"]


class MemberBalance(BaseModel):
    """Net balance of one member"""
    member_id: UUID
    amount: Decimal  # positive = member is owed, negative = member owes
    type: BalanceType
    currency: str


class GroupBalanceSummary(BaseModel):
    """Per-member balances of a group"""
    group_id: UUID
    currency: str
    balances: List[MemberBalance]
    total_outstanding: Decimal


class PairwiseBalance(BaseModel):
    """Balance between a member and one other member"""
    member_id: UUID
    other_member_id: UUID
    amount: Decimal  # positive = other member owes this member
    type: BalanceType
    currency: str
