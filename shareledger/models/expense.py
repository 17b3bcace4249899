"""Expense and split domain models"""
import enum
import uuid
from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from shareledger.services import currency_service
from shareledger.utils.decimal_utils import to_decimal


class SplitType(str, enum.Enum):
    """Enum for split types"""
    EQUAL = "EQUAL"
    SHARES = "SHARES"
    ITEMIZED = "ITEMIZED"


class ExpenseSplit(BaseModel):
    """One member's allocated share of an expense"""

    id: UUID = Field(default_factory=uuid.uuid4)
    member_id: UUID
    amount: Decimal
    is_settled: bool = False

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v):
        """Convert amount to Decimal"""
        return to_decimal(v)

    def __repr__(self) -> str:
        return f"<ExpenseSplit(member_id={self.member_id}, amount={self.amount}, settled={self.is_settled})>"


class Expense(BaseModel):
    """
    Shared expense with per-member splits.

    `is_settled` is stored alongside the splits and is kept equal to the
    conjunction of every split's flag; an expense without splits is settled.
    Only the settlement flags change after creation.
    """

    id: UUID = Field(default_factory=uuid.uuid4)
    group_id: UUID
    description: str
    date: date_type = Field(default_factory=date_type.today)
    total_amount: Decimal
    currency: str = "USD"
    paid_by_member_id: UUID
    involved_member_ids: List[UUID]
    splits: List[ExpenseSplit] = Field(default_factory=list)
    is_settled: bool = False

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        """Convert total_amount to Decimal"""
        return to_decimal(v)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Store currency codes trimmed and upper-case"""
        return currency_service.normalize_code(v)

    @model_validator(mode="after")
    def check_splits(self) -> "Expense":
        """Validate split members and derive the expense-level flag"""
        member_ids = [split.member_id for split in self.splits]
        if len(member_ids) != len(set(member_ids)):
            raise ValueError("An expense cannot hold two splits for the same member")

        involved = set(self.involved_member_ids)
        stray = [m for m in member_ids if m not in involved]
        if stray:
            raise ValueError(f"Split members must be involved in the expense: {stray}")

        self.is_settled = self.all_splits_settled
        return self

    @property
    def all_splits_settled(self) -> bool:
        """True when every split is settled (vacuously true without splits)"""
        return all(split.is_settled for split in self.splits)

    @property
    def settled_splits(self) -> List[ExpenseSplit]:
        return [split for split in self.splits if split.is_settled]

    @property
    def unsettled_splits(self) -> List[ExpenseSplit]:
        return [split for split in self.splits if not split.is_settled]

    def split_for(self, member_id: UUID) -> Optional[ExpenseSplit]:
        """Split held by a member, or None if the member has no share"""
        return next((s for s in self.splits if s.member_id == member_id), None)

    def is_settled_for(self, member_id: UUID) -> bool:
        """Whether a member's share is settled; False when they have none"""
        split = self.split_for(member_id)
        return split.is_settled if split else False

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, description={self.description}, total_amount={self.total_amount})>"
