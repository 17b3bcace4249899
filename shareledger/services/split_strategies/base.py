"""Base strategy interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from shareledger.utils.decimal_utils import to_decimal


class MemberSplit(BaseModel):
    """Result of split calculation for a member"""

    member_id: UUID
    amount: Decimal


class SplitParameters(BaseModel):
    """
    Strategy-specific inputs keyed by member id.

    Lookups never fail for absent members: shares default to 1,
    itemized subtotals and adjustments default to 0.
    """

    shares: Dict[UUID, int] = Field(default_factory=dict)
    itemized_amounts: Dict[UUID, Decimal] = Field(default_factory=dict)
    adjustments: Dict[UUID, Decimal] = Field(default_factory=dict)

    @field_validator("itemized_amounts", "adjustments", mode="before")
    @classmethod
    def convert_amounts(cls, v):
        """Convert mapping values to Decimal"""
        if v is None:
            return {}
        return {member_id: to_decimal(amount) for member_id, amount in v.items()}

    def share_for(self, member_id: UUID) -> int:
        return self.shares.get(member_id, 1)

    def itemized_for(self, member_id: UUID) -> Decimal:
        return self.itemized_amounts.get(member_id, Decimal("0"))

    def adjustment_for(self, member_id: UUID) -> Decimal:
        return self.adjustments.get(member_id, Decimal("0"))


class BaseSplitStrategy(ABC):
    """Base class for split strategies"""

    @abstractmethod
    def calculate_splits(
        self,
        total_amount: Decimal,
        member_ids: Iterable[UUID],
        parameters: Optional[SplitParameters] = None,
        minor_units: int = 2,
    ) -> List[MemberSplit]:
        """
        Calculate split amounts for members.

        Args:
            total_amount: Total expense amount (negative for refunds)
            member_ids: Members sharing the expense, in any order
            parameters: Strategy-specific per-member inputs
            minor_units: Decimal places of the expense currency

        Returns:
            List of MemberSplit in ascending member-id order; empty when
            the allocation is undefined for the inputs
        """
        pass
