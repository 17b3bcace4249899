"""Expense schemas"""

from datetime import date as date_type
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shareledger.models.expense import SplitType
from shareledger.services.split_strategies import SplitParameters
from shareledger.utils.decimal_utils import to_decimal


class ExpenseCreate(BaseModel):
    """Schema for creating an expense"""

    group_id: UUID
    description: str = Field(..., max_length=500, min_length=1)
    date: Optional[date_type] = None
    total_amount: Decimal
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    paid_by_member_id: UUID
    involved_member_ids: List[UUID] = Field(..., min_length=1)
    split_type: SplitType = SplitType.EQUAL
    shares: Dict[UUID, int] = Field(default_factory=dict)
    itemized_amounts: Dict[UUID, Decimal] = Field(default_factory=dict)
    adjustments: Dict[UUID, Decimal] = Field(default_factory=dict)

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        """Convert total_amount to Decimal"""
        return to_decimal(v)

    @field_validator("itemized_amounts", "adjustments", mode="before")
    @classmethod
    def convert_amounts(cls, v):
        """Convert mapping values to Decimal"""
        if v is None:
            return {}
        return {member_id: to_decimal(amount) for member_id, amount in v.items()}

    @field_validator("involved_member_ids")
    @classmethod
    def validate_involved_members(cls, v):
        """Reject repeated members"""
        if len(v) != len(set(v)):
            raise ValueError("Involved members must be unique")
        return v

    def to_parameters(self) -> SplitParameters:
        """Strategy parameters carried by this request"""
        return SplitParameters(
            shares=self.shares,
            itemized_amounts=self.itemized_amounts,
            adjustments=self.adjustments,
        )


class SplitResponse(BaseModel):
    """Response schema for an expense split"""

    id: UUID
    member_id: UUID
    amount: Decimal
    is_settled: bool

    model_config = ConfigDict(from_attributes=True)


class ExpenseResponse(BaseModel):
    """Complete expense response schema"""

    id: UUID
    group_id: UUID
    description: str
    date: date_type
    total_amount: Decimal
    currency: str
    paid_by_member_id: UUID
    involved_member_ids: List[UUID]
    splits: List[SplitResponse]
    is_settled: bool

    model_config = ConfigDict(from_attributes=True)


class ExpenseListResponse(BaseModel):
    """Response schema for expense list"""

    items: List[ExpenseResponse]


class SettleMemberRequest(BaseModel):
    """Settle one member's share"""

    member_id: UUID


class SettleAllRequest(BaseModel):
    """Settle every share; only the payer may ask"""

    requested_by: UUID
