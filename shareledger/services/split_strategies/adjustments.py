"""Additive adjustments applied on top of another strategy"""

from decimal import Decimal
from typing import Iterable, List, Mapping, Optional
from uuid import UUID

from shareledger.services.split_strategies.allocation import canonical_order
from shareledger.services.split_strategies.base import (BaseSplitStrategy,
                                                        MemberSplit,
                                                        SplitParameters)
from shareledger.utils.decimal_utils import round_decimal, sum_decimals


def apply_adjustments(
    splits: List[MemberSplit],
    adjustments: Mapping[UUID, Decimal],
    minor_units: int = 2,
) -> List[MemberSplit]:
    """
    Add each member's signed delta to their base amount.

    Deltas are rounded to the currency precision; unlisted members and
    deltas for members without a split are ignored.
    """
    return [
        MemberSplit(
            member_id=split.member_id,
            amount=split.amount
            + round_decimal(adjustments.get(split.member_id, Decimal("0")), minor_units),
        )
        for split in splits
    ]


def adjusted_total(
    total_amount: Decimal,
    member_ids: Iterable[UUID],
    parameters: Optional[SplitParameters] = None,
    minor_units: int = 2,
) -> Decimal:
    """
    Total tracked once adjustments are applied.

    This intentionally differs from the entered total by the sum of the
    adjustments of the members sharing the expense.
    """
    parameters = parameters or SplitParameters()
    deltas = (
        round_decimal(parameters.adjustment_for(member_id), minor_units)
        for member_id in canonical_order(member_ids)
    )
    return total_amount + sum_decimals(deltas)


class AdjustedSplitStrategy(BaseSplitStrategy):
    """Strategy wrapper that overlays per-member adjustments"""

    def __init__(self, base_strategy: BaseSplitStrategy):
        self.base_strategy = base_strategy

    def calculate_splits(
        self,
        total_amount: Decimal,
        member_ids: Iterable[UUID],
        parameters: Optional[SplitParameters] = None,
        minor_units: int = 2,
    ) -> List[MemberSplit]:
        """
        Calculate base split, then add adjustments.

        The amounts sum to `adjusted_total(...)`, not to `total_amount`.
        An empty base allocation stays empty.
        """
        parameters = parameters or SplitParameters()
        members = canonical_order(member_ids)

        splits = self.base_strategy.calculate_splits(
            total_amount, members, parameters, minor_units
        )
        return apply_adjustments(splits, parameters.adjustments, minor_units)
