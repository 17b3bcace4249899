"""Itemized split strategy with derived fees"""

from decimal import Decimal
from typing import Iterable, List, Mapping, Optional
from uuid import UUID

from shareledger.services.split_strategies.allocation import (
    allocate_by_weights, canonical_order)
from shareledger.services.split_strategies.base import (BaseSplitStrategy,
                                                        MemberSplit,
                                                        SplitParameters)
from shareledger.utils.decimal_utils import sum_decimals, to_decimal


class ItemizedSplitStrategy(BaseSplitStrategy):
    """Strategy for itemized subtotals plus proportionally shared fees"""

    def calculate_splits(
        self,
        total_amount: Decimal,
        member_ids: Iterable[UUID],
        parameters: Optional[SplitParameters] = None,
        minor_units: int = 2,
    ) -> List[MemberSplit]:
        """
        Calculate itemized split.

        Fees are whatever the total holds beyond the itemized subtotals
        (tax, tip, or a negative discount) and are shared in proportion
        to each member's subtotal:

            amount = item + item / sum(items) * (total - sum(items))

        which reduces to total * item / sum(items), so the subtotals act
        as allocation weights.

        Args:
            total_amount: Total expense amount including fees
            member_ids: Members sharing the expense
            parameters: Holds the `itemized_amounts` mapping
            minor_units: Decimal places of the currency

        Returns:
            List of MemberSplit, or empty when the subtotals sum to zero
        """
        parameters = parameters or SplitParameters()
        members = canonical_order(member_ids)

        items = {member_id: parameters.itemized_for(member_id) for member_id in members}
        if sum_decimals(items.values()) == 0:
            return []

        return allocate_by_weights(total_amount, items, minor_units)


def calculate_itemized_with_tax_and_tip(
    member_ids: Iterable[UUID],
    itemized_amounts: Mapping[UUID, Decimal],
    tax: Decimal = Decimal("0"),
    tip: Decimal = Decimal("0"),
    minor_units: int = 2,
) -> List[MemberSplit]:
    """
    Itemized split where the fees are given explicitly.

    The total is the subtotals plus tax and tip; the split itself is the
    derived-fee itemized split of that total.
    """
    members = canonical_order(member_ids)
    parameters = SplitParameters(itemized_amounts=dict(itemized_amounts))
    total = sum_decimals(parameters.itemized_for(m) for m in members)
    total += to_decimal(tax) + to_decimal(tip)
    return ItemizedSplitStrategy().calculate_splits(
        total, members, parameters, minor_units
    )
