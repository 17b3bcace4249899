"""Deterministic minor-unit allocation shared by the split strategies"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, List, Mapping, Union
from uuid import UUID

from shareledger.services.split_strategies.base import MemberSplit
from shareledger.utils.decimal_utils import from_minor_units, to_minor_units

logger = logging.getLogger(__name__)

Weight = Union[int, Decimal]


def canonical_order(member_ids: Iterable[UUID]) -> List[UUID]:
    """Unique member ids sorted by their canonical string form"""
    return sorted(set(member_ids), key=str)


def allocate_by_weights(
    total_amount: Decimal,
    weights: Mapping[UUID, Weight],
    minor_units: int = 2,
) -> List[MemberSplit]:
    """
    Split a total across members in proportion to their weights.

    The total is converted to integer minor units and each member's exact
    share is truncated toward zero. The leftover units, fewer than the
    number of weighted members, go one apiece to the members with the
    smallest id strings, signed like the leftover. Members with a zero
    weight get exactly zero and never receive a leftover unit.

    Args:
        total_amount: Amount to allocate (may be negative)
        weights: Per-member weight; only ratios matter
        minor_units: Decimal places of the currency

    Returns:
        MemberSplit per member in ascending member-id order, or an empty
        list when there are no members or the weights sum to zero
    """
    if not weights:
        return []

    weight_sum = sum((Fraction(w) for w in weights.values()), Fraction(0))
    if weight_sum == 0:
        return []

    total_minor = to_minor_units(total_amount, minor_units)
    ordered = canonical_order(weights)

    # int() on a Fraction truncates toward zero
    base: Dict[UUID, int] = {
        member_id: int(total_minor * Fraction(weights[member_id]) / weight_sum)
        for member_id in ordered
    }

    remainder = total_minor - sum(base.values())
    if remainder:
        step = 1 if remainder > 0 else -1
        eligible = [m for m in ordered if weights[m] != 0]
        for member_id in eligible[: abs(remainder)]:
            base[member_id] += step
        logger.debug(
            "Distributed %d leftover minor unit(s) across %d members",
            remainder,
            len(eligible),
        )

    return [
        MemberSplit(member_id=member_id, amount=from_minor_units(base[member_id], minor_units))
        for member_id in ordered
    ]
