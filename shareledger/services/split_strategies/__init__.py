"""Split calculation strategies"""

from shareledger.core.exceptions import ValidationError
from shareledger.models.expense import SplitType
from shareledger.services.split_strategies.adjustments import (
    AdjustedSplitStrategy, adjusted_total, apply_adjustments)
from shareledger.services.split_strategies.allocation import (
    allocate_by_weights, canonical_order)
from shareledger.services.split_strategies.base import (BaseSplitStrategy,
                                                        MemberSplit,
                                                        SplitParameters)
from shareledger.services.split_strategies.equal_split import \
    EqualSplitStrategy
from shareledger.services.split_strategies.itemized_split import (
    ItemizedSplitStrategy, calculate_itemized_with_tax_and_tip)
from shareledger.services.split_strategies.shares_split import \
    SharesSplitStrategy


def get_split_strategy(
    split_type: SplitType, with_adjustments: bool = False
) -> BaseSplitStrategy:
    """
    Get appropriate split strategy based on split type.

    Args:
        split_type: Type of split (EQUAL, SHARES, or ITEMIZED)
        with_adjustments: Wrap the strategy in the adjustments overlay

    Returns:
        Instance of appropriate strategy

    Raises:
        ValidationError: If split_type is not recognized
    """
    strategies = {
        SplitType.EQUAL: EqualSplitStrategy(),
        SplitType.SHARES: SharesSplitStrategy(),
        SplitType.ITEMIZED: ItemizedSplitStrategy(),
    }

    strategy = strategies.get(split_type)
    if strategy is None:
        raise ValidationError(f"Unknown split type: {split_type}")

    if with_adjustments:
        return AdjustedSplitStrategy(strategy)
    return strategy


__all__ = [
    "BaseSplitStrategy",
    "MemberSplit",
    "SplitParameters",
    "EqualSplitStrategy",
    "SharesSplitStrategy",
    "ItemizedSplitStrategy",
    "AdjustedSplitStrategy",
    "allocate_by_weights",
    "canonical_order",
    "apply_adjustments",
    "adjusted_total",
    "calculate_itemized_with_tax_and_tip",
    "get_split_strategy",
]
