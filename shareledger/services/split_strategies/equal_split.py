"""Equal split strategy"""

from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from shareledger.services.split_strategies.allocation import (
    allocate_by_weights, canonical_order)
from shareledger.services.split_strategies.base import (BaseSplitStrategy,
                                                        MemberSplit,
                                                        SplitParameters)


class EqualSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense equally among members"""

    def calculate_splits(
        self,
        total_amount: Decimal,
        member_ids: Iterable[UUID],
        parameters: Optional[SplitParameters] = None,
        minor_units: int = 2,
    ) -> List[MemberSplit]:
        """
        Calculate equal split for all members.

        Args:
            total_amount: Total expense amount
            member_ids: Members sharing the expense
            parameters: Unused
            minor_units: Decimal places of the currency

        Returns:
            List of MemberSplit; the first members by id absorb the
            leftover minor units
        """
        members = canonical_order(member_ids)

        if not members:
            return []

        return allocate_by_weights(
            total_amount, {member_id: 1 for member_id in members}, minor_units
        )
