"""Shares split strategy"""

from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from shareledger.services.split_strategies.allocation import (
    allocate_by_weights, canonical_order)
from shareledger.services.split_strategies.base import (BaseSplitStrategy,
                                                        MemberSplit,
                                                        SplitParameters)


class SharesSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense by integer share counts"""

    def calculate_splits(
        self,
        total_amount: Decimal,
        member_ids: Iterable[UUID],
        parameters: Optional[SplitParameters] = None,
        minor_units: int = 2,
    ) -> List[MemberSplit]:
        """
        Calculate share-weighted split.

        Members without an explicit share count hold one share.

        Args:
            total_amount: Total expense amount, must be positive
            member_ids: Members sharing the expense
            parameters: Holds the `shares` mapping
            minor_units: Decimal places of the currency

        Returns:
            List of MemberSplit, or empty when there are no members, the
            total is not positive, or the shares do not sum above zero
        """
        parameters = parameters or SplitParameters()
        members = canonical_order(member_ids)

        if not members or total_amount <= 0:
            return []

        shares = {member_id: parameters.share_for(member_id) for member_id in members}
        if sum(shares.values()) <= 0:
            return []

        return allocate_by_weights(total_amount, shares, minor_units)
