"""
Split Calculator - converts an expense total into per-participant amounts.

Responsibilities:
- Parse the requested split type
- Validate shares for the split type before any user resolution happens
- Calculate equal, exact and percentage splits
"""
from decimal import Decimal
from typing import List, Sequence, Union

from splitledger.errors import InvalidStrategy, ValidationError
from splitledger.expenses.models import ParticipantShare
from splitledger.utils.enums import SplitType

HUNDRED = Decimal(100)


class SplitCalculator:
    """Split calculation and validation."""

    @classmethod
    def parse_split_type(cls, value: Union[str, SplitType, None]) -> SplitType:
        if isinstance(value, SplitType):
            return value
        try:
            return SplitType(value)
        except ValueError:
            raise InvalidStrategy("Invalid split type")

    @classmethod
    def validate_shares(
        cls,
        split_type: Union[str, SplitType],
        shares: Sequence[ParticipantShare]
    ) -> SplitType:
        """
        Check that shares carry what the split type needs.

        Percentages are compared with exact Decimal equality against 100.

        Raises:
            InvalidStrategy: unknown split type
            ValidationError: empty shares, missing amounts/percentages,
                or percentages not adding up to 100
        """
        split_type = cls.parse_split_type(split_type)

        if not shares:
            raise ValidationError("splitDetails must contain at least one participant")

        for share in shares:
            if not share.name or not share.name.strip():
                raise ValidationError("Every split detail needs a user name")

        if split_type == SplitType.EXACT:
            missing = [s.name for s in shares if s.amount is None]
            if missing:
                raise ValidationError(f"Exact split requires an amount for: {', '.join(missing)}")

        elif split_type == SplitType.PERCENTAGE:
            missing = [s.name for s in shares if s.percentage is None]
            if missing:
                raise ValidationError(f"Percentage split requires a percentage for: {', '.join(missing)}")
            total_pct = sum((s.percentage for s in shares), Decimal(0))
            if total_pct != HUNDRED:
                raise ValidationError("Percentages must add up to 100%")

        return split_type

    @classmethod
    def compute_split(
        cls,
        total_amount: Decimal,
        split_type: Union[str, SplitType],
        shares: Sequence[ParticipantShare]
    ) -> List[ParticipantShare]:
        """
        Calculate the amount each participant owes.

        Equal splits are not rounding-corrected: for totals not evenly
        divisible the outputs may not add back up to total_amount. Exact
        amounts pass through unchecked.

        Args:
            total_amount: Total expense amount
            split_type: equal, exact or percentage
            shares: Resolved participant shares

        Returns:
            New list of ParticipantShare with amount set
        """
        split_type = cls.parse_split_type(split_type)

        if split_type == SplitType.EQUAL:
            if not shares:
                raise ValidationError("splitDetails must contain at least one participant")
            equal_amount = total_amount / len(shares)
            return [
                ParticipantShare(name=s.name, user_id=s.user_id, amount=equal_amount)
                for s in shares
            ]

        if split_type == SplitType.EXACT:
            return [
                ParticipantShare(name=s.name, user_id=s.user_id, amount=s.amount)
                for s in shares
            ]

        # SplitType.PERCENTAGE
        calculated = []
        for s in shares:
            if s.percentage is None:
                raise ValidationError(f"Percentage split requires a percentage for: {s.name}")
            calculated.append(ParticipantShare(
                name=s.name,
                user_id=s.user_id,
                amount=(s.percentage / HUNDRED) * total_amount,
                percentage=s.percentage,
            ))
        return calculated
