from decimal import Decimal, DecimalException
from typing import Any, Optional

from bson.decimal128 import Decimal128

from splitledger.errors import ValidationError


def to_decimal(value: Any, field: str) -> Decimal:
    """Convert a JSON number (or numeric string) to Decimal without float noise."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        result = Decimal(str(value))
    except (DecimalException, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    # Stored as Decimal128: at most 34 significant digits, bounded exponent
    try:
        Decimal128(result)
    except DecimalException:
        raise ValidationError(f"{field} has too many digits or is out of range")
    return result


def optional_decimal(value: Any, field: str) -> Optional[Decimal]:
    if value is None:
        return None
    return to_decimal(value, field)


def as_number(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)
