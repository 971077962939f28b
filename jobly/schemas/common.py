from decimal import Decimal
from typing import Annotated
from pydantic import PlainSerializer


def fixed_point(value: Decimal) -> str:
    """Render a NUMERIC as a plain fixed-point string: Decimal("0.5000") -> "0.5"."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return format(value.normalize(), "f")


# Equity and similar NUMERIC columns go out as strings, never floats
FixedPoint = Annotated[Decimal, PlainSerializer(fixed_point, return_type=str)]
