"""
SQL helpers shared by the repositories.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from jobly.core.errors import BadRequestError


@dataclass(frozen=True)
class PartialUpdate:
    """
    SET clause for a partial UPDATE plus its ordered bind values.

    Placeholders are numbered ``:p1 .. :pN`` in the order of ``values``.
    """
    set_cols: str
    values: List[Any] = field(default_factory=list)

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first value bound after the SET values (the row key)."""
        return f":p{len(self.values) + 1}"

    def params(self, *extra: Any) -> Dict[str, Any]:
        """Bind parameters for the SET values followed by ``extra`` positional values."""
        return {f"p{idx}": value for idx, value in enumerate([*self.values, *extra], start=1)}


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Optional[Mapping[str, str]] = None) -> PartialUpdate:
    """
    Build the SET clause for updating only the supplied fields.

    Args:
        data: External field name -> new value, e.g. {"firstName": "Aliya", "age": 32}
        js_to_sql: External field name -> column name, only for names that differ,
            e.g. {"firstName": "first_name"}

    Returns:
        PartialUpdate with set_cols '"first_name"=:p1, "age"=:p2' and values ["Aliya", 32]

    Raises:
        BadRequestError: If data is empty
    """
    keys = list(data.keys())
    if not keys:
        raise BadRequestError("No data")

    aliases = js_to_sql or {}
    cols = [f'"{aliases.get(col_name, col_name)}"=:p{idx}' for idx, col_name in enumerate(keys, start=1)]

    return PartialUpdate(set_cols=", ".join(cols), values=[data[key] for key in keys])
