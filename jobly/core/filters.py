"""
Query-string filter parsing for the listing endpoints.

Raw query parameters are turned into one of a closed set of filter intents
before any SQL is built, so the repositories only ever see legal
combinations:

    NoFilter | ByName | ByRange | ByNameAndRange     (companies)
    ByTitle | ByMinSalary | ByEquity                 (jobs)
    InvalidFilter(reason)                            (either)

Keys and values arrive as two parallel, ordered sequences, exactly as they
appear in the query string.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from starlette.datastructures import QueryParams

MIN_EMPLOYEES = "minEmployees"
MAX_EMPLOYEES = "maxEmployees"
RANGE_KEYS = {MIN_EMPLOYEES, MAX_EMPLOYEES}

INVALID_COMPANY_KEY = "Query parameter must include name, minEmployees, or maxEmployees, please adjust your query."
INVALID_RANGE = "minEmployees must be less than maxEmployees."
MUST_START_WITH_NAME = "Query must start with name."
INVALID_JOB_KEY = "Query parameter must include title, minSalary, or hasEquity. Please make adjustments and try again."
TOO_MANY_PARAMETERS = "Too many query parameters, please update."


@dataclass(frozen=True)
class NoFilter:
    pass


@dataclass(frozen=True)
class ByName:
    prefix: str


@dataclass(frozen=True)
class ByRange:
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None


@dataclass(frozen=True)
class ByNameAndRange:
    prefix: str
    min_employees: int
    max_employees: int


@dataclass(frozen=True)
class ByTitle:
    prefix: str


@dataclass(frozen=True)
class ByMinSalary:
    min_salary: int


@dataclass(frozen=True)
class ByEquity:
    has_equity: bool


@dataclass(frozen=True)
class InvalidFilter:
    reason: str


CompanyFilter = Union[NoFilter, ByName, ByRange, ByNameAndRange, InvalidFilter]
JobFilter = Union[ByTitle, ByMinSalary, ByEquity, InvalidFilter]


def split_query_params(query_params: QueryParams) -> Tuple[list, list]:
    """Ordered keys and their values; a repeated key keeps its last value."""
    keys = list(query_params.keys())
    return keys, [query_params[key] for key in keys]


def _non_negative_int(key: str, raw: str) -> Union[int, InvalidFilter]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return InvalidFilter(f"{key} must be a non-negative integer.")
    if value < 0:
        return InvalidFilter(f"{key} must be a non-negative integer.")
    return value


def _parse_range(keys: Sequence[str], values: Sequence[str]) -> Union[Tuple[int, int], InvalidFilter]:
    """Resolve a two-key min/max pair in either order; min must be strictly below max."""
    if len(keys) != 2 or set(keys) != RANGE_KEYS:
        return InvalidFilter(INVALID_RANGE)

    bounds = {}
    for key, raw in zip(keys, values):
        parsed = _non_negative_int(key, raw)
        if isinstance(parsed, InvalidFilter):
            return parsed
        bounds[key] = parsed

    if not bounds[MIN_EMPLOYEES] < bounds[MAX_EMPLOYEES]:
        return InvalidFilter(INVALID_RANGE)
    return bounds[MIN_EMPLOYEES], bounds[MAX_EMPLOYEES]


def parse_company_filter(keys: Sequence[str], values: Sequence[str]) -> CompanyFilter:
    """
    Parse company listing parameters.

    Accepted shapes:
        name | minEmployees | maxEmployees
        minEmployees + maxEmployees (either order)
        name + minEmployees + maxEmployees (name first, range in either order)
    """
    count = len(keys)

    if count == 0:
        return NoFilter()

    if count == 1:
        key, raw = keys[0], values[0]
        if key == "name":
            return ByName(prefix=raw)
        if key in RANGE_KEYS:
            parsed = _non_negative_int(key, raw)
            if isinstance(parsed, InvalidFilter):
                return parsed
            if key == MIN_EMPLOYEES:
                return ByRange(min_employees=parsed)
            return ByRange(max_employees=parsed)
        return InvalidFilter(INVALID_COMPANY_KEY)

    if count == 2:
        bounds = _parse_range(keys, values)
        if isinstance(bounds, InvalidFilter):
            return bounds
        return ByRange(min_employees=bounds[0], max_employees=bounds[1])

    if count == 3:
        if keys[0] != "name":
            return InvalidFilter(MUST_START_WITH_NAME)
        bounds = _parse_range(keys[1:], values[1:])
        if isinstance(bounds, InvalidFilter):
            return bounds
        return ByNameAndRange(prefix=values[0], min_employees=bounds[0], max_employees=bounds[1])

    return InvalidFilter(TOO_MANY_PARAMETERS)


def parse_job_filter(keys: Sequence[str], values: Sequence[str]) -> JobFilter:
    """
    Parse job listing parameters. Exactly one of title, minSalary or hasEquity.

    hasEquity accepts "true", "false" or an empty value (same as "false").
    """
    if len(keys) == 0:
        return InvalidFilter(INVALID_JOB_KEY)
    if len(keys) > 1:
        return InvalidFilter(TOO_MANY_PARAMETERS)

    key, raw = keys[0], values[0]

    if key == "title":
        return ByTitle(prefix=raw)

    if key == "minSalary":
        try:
            return ByMinSalary(min_salary=int(raw))
        except (TypeError, ValueError):
            return InvalidFilter("minSalary must be an integer.")

    if key == "hasEquity":
        if raw == "true":
            return ByEquity(has_equity=True)
        if raw in ("false", ""):
            return ByEquity(has_equity=False)
        return InvalidFilter("hasEquity must be true or false.")

    return InvalidFilter(INVALID_JOB_KEY)
