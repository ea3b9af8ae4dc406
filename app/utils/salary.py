"""Free-text salary parsing and salary-range matching."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SalaryRange:
    """Parsed salary bounds."""

    min: float
    max: float
    average: float


def _to_number(value: str) -> Optional[float]:
    try:
        return float(value.strip())
    except (TypeError, ValueError):
        return None


def parse_salary(salary: Optional[str]) -> Optional[SalaryRange]:
    """
    Parse a posted salary string.

    "$40,000 - $50,000" -> 40000..50000 (average 45000), "$60000" -> 60000 for
    all three values, "Not specified" or anything unparseable -> None.
    """
    if not salary or not isinstance(salary, str):
        return None

    cleaned = salary.replace("$", "").replace(",", "").strip()
    if not cleaned or cleaned.lower() == "not specified":
        return None

    parts = cleaned.split(" - ")
    if len(parts) == 2:
        low, high = _to_number(parts[0]), _to_number(parts[1])
        if low is not None and high is not None:
            return SalaryRange(min=low, max=high, average=(low + high) / 2)
        return None

    value = _to_number(cleaned)
    if value is None:
        return None
    return SalaryRange(min=value, max=value, average=value)


def parse_salary_filter(value: Optional[str]) -> Optional[float]:
    """Query-string salary bound; unparseable or blank means no constraint."""
    if value is None:
        return None
    number = _to_number(str(value).replace("$", "").replace(",", ""))
    if number is None or number < 0:
        return None
    return number


def salary_matches(
    salary: Optional[str],
    min_salary: Optional[float] = None,
    max_salary: Optional[float] = None,
) -> bool:
    """Whether a posted salary satisfies the requested bounds."""
    if min_salary is None and max_salary is None:
        return True

    parsed = parse_salary(salary)
    if parsed is None:
        # Unknown salaries only survive when no lower bound was requested
        return min_salary is None

    low = min_salary if min_salary is not None else 0
    high = max_salary if max_salary is not None else float("inf")

    if low == high:
        return parsed.min == parsed.max == low

    meets_min = parsed.max >= low if low > 0 else True
    meets_max = parsed.min <= high if high != float("inf") else True
    return meets_min and meets_max


def salary_sort_key(salary: Optional[str]) -> float:
    """Average salary used for ordering; unparseable salaries sort as 0."""
    parsed = parse_salary(salary)
    return parsed.average if parsed else 0
