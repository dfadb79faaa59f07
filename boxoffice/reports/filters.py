import math
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

# Open range used when the form leaves a date empty
OPEN_RANGE_START = datetime(1970, 1, 1)
OPEN_RANGE_END = datetime(2100, 12, 31, 23, 59, 59)

# Leading decimal number, the way a form value like "50 PLN" is read
LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_min_amount(raw: Optional[str]) -> float:
    """
    Parse the leading number of the minimum amount ("50 PLN" -> 50,
    "1,5" -> 1); no leading number, or a non-finite one, means 0.
    """
    if raw is None:
        return 0.0
    match = LEADING_NUMBER.match(str(raw).strip())
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def _parse_day(raw: str) -> datetime:
    return datetime.fromisoformat(raw.strip())


@dataclass(frozen=True)
class ReportFilters:
    start: datetime
    end: datetime
    min_amount: float

    @classmethod
    def from_form(
        cls,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        min_amount: Optional[str] = None,
    ) -> "ReportFilters":
        """
        Normalize raw form values.

        Raises ValueError for a date that cannot be parsed. `date_to` is
        inclusive through the end of that day.
        """
        start = _parse_day(date_from) if date_from else OPEN_RANGE_START
        if date_to:
            end = datetime.combine(_parse_day(date_to).date(), time(23, 59, 59))
        else:
            end = OPEN_RANGE_END
        return cls(start=start, end=end, min_amount=parse_min_amount(min_amount))

    @property
    def start_label(self) -> str:
        return self.start.strftime("%Y-%m-%d")

    @property
    def end_label(self) -> str:
        return self.end.strftime("%Y-%m-%d")

    @property
    def min_amount_label(self) -> str:
        return f"{self.min_amount:g}"
