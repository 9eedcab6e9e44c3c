"""Data models for date resolution results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any


class ResolutionSource(StrEnum):
    """How a ResolvedDate was produced."""

    PATTERN = "pattern"  # deterministic table / regex match
    AI = "ai"  # language-model fallback
    DEFAULT = "default"  # resolution failed; anchored to today


@dataclass(frozen=True)
class ResolvedDate:
    """A date expression resolved to a calendar date."""

    gregorian_date: date
    approximate_local_date: str
    weekday_name: str
    is_holiday: bool = False
    holiday_name: str | None = None
    source: ResolutionSource = ResolutionSource.PATTERN

    @property
    def is_default(self) -> bool:
        return self.source is ResolutionSource.DEFAULT

    def to_dict(self) -> dict[str, Any]:
        """Render in the camelCase wire shape used by API consumers."""
        data: dict[str, Any] = {
            "gregorianDate": self.gregorian_date.isoformat(),
            "approximateLocalDate": self.approximate_local_date,
            "weekdayName": self.weekday_name,
            "isHoliday": self.is_holiday,
            "source": self.source.value,
        }
        if self.holiday_name:
            data["holidayName"] = self.holiday_name
        return data
