"""Holiday and weekday lookups plus Israeli workday arithmetic.

Weekday indices follow the Israeli week: Sunday is 0 and Saturday is 6.

The holiday table is keyed by an *approximate* Gregorian day/month. Jewish
holidays follow the lunisolar calendar and drift by up to a month from year
to year, so a lookup here is a hint rather than a fact. Swap
``FixedHolidayCalendar`` for a real lunisolar implementation of
``HolidayCalendar`` if accuracy matters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from mailtasks.language import Language

WEEKDAY_NAMES: dict[Language, tuple[str, ...]] = {
    Language.HE: (
        "יום ראשון",
        "יום שני",
        "יום שלישי",
        "יום רביעי",
        "יום חמישי",
        "יום שישי",
        "שבת",
    ),
    Language.EN: (
        "Sunday",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
    ),
}

UNRECOGNIZED_LABEL: dict[Language, str] = {
    Language.HE: "לא זוהה",
    Language.EN: "Unknown",
}

_GREGORIAN_SUFFIX: dict[Language, str] = {
    Language.HE: "גרגוריאני",
    Language.EN: "Gregorian",
}


@dataclass(frozen=True)
class Holiday:
    """A holiday pinned to an approximate Gregorian day."""

    key: str
    day: int
    month: int
    names: dict[Language, str]
    aliases: tuple[str, ...] = ()

    def name(self, language: Language) -> str:
        return self.names[language]


HOLIDAYS: tuple[Holiday, ...] = (
    Holiday(
        key="purim",
        day=14,
        month=3,
        names={Language.HE: "פורים", Language.EN: "Purim"},
        aliases=("פורים", "purim"),
    ),
    Holiday(
        key="passover",
        day=15,
        month=4,
        names={Language.HE: "פסח", Language.EN: "Passover"},
        aliases=("פסח", "חג פסח", "passover", "pesach"),
    ),
    Holiday(
        key="shavuot",
        day=6,
        month=6,
        names={Language.HE: "שבועות", Language.EN: "Shavuot"},
        aliases=("שבועות", "חג שבועות", "shavuot", "shavuos"),
    ),
    Holiday(
        key="yom_kippur",
        day=5,
        month=10,
        names={Language.HE: "יום כיפור", Language.EN: "Yom Kippur"},
        aliases=("יום כיפור", "יום הכיפורים", "yom kippur"),
    ),
    Holiday(
        key="chanukah",
        day=25,
        month=12,
        names={Language.HE: "חנוכה", Language.EN: "Chanukah"},
        aliases=("חנוכה", "chanukah", "hanukkah", "hanukah"),
    ),
)


class HolidayCalendar(Protocol):
    """Anything that can tell whether a Gregorian day is a holiday."""

    def holiday_on(self, day: int, month: int) -> Holiday | None: ...

    def find_by_name(self, text: str) -> Holiday | None: ...


class FixedHolidayCalendar:
    """Holiday lookup over the fixed approximate table above."""

    def __init__(self, holidays: tuple[Holiday, ...] = HOLIDAYS) -> None:
        self._by_day = {(h.day, h.month): h for h in holidays}
        self._by_alias = {alias: h for h in holidays for alias in h.aliases}

    def holiday_on(self, day: int, month: int) -> Holiday | None:
        return self._by_day.get((day, month))

    def find_by_name(self, text: str) -> Holiday | None:
        """Return the holiday named exactly by *text* (already normalized).

        Exact match only: "שבועות" is also the plain Hebrew word for "weeks".
        """
        return self._by_alias.get(text)

    def aliases(self) -> list[str]:
        return list(self._by_alias)


default_calendar = FixedHolidayCalendar()


def holiday_for(
    day: int,
    month: int,
    language: Language,
    calendar: HolidayCalendar = default_calendar,
) -> str | None:
    """Return the localized holiday name for a day/month pair, if any."""
    holiday = calendar.holiday_on(day, month)
    return holiday.name(language) if holiday else None


def weekday_index(d: date) -> int:
    """Return the Sunday-based weekday index (Sunday=0 ... Saturday=6)."""
    return (d.weekday() + 1) % 7


def weekday_name(index: int, language: Language) -> str:
    """Return the localized weekday name for a Sunday-based index."""
    names = WEEKDAY_NAMES[language]
    if 0 <= index < len(names):
        return names[index]
    return ""


def approximate_local_date(d: date, language: Language) -> str:
    """Display string standing in for the Hebrew-calendar date.

    Proper Gregorian-to-Hebrew conversion is out of scope, so this is the
    Gregorian date tagged as such.
    """
    return f"{d.day}/{d.month}/{d.year} ({_GREGORIAN_SUFFIX[language]})"


def next_annual_occurrence(day: int, month: int, today: date) -> date:
    """Return the first date on or after *today* that falls on day/month."""
    candidate = date(today.year, month, day)
    if candidate < today:
        candidate = date(today.year + 1, month, day)
    return candidate


# ---------------------------------------------------------------------------
# Workday arithmetic (Israeli weekend: Friday and Saturday)
# ---------------------------------------------------------------------------


def is_weekend(d: date) -> bool:
    return weekday_index(d) in (5, 6)


def is_workday(d: date) -> bool:
    return not is_weekend(d)


def add_workdays(d: date, days: int) -> date:
    """Advance *d* by *days* working days, skipping Fridays and Saturdays.

    Non-positive *days* returns *d* unchanged.
    """
    result = d
    remaining = days
    while remaining > 0:
        result += timedelta(days=1)
        if is_workday(result):
            remaining -= 1
    return result
