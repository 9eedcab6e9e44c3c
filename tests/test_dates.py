"""Tests for deterministic date matching and the holiday/weekday calendar."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from mailtasks.dates.calendar import (
    FixedHolidayCalendar,
    add_workdays,
    approximate_local_date,
    holiday_for,
    is_weekend,
    is_workday,
    next_annual_occurrence,
    weekday_index,
    weekday_name,
)
from mailtasks.dates.matcher import (
    RELATIVE_EXPRESSIONS,
    ExpressionMatcher,
    contains_date,
    expand_two_digit_year,
    match_expression,
    next_weekday,
    normalize_expression,
)
from mailtasks.dates.models import ResolutionSource
from mailtasks.language import Language

MONDAY = date(2026, 10, 19)


# ---------------------------------------------------------------------------
# Relative expression table
# ---------------------------------------------------------------------------


class TestRelativeExpressions:
    """Lookups in the fixed relative-expression table."""

    @pytest.mark.parametrize(
        ("language", "expression", "offset"),
        [
            (lang, expr, offset)
            for lang, table in RELATIVE_EXPRESSIONS.items()
            for expr, offset in table.items()
        ],
    )
    def test_table_offsets(self, language: Language, expression: str, offset: int) -> None:
        resolved = match_expression(expression, language, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == MONDAY + timedelta(days=offset)
        assert resolved.source is ResolutionSource.PATTERN

    def test_core_offsets_documented(self) -> None:
        en = RELATIVE_EXPRESSIONS[Language.EN]
        assert en["today"] == 0
        assert en["tomorrow"] == 1
        assert en["day after tomorrow"] == 2
        assert en["yesterday"] == -1
        assert en["in a week"] == 7
        assert en["in two weeks"] == 14
        assert en["in a month"] == 30
        assert en["in a year"] == 365
        he = RELATIVE_EXPRESSIONS[Language.HE]
        assert he["היום"] == 0
        assert he["מחר"] == 1
        assert he["בעוד שבוע"] == 7

    def test_case_and_whitespace_insensitive(self) -> None:
        resolved = match_expression("  Day   After TOMORROW ", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == date(2026, 10, 21)

    def test_deadline_preposition_is_ignored(self) -> None:
        assert match_expression("by tomorrow", Language.EN, MONDAY).gregorian_date == date(2026, 10, 20)  # type: ignore[union-attr]
        assert match_expression("עד מחר", Language.HE, MONDAY).gregorian_date == date(2026, 10, 20)  # type: ignore[union-attr]

    def test_weekday_name_is_localized(self) -> None:
        en = match_expression("tomorrow", Language.EN, MONDAY)
        he = match_expression("מחר", Language.HE, MONDAY)
        assert en is not None and he is not None
        assert en.weekday_name == "Tuesday"
        assert he.weekday_name == "יום שלישי"

    def test_unknown_expression_falls_through(self) -> None:
        assert match_expression("sometime soonish", Language.EN, MONDAY) is None

    def test_empty_expression_is_no_match(self) -> None:
        assert match_expression("   ", Language.EN, MONDAY) is None

    def test_same_day_is_stable(self) -> None:
        first = match_expression("tomorrow", Language.EN, MONDAY)
        second = match_expression("tomorrow", Language.EN, MONDAY)
        assert first == second


# ---------------------------------------------------------------------------
# Weekday names
# ---------------------------------------------------------------------------


class TestWeekdayExpressions:
    """Weekday names resolve to their next occurrence."""

    def test_today_named_without_next_is_today(self) -> None:
        resolved = match_expression("Monday", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == MONDAY

    def test_today_named_with_next_is_a_week_ahead(self) -> None:
        """The "next" qualifier only matters when today is the named weekday."""
        resolved = match_expression("next Monday", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == MONDAY + timedelta(days=7)

    def test_this_qualifier_behaves_like_bare_name(self) -> None:
        resolved = match_expression("this monday", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == MONDAY

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("friday", date(2026, 10, 23)),
            ("by Friday", date(2026, 10, 23)),
            ("next friday", date(2026, 10, 23)),
            ("sunday", date(2026, 10, 25)),
            ("tuesday morning", date(2026, 10, 20)),
        ],
    )
    def test_english_next_occurrence(self, expression: str, expected: date) -> None:
        resolved = match_expression(expression, Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == expected

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("יום רביעי", date(2026, 10, 21)),
            ("יום ראשון הקרוב", date(2026, 10, 25)),
            ("עד יום חמישי", date(2026, 10, 22)),
            ("בשבת", date(2026, 10, 24)),
            ("ביום שישי", date(2026, 10, 23)),
            ("ביום שני", MONDAY),
            ("יום שני הבא", MONDAY + timedelta(days=7)),
        ],
    )
    def test_hebrew_next_occurrence(self, expression: str, expected: date) -> None:
        resolved = match_expression(expression, Language.HE, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == expected

    def test_hebrew_weekday_needs_whole_word(self) -> None:
        # "שנייה" (a second) must not be read as "שני" (Monday)
        assert match_expression("תן לי שנייה", Language.HE, MONDAY) is None

    @pytest.mark.parametrize("expression", ["שני", "תוך שני ימים", "בשני ימים", "עוד שני שבועות"])
    def test_bare_sheni_is_not_monday(self, expression: str) -> None:
        """The word for "two" or "second" is spelled like Monday and needs a prefix."""
        assert match_expression(expression, Language.HE, MONDAY) is None

    def test_sheni_after_yom_is_monday(self) -> None:
        resolved = match_expression("עד יום שני", Language.HE, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == MONDAY

    def test_next_weekday_helper(self) -> None:
        assert next_weekday(MONDAY, 1) == MONDAY
        assert next_weekday(MONDAY, 1, skip_today=True) == MONDAY + timedelta(days=7)
        assert next_weekday(MONDAY, 0) == date(2026, 10, 25)


# ---------------------------------------------------------------------------
# Numeric dates
# ---------------------------------------------------------------------------


class TestNumericDates:
    """D/M/Y and ISO numeric date patterns."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("1/1/30", date(2030, 1, 1)),
            ("1/1/75", date(1975, 1, 1)),
            ("1/1/49", date(2049, 1, 1)),
            ("1/1/50", date(1950, 1, 1)),
            ("3.11.2026", date(2026, 11, 3)),
            ("3-11-2026", date(2026, 11, 3)),
            ("12/5", date(2026, 5, 12)),
            ("2026-11-03", date(2026, 11, 3)),
            ("due 15/11/2026 at noon", date(2026, 11, 15)),
        ],
    )
    def test_valid_dates(self, expression: str, expected: date) -> None:
        resolved = match_expression(expression, Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == expected

    @pytest.mark.parametrize("expression", ["5/13/99", "32/1/2026", "31/2/2026", "0/5", "1/1/123"])
    def test_invalid_dates_do_not_match(self, expression: str) -> None:
        assert match_expression(expression, Language.EN, MONDAY) is None

    def test_two_digit_year_expansion(self) -> None:
        assert expand_two_digit_year(0) == 2000
        assert expand_two_digit_year(30) == 2030
        assert expand_two_digit_year(49) == 2049
        assert expand_two_digit_year(50) == 1950
        assert expand_two_digit_year(99) == 1999

    def test_holiday_flag_on_numeric_date(self) -> None:
        resolved = match_expression("25/12/2026", Language.HE, MONDAY)
        assert resolved is not None
        assert resolved.is_holiday is True
        assert resolved.holiday_name == "חנוכה"

    def test_non_holiday_numeric_date(self) -> None:
        resolved = match_expression("24/12/2026", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.is_holiday is False
        assert resolved.holiday_name is None


# ---------------------------------------------------------------------------
# Holiday names
# ---------------------------------------------------------------------------


class TestHolidayNames:
    """Holiday names resolve to the next annual occurrence."""

    def test_passed_holiday_rolls_to_next_year(self) -> None:
        resolved = match_expression("פסח", Language.HE, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == date(2027, 4, 15)
        assert resolved.is_holiday is True
        assert resolved.holiday_name == "פסח"

    def test_upcoming_holiday_this_year(self) -> None:
        resolved = match_expression("before Chanukah", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.gregorian_date == date(2026, 12, 25)
        assert resolved.holiday_name == "Chanukah"

    def test_weeks_is_not_shavuot(self) -> None:
        """The word for "weeks" (שבועות) must not resolve to Shavuot."""
        assert match_expression("בעוד שלושה שבועות", Language.HE, MONDAY) is None

    def test_custom_calendar_is_used(self) -> None:
        calendar = FixedHolidayCalendar(holidays=())
        matcher = ExpressionMatcher(calendar)
        resolved = matcher.match("25/12/2026", Language.EN, MONDAY)
        assert resolved is not None
        assert resolved.is_holiday is False
        assert matcher.match("chanukah", Language.EN, MONDAY) is None


# ---------------------------------------------------------------------------
# contains_date heuristic and normalisation
# ---------------------------------------------------------------------------


class TestContainsDate:
    """The cheap date-likeness heuristic used before resolution."""

    @pytest.mark.parametrize(
        "text",
        [
            "next Friday",
            "by tomorrow",
            "end of the week",
            "15/5",
            "2026-11-03",
            "עד יום ראשון",
            "בעוד שבוע",
            "עד סוף השבוע",
            "באמצע מאי",
            "Passover",
            "in two weeks",
            "one week from now",
            "in two days",
            "by Passover",
            "עד פסח",
            "בעוד שבועיים",
        ],
    )
    def test_date_like(self, text: str) -> None:
        assert contains_date(text) is True

    @pytest.mark.parametrize("text", ["", "when you get a chance", "ASAP", "כשיהיה לך זמן"])
    def test_not_date_like(self, text: str) -> None:
        assert contains_date(text) is False

    @pytest.mark.parametrize(
        ("language", "expression"),
        [(lang, expr) for lang, table in RELATIVE_EXPRESSIONS.items() for expr in table],
    )
    def test_every_table_entry_is_date_like(self, language: Language, expression: str) -> None:
        assert match_expression(expression, language, MONDAY) is not None
        assert contains_date(expression) is True


class TestNormalizeExpression:
    """Normalisation applied before any pattern is tried."""

    def test_strips_case_whitespace_punctuation(self) -> None:
        assert normalize_expression("  By   Tomorrow. ", Language.EN) == "tomorrow"

    def test_keeps_lone_preposition(self) -> None:
        assert normalize_expression("by", Language.EN) == "by"

    def test_hebrew_prefix(self) -> None:
        assert normalize_expression("עד  מחרתיים", Language.HE) == "מחרתיים"


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


class TestCalendar:
    """Weekday, holiday and workday helpers."""

    def test_weekday_index_is_sunday_based(self) -> None:
        assert weekday_index(date(2026, 10, 25)) == 0  # Sunday
        assert weekday_index(MONDAY) == 1
        assert weekday_index(date(2026, 10, 24)) == 6  # Saturday

    def test_weekday_name(self) -> None:
        assert weekday_name(0, Language.EN) == "Sunday"
        assert weekday_name(6, Language.HE) == "שבת"
        assert weekday_name(7, Language.EN) == ""

    @pytest.mark.parametrize(
        ("day", "month", "language", "expected"),
        [
            (15, 4, Language.EN, "Passover"),
            (5, 10, Language.HE, "יום כיפור"),
            (14, 3, Language.EN, "Purim"),
            (6, 6, Language.HE, "שבועות"),
            (1, 1, Language.EN, None),
        ],
    )
    def test_holiday_for(self, day: int, month: int, language: Language, expected: str | None) -> None:
        assert holiday_for(day, month, language) == expected

    def test_approximate_local_date(self) -> None:
        assert approximate_local_date(date(2026, 10, 20), Language.HE) == "20/10/2026 (גרגוריאני)"
        assert approximate_local_date(date(2026, 10, 20), Language.EN) == "20/10/2026 (Gregorian)"

    def test_next_annual_occurrence(self) -> None:
        assert next_annual_occurrence(19, 10, MONDAY) == MONDAY
        assert next_annual_occurrence(18, 10, MONDAY) == date(2027, 10, 18)

    def test_israeli_weekend(self) -> None:
        assert is_weekend(date(2026, 10, 23)) is True  # Friday
        assert is_weekend(date(2026, 10, 24)) is True  # Saturday
        assert is_workday(date(2026, 10, 25)) is True  # Sunday

    def test_add_workdays_skips_friday_and_saturday(self) -> None:
        thursday = date(2026, 10, 22)
        assert add_workdays(thursday, 1) == date(2026, 10, 25)
        assert add_workdays(MONDAY, 3) == thursday
        assert add_workdays(MONDAY, 0) == MONDAY
