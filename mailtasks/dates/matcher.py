"""Deterministic date-expression matching for Hebrew and English.

The matcher never calls out to a model. It tries, in order:

1. an exact lookup in the relative-expression table ("tomorrow", "בעוד שבוע"),
2. weekday names ("next Monday", "יום שלישי הקרוב"),
3. numeric dates (ISO ``YYYY-MM-DD``, then ``D/M[/YY[YY]]`` with ``/ . -``),
4. holiday names from the fixed holiday table.

The order matters: some patterns are substrings of others. Anything that
falls through returns ``None`` so the caller can defer to the AI fallback.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta

from mailtasks.dates.calendar import (
    FixedHolidayCalendar,
    HolidayCalendar,
    approximate_local_date,
    default_calendar,
    next_annual_occurrence,
    weekday_index,
    weekday_name,
)
from mailtasks.dates.models import ResolutionSource, ResolvedDate
from mailtasks.language import Language

logger = logging.getLogger(__name__)

RELATIVE_EXPRESSIONS: dict[Language, dict[str, int]] = {
    Language.HE: {
        "היום": 0,
        "מחר": 1,
        "מחרתיים": 2,
        "אתמול": -1,
        "שלשום": -2,
        "עוד יומיים": 2,
        "בעוד יומיים": 2,
        "עוד שבוע": 7,
        "בעוד שבוע": 7,
        "עוד שבועיים": 14,
        "בעוד שבועיים": 14,
        "עוד חודש": 30,
        "בעוד חודש": 30,
        "עוד שנה": 365,
        "בעוד שנה": 365,
    },
    Language.EN: {
        "today": 0,
        "tomorrow": 1,
        "day after tomorrow": 2,
        "the day after tomorrow": 2,
        "yesterday": -1,
        "day before yesterday": -2,
        "in two days": 2,
        "in a week": 7,
        "one week from now": 7,
        "in two weeks": 14,
        "in a month": 30,
        "one month from now": 30,
        "in a year": 365,
        "one year from now": 365,
    },
}

# Leading words that only say "this is a deadline" ("by Friday", "עד מחר")
_DEADLINE_PREPOSITIONS: dict[Language, frozenset[str]] = {
    Language.HE: frozenset({"עד", "לפני"}),
    Language.EN: frozenset({"by", "until", "till", "before", "due", "on"}),
}

_EDGE_PUNCTUATION = " \t\n.,;:!?\"'()[]"

_EN_WEEKDAYS = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}

_HE_WEEKDAYS = {
    "ראשון": 0,
    "שני": 1,
    "שלישי": 2,
    "רביעי": 3,
    "חמישי": 4,
    "שישי": 5,
    "שבת": 6,
}

_EN_WEEKDAY_RE = re.compile(
    r"\b(?:(this|next|coming)\s+)?(" + "|".join(_EN_WEEKDAYS) + r")\b"
)
_HE_WEEKDAY_RE = re.compile(
    r"(?<!\w)(ב?יום\s+|ב)?(" + "|".join(_HE_WEEKDAYS) + r")(?!\w)"
    # "שני ימים" is "two days", not Monday
    r"(?!\s+(?:ימים|שבועות|חודשים|שעות))"
    r"(?:\s+(הקרוב|הקרובה|הבא|הבאה))?"
)
# Ordinal/number homographs that only count as a weekday after "יום" or "ב"
_HE_AMBIGUOUS_WEEKDAYS = frozenset({"שני"})
_NEXT_QUALIFIERS = frozenset({"next", "הבא", "הבאה"})

_ISO_DATE_RE = re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")
_NUMERIC_DATE_RE = re.compile(
    r"(?<!\d)(\d{1,2})[/.\-](\d{1,2})(?:[/.\-](\d{2,4}))?(?!\d)"
)

# Looser patterns for the "does this look like a date at all" heuristic
_DATE_HINT_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\d{1,2}[/.\-]\d{1,2}(?:[/.\-]\d{2,4})?"),
    re.compile(r"\d{4}-\d{1,2}-\d{1,2}"),
    re.compile(r"(?:יום\s+)?(?:ראשון|שני|שלישי|רביעי|חמישי|שישי|שבת)(?:\s+הקרוב)?"),
    re.compile(
        r"היום|מחר|מחרתיים|אתמול|שלשום|עוד יומיים|עוד שבוע|עוד שבועיים|עוד חודש|עוד שנה"
        r"|סוף השבוע|סוף החודש|סוף השנה"
    ),
    re.compile(r"\b(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b"),
    re.compile(
        r"\b(?:today|tonight|tomorrow|yesterday|in a week|in a month|in a year"
        r"|next week|next month|end of (?:the )?(?:day|week|month|year))\b"
    ),
    re.compile(r"ינואר|פברואר|מרץ|אפריל|מאי|יוני|יולי|אוגוסט|ספטמבר|אוקטובר|נובמבר|דצמבר"),
    re.compile(
        r"\b(?:january|february|march|april|may|june|july|august|september"
        r"|october|november|december)\b"
    ),
]


def normalize_expression(text: str, language: Language) -> str:
    """Lowercase, collapse whitespace, trim punctuation and deadline prepositions."""
    words = (text or "").lower().split()
    prepositions = _DEADLINE_PREPOSITIONS[language]
    while len(words) > 1 and words[0] in prepositions:
        words = words[1:]
    return " ".join(words).strip(_EDGE_PUNCTUATION)


def expand_two_digit_year(year: int) -> int:
    """Expand a two-digit year: below 50 is this century, otherwise the last."""
    if year < 50:
        return 2000 + year
    return 1900 + year


def next_weekday(today: date, target_index: int, skip_today: bool = False) -> date:
    """Return the next date falling on *target_index* (Sunday=0).

    If today already is that weekday, returns today, or a week ahead when
    *skip_today* is set.
    """
    days_ahead = (target_index - weekday_index(today)) % 7
    if days_ahead == 0 and skip_today:
        days_ahead = 7
    return today + timedelta(days=days_ahead)


def contains_date(text: str) -> bool:
    """Cheap heuristic: does *text* look like it mentions a date?

    Anything the relative table or the holiday table resolves counts, in
    either language, so the heuristic never rejects what the matcher accepts.
    """
    if not text:
        return False
    lowered = text.lower()
    if any(p.search(lowered) for p in _DATE_HINT_PATTERNS):
        return True
    for language in Language:
        normalized = normalize_expression(text, language)
        if normalized in RELATIVE_EXPRESSIONS[language]:
            return True
        if default_calendar.find_by_name(normalized) is not None:
            return True
    return False


class ExpressionMatcher:
    """Stateless pattern table over normalized date expressions."""

    def __init__(self, calendar: HolidayCalendar | None = None) -> None:
        self.calendar = calendar or FixedHolidayCalendar()

    def match(self, text: str, language: Language, today: date) -> ResolvedDate | None:
        """Resolve *text* deterministically, or return ``None`` for no match."""
        normalized = normalize_expression(text, language)
        if not normalized:
            return None

        for step in (
            self._match_relative,
            self._match_weekday,
            self._match_numeric,
            self._match_holiday,
        ):
            resolved = step(normalized, language, today)
            if resolved is not None:
                logger.debug("Matched %r via %s -> %s", text, step.__name__, resolved.gregorian_date)
                return resolved
        return None

    # -- steps -------------------------------------------------------------

    def _match_relative(self, text: str, language: Language, today: date) -> ResolvedDate | None:
        offset = RELATIVE_EXPRESSIONS[language].get(text)
        if offset is None:
            return None
        return self._build(today + timedelta(days=offset), language)

    def _match_weekday(self, text: str, language: Language, today: date) -> ResolvedDate | None:
        if language is Language.HE:
            for m in _HE_WEEKDAY_RE.finditer(text):
                prefix, word, qualifier = m.groups()
                if word in _HE_AMBIGUOUS_WEEKDAYS and not prefix:
                    continue
                skip_today = qualifier in _NEXT_QUALIFIERS
                return self._build(next_weekday(today, _HE_WEEKDAYS[word], skip_today), language)
            return None

        m = _EN_WEEKDAY_RE.search(text)
        if not m:
            return None
        skip_today = m.group(1) in _NEXT_QUALIFIERS
        return self._build(next_weekday(today, _EN_WEEKDAYS[m.group(2)], skip_today), language)

    def _match_numeric(self, text: str, language: Language, today: date) -> ResolvedDate | None:
        iso = _ISO_DATE_RE.search(text)
        if iso:
            year, month, day = (int(g) for g in iso.groups())
            return self._build_checked(year, month, day, language)

        m = _NUMERIC_DATE_RE.search(text)
        if not m:
            return None

        day = int(m.group(1))
        month = int(m.group(2))
        raw_year = m.group(3)
        if raw_year is None:
            year = today.year
        elif len(raw_year) == 2:
            year = expand_two_digit_year(int(raw_year))
        elif len(raw_year) == 4:
            year = int(raw_year)
        else:
            return None
        return self._build_checked(year, month, day, language)

    def _match_holiday(self, text: str, language: Language, today: date) -> ResolvedDate | None:
        holiday = self.calendar.find_by_name(text)
        if holiday is None:
            return None
        return self._build(next_annual_occurrence(holiday.day, holiday.month, today), language)

    # -- helpers -----------------------------------------------------------

    def _build_checked(self, year: int, month: int, day: int, language: Language) -> ResolvedDate | None:
        if not (1 <= day <= 31 and 1 <= month <= 12):
            return None
        try:
            resolved = date(year, month, day)
        except ValueError:
            # e.g. 31/2 or year 0
            return None
        return self._build(resolved, language)

    def _build(self, d: date, language: Language) -> ResolvedDate:
        holiday = self.calendar.holiday_on(d.day, d.month)
        return ResolvedDate(
            gregorian_date=d,
            approximate_local_date=approximate_local_date(d, language),
            weekday_name=weekday_name(weekday_index(d), language),
            is_holiday=holiday is not None,
            holiday_name=holiday.name(language) if holiday else None,
            source=ResolutionSource.PATTERN,
        )


_default_matcher = ExpressionMatcher(default_calendar)


def match_expression(text: str, language: Language, today: date) -> ResolvedDate | None:
    """Module-level shortcut using the fixed holiday calendar."""
    return _default_matcher.match(text, language, today)
