"""Date Resolution Engine: deterministic matching first, model fallback second."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from mailtasks.dates.calendar import UNRECOGNIZED_LABEL
from mailtasks.dates.fallback import AIDateResolver
from mailtasks.dates.matcher import ExpressionMatcher
from mailtasks.dates.models import ResolutionSource, ResolvedDate
from mailtasks.exceptions import InvalidInputError
from mailtasks.language import Language, coerce_language

logger = logging.getLogger(__name__)


def default_resolved_date(today: date, language: Language) -> ResolvedDate:
    """Placeholder used when an expression cannot be resolved."""
    label = UNRECOGNIZED_LABEL[language]
    return ResolvedDate(
        gregorian_date=today,
        approximate_local_date=label,
        weekday_name=label,
        is_holiday=False,
        holiday_name=None,
        source=ResolutionSource.DEFAULT,
    )


class DateResolver:
    """Resolve bilingual date expressions to calendar dates.

    The matcher handles the common cases with no external call, so the same
    expression on the same day always resolves identically. Only when it
    finds nothing is the model consulted.

    ``resolve`` never raises for runtime failures: if the fallback fails the
    result is ``default_resolved_date(today)``. Deadline enrichment is best
    effort and must not block task creation.
    """

    def __init__(
        self,
        fallback: AIDateResolver | None,
        matcher: ExpressionMatcher | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.fallback = fallback
        self.matcher = matcher or ExpressionMatcher()
        self.clock = clock

    async def resolve(
        self,
        expression: str,
        language: str | Language,
        today: date | None = None,
    ) -> ResolvedDate:
        """Resolve one date expression.

        Args:
            expression: Free-text date expression, e.g. ``"next Monday"``.
            language: ``"he"`` or ``"en"``.
            today: Anchor for relative expressions; defaults to the clock.

        Raises:
            InvalidInputError: If the expression is blank or the language unknown.
        """
        if not expression or not expression.strip():
            raise InvalidInputError("Date expression is required")
        lang = coerce_language(language)
        anchor = today or self.clock()

        resolved = self.matcher.match(expression, lang, anchor)
        if resolved is not None:
            return resolved

        if self.fallback is None:
            logger.info("No deterministic match for %r and no fallback configured", expression)
            return default_resolved_date(anchor, lang)

        try:
            return await self.fallback.resolve(expression, lang, anchor)
        except Exception:
            logger.exception("Date resolution failed for %r; using default", expression)
            return default_resolved_date(anchor, lang)
