"""Language-model fallback for date expressions the matcher does not know."""

from __future__ import annotations

import logging
from datetime import date

from pydantic import ValidationError

from mailtasks.dates.calendar import (
    UNRECOGNIZED_LABEL,
    approximate_local_date,
    weekday_index,
    weekday_name,
)
from mailtasks.dates.models import ResolutionSource, ResolvedDate
from mailtasks.exceptions import DateResolutionError
from mailtasks.language import Language
from mailtasks.llm.client import LanguageModel, extract_json
from mailtasks.llm.prompts import DATE_PARSING_SYSTEM, build_date_parsing_prompt
from mailtasks.llm.schemas import DateParsingPayload
from mailtasks.pipeline_config import ModelCallConfig, PipelineConfig

logger = logging.getLogger(__name__)


class AIDateResolver:
    """Resolve a free-text date expression with a single model call.

    Every failure (call error, missing JSON, bad schema, impossible date)
    raises ``DateResolutionError``. There are no retries.
    """

    def __init__(self, model: LanguageModel, call_config: ModelCallConfig | None = None) -> None:
        self.model = model
        self.call_config = call_config or PipelineConfig().date_parsing

    async def resolve(self, expression: str, language: Language, today: date) -> ResolvedDate:
        try:
            reply = await self.model.complete(
                DATE_PARSING_SYSTEM[language],
                build_date_parsing_prompt(expression, language, today),
                temperature=self.call_config.temperature,
                max_tokens=self.call_config.max_tokens,
            )
        except Exception as exc:
            raise DateResolutionError(f"Date parsing call failed for {expression!r}") from exc

        data = extract_json(reply)
        if data is None:
            raise DateResolutionError(f"No JSON in date parsing reply for {expression!r}")

        try:
            payload = DateParsingPayload.model_validate(data)
        except ValidationError as exc:
            raise DateResolutionError(f"Malformed date parsing reply for {expression!r}") from exc

        return self._to_resolved(payload, language)

    @staticmethod
    def _to_resolved(payload: DateParsingPayload, language: Language) -> ResolvedDate:
        raw = payload.gregorian_date
        try:
            # Accept "YYYY-MM-DD" and full timestamps that start with it
            resolved = date.fromisoformat(raw[:10])
        except ValueError as exc:
            raise DateResolutionError(f"Invalid date returned by model: {raw!r}") from exc

        logger.info("Model resolved date expression to %s", resolved)
        return ResolvedDate(
            gregorian_date=resolved,
            approximate_local_date=payload.hebrew_date or approximate_local_date(resolved, language),
            weekday_name=payload.day_of_week
            or weekday_name(weekday_index(resolved), language)
            or UNRECOGNIZED_LABEL[language],
            is_holiday=payload.is_recognized_holiday,
            holiday_name=payload.holiday_name if payload.is_recognized_holiday else None,
            source=ResolutionSource.AI,
        )
