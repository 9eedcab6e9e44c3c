"""Claude-powered task extraction with deadline and priority enrichment."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import date

from pydantic import ValidationError

from mailtasks.config import Settings, get_settings
from mailtasks.dates.fallback import AIDateResolver
from mailtasks.dates.matcher import contains_date
from mailtasks.dates.models import ResolvedDate
from mailtasks.dates.resolver import DateResolver, default_resolved_date
from mailtasks.exceptions import InvalidInputError
from mailtasks.extraction.models import (
    EnrichedTaskCandidate,
    ExtractionResult,
    TaskCandidate,
)
from mailtasks.extraction.priority import PriorityAnalyzer, merge_priorities
from mailtasks.language import Language, coerce_language, detect_language
from mailtasks.llm.client import AnthropicLanguageModel, LanguageModel, extract_json
from mailtasks.llm.prompts import TASK_EXTRACTION_SYSTEM, build_task_extraction_prompt
from mailtasks.llm.schemas import ExtractionPayload, TaskPayload
from mailtasks.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


class TaskExtractor:
    """Turn an email into a list of enriched task candidates.

    One request runs in two strict phases after the extraction call: every
    candidate's deadline is resolved concurrently and joined, then one
    batched priority call labels the whole set. The extractor holds no
    per-request state, so a single instance can serve concurrent requests.
    """

    def __init__(
        self,
        model: LanguageModel,
        dates: DateResolver | None = None,
        priorities: PriorityAnalyzer | None = None,
        config: PipelineConfig | None = None,
        default_language: Language | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.model = model
        self.config = config or PipelineConfig()
        self.dates = dates or DateResolver(
            AIDateResolver(model, self.config.date_parsing), clock=clock
        )
        self.priorities = priorities or PriorityAnalyzer(model, self.config.priority)
        # None means "detect from the email body"
        self.default_language = default_language
        self.clock = clock

    async def extract(
        self,
        email_body: str,
        subject: str = "",
        language: str | Language | None = None,
        today: date | None = None,
    ) -> ExtractionResult:
        """Extract, date-enrich and prioritize the tasks in one email.

        Args:
            email_body: Raw email body text.
            subject: Email subject line, if any.
            language: ``"he"`` or ``"en"``; detected from the body when omitted.
            today: Anchor for relative deadlines; defaults to the clock.

        Returns:
            An ExtractionResult. Model failures yield zero tasks with zero
            confidence rather than an exception.

        Raises:
            InvalidInputError: If the body is blank or the language unknown.
        """
        if not email_body or not email_body.strip():
            raise InvalidInputError("Content is required")
        lang = self._pick_language(email_body, language)
        anchor = today or self.clock()

        payload = await self._call_extraction(email_body, subject or "", lang)
        if payload is None:
            return ExtractionResult(tasks=[], confidence=0.0, language=lang)

        candidates = _parse_candidates(payload)
        tasks = await self._enrich_deadlines(candidates, lang, anchor)

        if tasks:
            annotations = await self.priorities.analyze(
                [t.candidate.description for t in tasks], lang
            )
            merge_priorities(tasks, annotations)

        logger.info(
            "Extracted %d tasks (confidence %.2f, language %s)",
            len(tasks),
            payload.confidence,
            lang,
        )
        return ExtractionResult(
            tasks=tasks,
            confidence=_clamp_confidence(payload.confidence),
            language=lang,
            suggested_followup=payload.suggested_followup,
        )

    def _pick_language(self, body: str, language: str | Language | None) -> Language:
        if language is not None:
            return coerce_language(language)
        if self.default_language is not None:
            return self.default_language
        return detect_language(body)

    async def _call_extraction(
        self, body: str, subject: str, language: Language
    ) -> ExtractionPayload | None:
        try:
            reply = await self.model.complete(
                TASK_EXTRACTION_SYSTEM[language],
                build_task_extraction_prompt(body, subject, language),
                temperature=self.config.extraction.temperature,
                max_tokens=self.config.extraction.max_tokens,
            )
        except Exception:
            logger.exception("Task extraction call failed")
            return None

        data = extract_json(reply)
        if data is None:
            logger.warning("Failed to extract JSON from task extraction reply")
            return None

        try:
            return ExtractionPayload.model_validate(data)
        except ValidationError:
            logger.warning("Task extraction reply did not match the expected shape")
            return None

    async def _enrich_deadlines(
        self,
        candidates: list[TaskCandidate],
        language: Language,
        today: date,
    ) -> list[EnrichedTaskCandidate]:
        """Resolve every candidate's deadline concurrently, keeping input order."""
        results = await asyncio.gather(
            *(self._resolve_deadline(c, language, today) for c in candidates),
            return_exceptions=True,
        )

        enriched: list[EnrichedTaskCandidate] = []
        for candidate, result in zip(candidates, results, strict=True):
            if isinstance(result, Exception):
                logger.error(
                    "Deadline enrichment failed for %r: %s",
                    candidate.deadline_expression,
                    result,
                )
                result = default_resolved_date(today, language)
            elif isinstance(result, BaseException):
                raise result
            enriched.append(EnrichedTaskCandidate(candidate=candidate, deadline=result))
        return enriched

    async def _resolve_deadline(
        self, candidate: TaskCandidate, language: Language, today: date
    ) -> ResolvedDate | None:
        expression = candidate.deadline_expression
        if not expression or not contains_date(expression):
            return None
        return await self.dates.resolve(expression, language, today)


def _parse_candidates(payload: ExtractionPayload) -> list[TaskCandidate]:
    """Validate the model's task list item by item, skipping malformed ones."""
    candidates: list[TaskCandidate] = []
    for raw in payload.tasks:
        try:
            task = TaskPayload.model_validate(raw)
        except ValidationError:
            logger.warning("Dropping malformed task from model reply: %r", raw)
            continue
        candidates.append(
            TaskCandidate(
                description=task.description,
                priority=task.priority,
                deadline_expression=task.deadline,
                assign_to_hint=task.assign_to,
                notes=task.notes,
                tags=task.tags,
            )
        )
    return candidates


def _clamp_confidence(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def build_extractor(
    settings: Settings | None = None,
    config: PipelineConfig | None = None,
    model: LanguageModel | None = None,
) -> TaskExtractor:
    """Wire a TaskExtractor from settings.

    This is the main entry point for callers that do not need to inject
    their own collaborators.
    """
    settings = settings or get_settings()
    model = model or AnthropicLanguageModel(settings=settings)
    default_language = None if settings.detect_language else coerce_language(settings.default_language)
    return TaskExtractor(model, config=config, default_language=default_language)
