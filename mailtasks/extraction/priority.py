"""Batched priority analysis and its positional merge back onto candidates."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from mailtasks.extraction.models import EnrichedTaskCandidate, PriorityAnnotation
from mailtasks.language import Language
from mailtasks.llm.client import LanguageModel, extract_json
from mailtasks.llm.prompts import PRIORITY_ANALYSIS_SYSTEM, build_priority_prompt
from mailtasks.llm.schemas import PriorityItemPayload, PriorityPayload
from mailtasks.pipeline_config import ModelCallConfig, PipelineConfig

logger = logging.getLogger(__name__)


class PriorityAnalyzer:
    """Ask the model to label a whole list of task descriptions in one call."""

    def __init__(self, model: LanguageModel, call_config: ModelCallConfig | None = None) -> None:
        self.model = model
        self.call_config = call_config or PipelineConfig().priority

    async def analyze(self, descriptions: list[str], language: Language) -> list[PriorityAnnotation]:
        """Return the annotations the model produced, in reply order.

        Indices are *not* range-checked here; see ``merge_priorities``.
        Returns an empty list on empty input or any failure.
        """
        if not descriptions:
            return []

        try:
            reply = await self.model.complete(
                PRIORITY_ANALYSIS_SYSTEM[language],
                build_priority_prompt(descriptions, language),
                temperature=self.call_config.temperature,
                max_tokens=self.call_config.max_tokens,
            )
        except Exception:
            logger.exception("Priority analysis call failed")
            return []

        data = extract_json(reply)
        if data is None:
            logger.warning("Failed to extract priorities from model reply")
            return []

        try:
            payload = PriorityPayload.model_validate(data)
        except ValidationError:
            logger.warning("Priority reply did not match the expected shape")
            return []

        annotations: list[PriorityAnnotation] = []
        for raw in payload.priorities:
            try:
                item = PriorityItemPayload.model_validate(raw)
            except ValidationError:
                logger.warning("Dropping malformed priority entry: %r", raw)
                continue
            annotations.append(
                PriorityAnnotation(
                    task_index=item.task_index,
                    priority=item.priority,
                    reasoning=item.reasoning,
                )
            )
        return annotations


def merge_priorities(
    tasks: list[EnrichedTaskCandidate],
    annotations: list[PriorityAnnotation],
) -> list[EnrichedTaskCandidate]:
    """Attach annotations to tasks by the index the model reported.

    The index is a convention with the model, not a guarantee: out-of-range
    indices are dropped, and when the model labels the same task twice the
    first label wins. Mutates and returns *tasks*.
    """
    seen: set[int] = set()
    for annotation in annotations:
        index = annotation.task_index
        if not 0 <= index < len(tasks):
            logger.warning(
                "Dropping priority for task index %d (have %d tasks)", index, len(tasks)
            )
            continue
        if index in seen:
            logger.warning("Ignoring duplicate priority for task index %d", index)
            continue
        seen.add(index)
        tasks[index].priority_annotation = annotation
    return tasks
