"""Follow-up email drafting for overdue or outstanding tasks."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from mailtasks.exceptions import InvalidInputError
from mailtasks.extraction.models import FollowupEmail
from mailtasks.language import Language, coerce_language
from mailtasks.llm.client import LanguageModel, extract_json
from mailtasks.llm.prompts import FOLLOWUP_EMAIL_SYSTEM, build_followup_prompt
from mailtasks.llm.schemas import FollowupPayload
from mailtasks.pipeline_config import ModelCallConfig, PipelineConfig

logger = logging.getLogger(__name__)

SENTIMENTS = frozenset({"neutral", "urgent", "friendly", "formal"})


def default_followup(task_name: str, recipient: str, language: Language) -> FollowupEmail:
    """Template email used whenever the model cannot produce one."""
    if language is Language.HE:
        return FollowupEmail(
            subject=f"מעקב: {task_name}",
            body=f'שלום {recipient},\n\nזוהי הודעת מעקב לגבי המשימה "{task_name}".\n\nבברכה,',
            sentiment="neutral",
            language=language,
        )
    return FollowupEmail(
        subject=f"Follow-up: {task_name}",
        body=f'Hi {recipient},\n\nThis is a follow-up regarding the task "{task_name}".\n\nBest regards,',
        sentiment="neutral",
        language=language,
    )


class FollowupWriter:
    """Draft a polite follow-up email with a single model call."""

    def __init__(self, model: LanguageModel, call_config: ModelCallConfig | None = None) -> None:
        self.model = model
        self.call_config = call_config or PipelineConfig().followup

    async def generate(
        self,
        task_name: str,
        recipient: str,
        days_overdue: int = 0,
        language: str | Language = Language.HE,
    ) -> FollowupEmail:
        """Draft the email; falls back to ``default_followup`` on any failure.

        Raises:
            InvalidInputError: If the task name or recipient is blank.
        """
        if not task_name or not task_name.strip():
            raise InvalidInputError("Task is required")
        if not recipient or not recipient.strip():
            raise InvalidInputError("Recipient is required")
        lang = coerce_language(language)
        fallback = default_followup(task_name, recipient, lang)

        try:
            reply = await self.model.complete(
                FOLLOWUP_EMAIL_SYSTEM[lang],
                build_followup_prompt(task_name, recipient, days_overdue, lang),
                temperature=self.call_config.temperature,
                max_tokens=self.call_config.max_tokens,
            )
        except Exception:
            logger.exception("Follow-up email call failed")
            return fallback

        data = extract_json(reply)
        if data is None:
            logger.warning("Failed to extract follow-up email from model reply")
            return fallback

        try:
            payload = FollowupPayload.model_validate(data)
        except ValidationError:
            logger.warning("Follow-up reply did not match the expected shape")
            return fallback

        sentiment = (payload.sentiment or "").lower()
        return FollowupEmail(
            subject=payload.subject or fallback.subject,
            body=payload.email_content or fallback.body,
            sentiment=sentiment if sentiment in SENTIMENTS else "neutral",
            language=lang,
        )
