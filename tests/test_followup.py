"""Tests for follow-up email drafting."""

from __future__ import annotations

import pytest

from conftest import calls_of, make_model
from mailtasks.exceptions import InvalidInputError
from mailtasks.extraction.followup import FollowupWriter, default_followup
from mailtasks.extraction.models import FollowupEmail
from mailtasks.language import Language


class TestFollowupWriter:
    """Follow-up drafting with a scripted model."""

    @pytest.mark.asyncio
    async def test_uses_model_reply(self) -> None:
        reply = {
            "subject": "Quick check on the Q3 report",
            "emailContent": "Hi Dana,\n\nJust checking in on the Q3 report.",
            "sentiment": "Friendly",
            "language": "en",
        }
        model = make_model(followup=reply)

        email = await FollowupWriter(model).generate("Q3 report", "Dana", 3, "en")

        assert email == FollowupEmail(
            subject="Quick check on the Q3 report",
            body="Hi Dana,\n\nJust checking in on the Q3 report.",
            sentiment="friendly",
            language=Language.EN,
        )

    @pytest.mark.asyncio
    async def test_prompt_mentions_overdue_days(self) -> None:
        model = make_model(followup={"subject": "s", "emailContent": "b"})

        await FollowupWriter(model).generate("הדוח", "דנה", 4, Language.HE)

        prompt = calls_of(model, "followup")[0].args[1]
        assert "הדוח" in prompt
        assert "דנה" in prompt
        assert "4" in prompt

    @pytest.mark.asyncio
    async def test_prompt_omits_overdue_when_not_late(self) -> None:
        model = make_model(followup={"subject": "s", "emailContent": "b"})

        await FollowupWriter(model).generate("Q3 report", "Dana", 0, Language.EN)

        assert "overdue" not in calls_of(model, "followup")[0].args[1]

    @pytest.mark.asyncio
    async def test_unknown_sentiment_becomes_neutral(self) -> None:
        model = make_model(followup={"subject": "s", "emailContent": "b", "sentiment": "passive-aggressive"})
        email = await FollowupWriter(model).generate("Q3 report", "Dana", language="en")
        assert email.sentiment == "neutral"

    @pytest.mark.asyncio
    async def test_missing_fields_fall_back_to_template(self) -> None:
        model = make_model(followup={"emailContent": "Body only"})
        email = await FollowupWriter(model).generate("Q3 report", "Dana", language="en")
        assert email.subject == "Follow-up: Q3 report"
        assert email.body == "Body only"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reply", [None, "Sorry, I can't help with that.", RuntimeError("client misconfigured")]
    )
    async def test_failure_returns_default(self, reply: object) -> None:
        model = make_model(followup=reply)

        email = await FollowupWriter(model).generate("הדוח", "דנה")

        assert email == default_followup("הדוח", "דנה", Language.HE)
        assert email.subject == "מעקב: הדוח"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("task", "recipient"), [("", "Dana"), ("Q3 report", "  ")])
    async def test_blank_input_rejected(self, task: str, recipient: str) -> None:
        model = make_model()
        with pytest.raises(InvalidInputError):
            await FollowupWriter(model).generate(task, recipient)
        model.complete.assert_not_awaited()


class TestDefaultFollowup:
    def test_english_template(self) -> None:
        email = default_followup("Q3 report", "Dana", Language.EN)
        assert email.subject == "Follow-up: Q3 report"
        assert "Hi Dana" in email.body
        assert email.sentiment == "neutral"
        assert email.language is Language.EN
