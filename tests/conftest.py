"""Shared fixtures: a scripted stand-in for the language model."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest

from mailtasks.exceptions import LanguageModelError
from mailtasks.llm.prompts import (
    DATE_PARSING_SYSTEM,
    FOLLOWUP_EMAIL_SYSTEM,
    PRIORITY_ANALYSIS_SYSTEM,
    TASK_EXTRACTION_SYSTEM,
)

MONDAY = date(2026, 10, 19)

_KINDS: dict[str, dict] = {
    "extraction": TASK_EXTRACTION_SYSTEM,
    "priority": PRIORITY_ANALYSIS_SYSTEM,
    "date": DATE_PARSING_SYSTEM,
    "followup": FOLLOWUP_EMAIL_SYSTEM,
}


def _kind_of(system_prompt: str) -> str:
    for kind, prompts in _KINDS.items():
        if system_prompt in prompts.values():
            return kind
    raise AssertionError(f"Unexpected system prompt: {system_prompt[:40]!r}")


def make_model(**replies: Any) -> AsyncMock:
    """Build an AsyncMock ``LanguageModel`` answering by call kind.

    Each keyword is one of ``extraction``, ``priority``, ``date`` or
    ``followup``. A value may be a dict (sent back as JSON), a raw string,
    an exception instance (raised), or a callable taking the user prompt.
    Kinds without a reply raise ``LanguageModelError``.
    """

    async def complete(system_prompt: str, user_prompt: str, **_: Any) -> str:
        reply = replies.get(_kind_of(system_prompt))
        if callable(reply) and not isinstance(reply, BaseException):
            reply = reply(user_prompt)
        if reply is None:
            raise LanguageModelError("unreachable")
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply, ensure_ascii=False)
        return reply

    model = AsyncMock()
    model.complete.side_effect = complete
    return model


def calls_of(model: AsyncMock, kind: str) -> list[Any]:
    """Return the recorded ``complete`` calls of one kind."""
    return [c for c in model.complete.call_args_list if _kind_of(c.args[0]) == kind]


@pytest.fixture
def today() -> date:
    return MONDAY


@pytest.fixture
def model_factory() -> Callable[..., AsyncMock]:
    return make_model
