"""Language-model boundary: a text-completion protocol and its Claude implementation."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol

from anthropic import AnthropicError, AsyncAnthropic

from mailtasks.config import Settings, get_settings
from mailtasks.exceptions import LanguageModelError

logger = logging.getLogger(__name__)

# First "{" through last "}" (models like to wrap JSON in prose or code fences)
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


class LanguageModel(Protocol):
    """An opaque text-completion function.

    Implementations raise ``LanguageModelError`` when the call fails.
    """

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


class AnthropicLanguageModel:
    """``LanguageModel`` backed by the Anthropic Messages API.

    The async client is stateless from our point of view and can be shared
    between concurrent requests.
    """

    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        model: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._client = client or AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.request_timeout,
        )
        self.model = model or settings.llm_model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except AnthropicError as exc:
            raise LanguageModelError(f"Language model call failed: {exc}") from exc

        # We only ever ask for plain text; skip any other block types.
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise LanguageModelError("Empty response from language model")
        return text


def extract_json(text: str) -> dict[str, Any] | None:
    """Parse the first ``{...}`` span in a model reply.

    Returns:
        The parsed object, or None if there is no span, it is not valid JSON,
        or it is not a JSON object.
    """
    match = _JSON_SPAN.search(text or "")
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Model reply contained an unparseable JSON span")
        return None
    if not isinstance(data, dict):
        return None
    return data
