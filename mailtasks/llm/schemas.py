"""Pydantic schemas for the JSON payloads we ask the language model to return.

Field aliases match the camelCase keys the prompts request. Every schema
ignores unknown keys; the model is free to add commentary fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mailtasks.extraction.models import Priority


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DateParsingPayload(_Payload):
    """Reply to the date-parsing prompt."""

    gregorian_date: str = Field(alias="gregorianDate")
    hebrew_date: str | None = Field(default=None, alias="hebrewDate")
    day_of_week: str | None = Field(default=None, alias="dayOfWeek")
    is_recognized_holiday: bool = Field(default=False, alias="isRecognizedHoliday")
    holiday_name: str | None = Field(default=None, alias="holidayName")

    @field_validator("hebrew_date", "day_of_week", "holiday_name", mode="before")
    @classmethod
    def _blank_strings(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("is_recognized_holiday", mode="before")
    @classmethod
    def _null_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class TaskPayload(_Payload):
    """One task as returned by the extraction prompt."""

    description: str = Field(min_length=1)
    deadline: str | None = None
    priority: Priority | None = None
    assign_to: str | None = Field(default=None, alias="assignTo")
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("deadline", "assign_to", "notes", mode="before")
    @classmethod
    def _blank_strings(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _lenient_priority(cls, value: Any) -> Any:
        # Unknown labels ("critical", "high/medium") become "not stated"
        if not isinstance(value, str):
            return None
        label = value.strip().lower()
        return label if label in {p.value for p in Priority} else None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class ExtractionPayload(_Payload):
    """Reply to the task-extraction prompt.

    ``tasks`` is left untyped here so that one malformed task does not
    invalidate its siblings; items are validated one by one.
    """

    tasks: list[Any] = Field(default_factory=list)
    confidence: float = 0.0
    language: str | None = None
    suggested_followup: str | None = Field(default=None, alias="suggestedFollowup")

    @field_validator("tasks", mode="before")
    @classmethod
    def _tasks_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @field_validator("confidence", mode="before")
    @classmethod
    def _lenient_confidence(cls, value: Any) -> Any:
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("suggested_followup", mode="before")
    @classmethod
    def _blank_strings(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PriorityItemPayload(_Payload):
    """One entry of the priority-analysis reply."""

    task_index: int = Field(alias="taskIndex")
    priority: Priority
    reasoning: str

    @field_validator("priority", mode="before")
    @classmethod
    def _lowercase(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class PriorityPayload(_Payload):
    """Reply to the priority-analysis prompt; entries validated one by one."""

    priorities: list[Any] = Field(default_factory=list)
    language: str | None = None


class FollowupPayload(_Payload):
    """Reply to the follow-up email prompt."""

    subject: str | None = None
    email_content: str | None = Field(default=None, alias="emailContent")
    sentiment: str | None = None
    language: str | None = None
