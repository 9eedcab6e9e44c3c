"""Data models for task extraction results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mailtasks.dates.models import ResolvedDate
    from mailtasks.language import Language


class Priority(StrEnum):
    """Task priority labels, lowest first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class TaskCandidate:
    """A provisional task extracted from email text, not yet persisted."""

    description: str
    priority: Priority | None = None
    deadline_expression: str | None = None  # as written, e.g. "עד יום ראשון"
    assign_to_hint: str | None = None
    notes: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PriorityAnnotation:
    """Priority verdict for the candidate at ``task_index``."""

    task_index: int
    priority: Priority
    reasoning: str


@dataclass
class EnrichedTaskCandidate:
    """A candidate plus whatever enrichment succeeded.

    ``deadline`` is None when the candidate mentioned no date-like deadline.
    A deadline that was mentioned but could not be resolved carries a
    ResolvedDate whose ``source`` is ``default``.
    """

    candidate: TaskCandidate
    deadline: ResolvedDate | None = None
    priority_annotation: PriorityAnnotation | None = None

    @property
    def effective_priority(self) -> Priority | None:
        if self.priority_annotation is not None:
            return self.priority_annotation.priority
        return self.candidate.priority

    def to_dict(self) -> dict[str, Any]:
        c = self.candidate
        data: dict[str, Any] = {
            "description": c.description,
            "priority": self.effective_priority.value if self.effective_priority else None,
            "deadlineExpression": c.deadline_expression,
            "deadline": self.deadline.gregorian_date.isoformat() if self.deadline else None,
            "assignTo": c.assign_to_hint,
            "notes": c.notes,
            "tags": list(c.tags),
        }
        if self.deadline is not None:
            data["parsedDateInfo"] = self.deadline.to_dict()
        if self.priority_annotation is not None:
            data["priorityReasoning"] = self.priority_annotation.reasoning
        return data


@dataclass
class ExtractionResult:
    """Top-level output of one extraction request.

    An empty task list with zero confidence means either "no task found" or
    "the model could not be reached"; callers cannot tell them apart.
    """

    tasks: list[EnrichedTaskCandidate]
    confidence: float
    language: Language
    suggested_followup: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "tasks": [t.to_dict() for t in self.tasks],
            "confidence": self.confidence,
            "language": self.language.value,
        }
        if self.suggested_followup:
            data["suggestedFollowup"] = self.suggested_followup
        return data


@dataclass(frozen=True)
class FollowupEmail:
    """A drafted follow-up email for an outstanding task."""

    subject: str
    body: str
    sentiment: str
    language: Language
