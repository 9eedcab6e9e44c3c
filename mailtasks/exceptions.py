"""Exception hierarchy for the task extraction pipeline.

Only ``InvalidInputError`` is meant to reach callers of ``extract`` and
``resolve``; everything else is caught at the pipeline boundaries and
degraded to a default value.
"""

from __future__ import annotations


class MailTasksError(Exception):
    """Base class for all pipeline errors."""


class LanguageModelError(MailTasksError):
    """The language model call failed (network, auth, rate limit, empty reply)."""


class DateResolutionError(MailTasksError):
    """A date expression could not be resolved to a calendar date."""


class InvalidInputError(MailTasksError, ValueError):
    """The caller supplied missing or unsupported input."""
