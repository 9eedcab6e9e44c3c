"""Pipeline configuration: per-call model settings and the PipelineConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModelCallConfig:
    """Sampling settings for one kind of language-model call."""

    temperature: float
    max_tokens: int


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable configuration for the extraction pipeline.

    Each model call the pipeline makes has its own sampling settings.
    Defaults keep extraction and date parsing near-deterministic and give
    follow-up drafting a little more freedom.
    """

    extraction: ModelCallConfig = field(
        default_factory=lambda: ModelCallConfig(temperature=0.2, max_tokens=1000)
    )
    priority: ModelCallConfig = field(
        default_factory=lambda: ModelCallConfig(temperature=0.3, max_tokens=1000)
    )
    date_parsing: ModelCallConfig = field(
        default_factory=lambda: ModelCallConfig(temperature=0.2, max_tokens=500)
    )
    followup: ModelCallConfig = field(
        default_factory=lambda: ModelCallConfig(temperature=0.5, max_tokens=1000)
    )
