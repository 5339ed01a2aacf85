"""Domain event contracts for compression runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class IngestValidated(DomainEvent):
    """The input file passed container and format validation."""


@dataclass(frozen=True, slots=True)
class BlockProcessed(DomainEvent):
    """One block went through the dynamics engine."""


@dataclass(frozen=True, slots=True)
class CompressionRendered(DomainEvent):
    """Processed audio was written to its output path."""


@dataclass(frozen=True, slots=True)
class TraceExported(DomainEvent):
    """The gain-reduction trace was exported as CSV."""


@dataclass(frozen=True, slots=True)
class CompressionFailed(DomainEvent):
    """The run stopped on an ingest, codec or write error."""
