"""Logging-backed implementation of the event publisher."""

from __future__ import annotations

import logging

from audo_dyn.domain.events import BlockProcessed, DomainEvent

LOGGER = logging.getLogger("audo_dyn.events")


class LoggingEventPublisher:
    """Emit event payload summaries to structured logs.

    Per-block progress goes to DEBUG unless ``progress_level`` says otherwise.
    """

    def __init__(self, progress_level: int = logging.DEBUG) -> None:
        self.progress_level = progress_level

    def publish(self, event: DomainEvent) -> None:
        level = self.progress_level if isinstance(event, BlockProcessed) else logging.INFO
        LOGGER.log(
            level,
            "domain_event_emitted",
            extra={
                "event_name": type(event).__name__,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
