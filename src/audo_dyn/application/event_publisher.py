"""Port through which use-cases report progress and outcomes."""

from __future__ import annotations

from typing import Protocol

from audo_dyn.domain.events import DomainEvent


class EventPublisher(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Deliver one event; must not raise for delivery problems."""


class NullEventPublisher:
    """Drops every event; the default when nobody is listening."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return None
