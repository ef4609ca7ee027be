"""
Audit Sinks

DESIGN DECISION: The audit logger writes to an abstract sink rather than
to a file path. This allows us to:
1. Keep the ledger core free of any knowledge of log files
2. Use in-memory sinks in tests and for the running session
3. Add other destinations later without touching the core

Sinks are append-only - we never delete or modify events.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from wallet_tracker.models.audit import AuditEvent, AuditEventType


class AuditSink(ABC):
    """
    Abstract interface for audit event destinations.

    Any sink must implement these methods.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Args:
            event: The audit event to record

        Returns:
            True if recorded successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one menu action).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'wallet', 'session')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class InMemoryAuditSink(AuditSink):
    """Keeps every event of the session in a list."""

    def __init__(self, max_events: Optional[int] = None):
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[0]
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        """Get all events of one type, oldest first."""
        return [e for e in self._events if e.event_type == event_type]
