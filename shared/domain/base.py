"""
Base Domain Classes

Building blocks shared by the domain layers of all apps:
- ValueObject: Immutable objects compared by value
- EventRecorder: Mixin for objects that record domain events
- DomainEvent: Events that represent something that happened
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class EventRecorder:
    """
    Mixin for aggregate roots

    Works for plain classes and Django models alike: the event list is
    created lazily so no ``__init__`` cooperation is needed. Recorded
    events are collected by the unit of work and published after commit.
    """

    def _event_list(self) -> List['DomainEvent']:
        events = self.__dict__.get('_recorded_events')
        if events is None:
            events = []
            self.__dict__['_recorded_events'] = events
        return events

    def add_event(self, event: 'DomainEvent'):
        """Add a domain event to be published"""
        self._event_list().append(event)

    def clear_events(self):
        """Clear all collected events (called after publishing)"""
        self._event_list().clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Get copy of collected events"""
        return list(self._event_list())


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Domain events represent something that happened in the domain.
    Subclasses are declared with ``@dataclass(kw_only=True)`` so their
    required fields may follow the defaulted base fields.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: int | None = None

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': self.aggregate_id,
        }
