# tokenledger/core/events.py

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime

@dataclass
class Event:
    """Base class for all events in the system."""
    name: str
    params: Dict[str, Any]
    timestamp: datetime = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

class EventLog:
    """Maintains an append-only log of all events in the system."""
    def __init__(self):
        self._events: List[Event] = []
        self._cursor = 0

    def emit(self, event: Event):
        """Add an event to the log."""
        self._events.append(event)

    def extend(self, events: List[Event]):
        """Append several events, preserving their order."""
        self._events.extend(events)

    def get_events(self, event_name: Optional[str] = None) -> List[Event]:
        """
        Retrieve events from the log.
        If event_name is provided, only returns events with that name.
        """
        if event_name is None:
            return self._events.copy()
        return [e for e in self._events if e.name == event_name]

    def drain(self) -> List[Event]:
        """
        Return the events appended since the previous drain.
        The log itself keeps every event; only the read cursor moves.
        """
        pending = self._events[self._cursor:]
        self._cursor = len(self._events)
        return pending

    def clear(self):
        """Clear all events from the log."""
        self._events = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._events)

# Event factories
def create_transfer_event(from_address: str, to_address: str, value: int) -> Event:
    return Event(
        name="Transfer",
        params={
            "from": from_address,
            "to": to_address,
            "value": value
        }
    )

def create_approval_event(owner: str, spender: str, value: int) -> Event:
    return Event(
        name="Approval",
        params={
            "owner": owner,
            "spender": spender,
            "value": value
        }
    )
