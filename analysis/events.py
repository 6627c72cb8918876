"""
Event Model for the Banker's Algorithm simulator.

Defines event types for tracking what happened during a session.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class EventType(Enum):
    """Types of events in a session."""
    SAFETY_CHECK = "safety_check"
    APPROVAL = "approval"
    DENIAL = "denial"
    COMMIT = "commit"
    ERROR = "error"


@dataclass
class SessionEvent:
    """
    Represents a single event in a session.

    Attributes:
        event_type: Type of event
        process_index: Process involved (None for system-wide events)
        request: Requested units (if applicable)
        reason: Reason code for approval/denial (if applicable)
        message: Human-readable description
    """
    event_type: EventType
    process_index: Optional[int] = None
    request: Optional[List[int]] = None
    reason: str = ""
    message: str = ""

    def __str__(self) -> str:
        """Format event for logging."""
        base = f"P{self.process_index}" if self.process_index is not None else "System"

        if self.event_type == EventType.APPROVAL:
            return f"{base} requests {self.request} - APPROVED ({self.reason})"
        elif self.event_type == EventType.DENIAL:
            return f"{base} requests {self.request} - DENIED ({self.reason})"
        elif self.event_type == EventType.COMMIT:
            return f"{base} commits {self.request}"
        elif self.event_type == EventType.SAFETY_CHECK:
            return f"{base} - SAFETY CHECK ({self.message})"
        else:
            return f"{base} - {self.event_type.value}: {self.message}"


@dataclass
class EventLog:
    """Collection of session events."""
    events: list = None

    def __post_init__(self):
        if self.events is None:
            self.events = []

    def add(self, event: SessionEvent) -> None:
        """Add an event to the log."""
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> list:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def display(self) -> str:
        """Format all events for display."""
        return "\n".join(str(event) for event in self.events)
