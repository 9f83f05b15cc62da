"""
Event Model for the Banker's Algorithm evaluator.

Defines event types for tracking evaluation decisions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class EventType(Enum):
    """Types of events recorded during an evaluation."""
    SAFE_STATE = "safe_state"
    UNSAFE_STATE = "unsafe_state"
    REJECTED = "rejected"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass
class EvaluationEvent:
    """
    Represents a single decision in an evaluation run.

    Attributes:
        event_type: Type of event
        label: Process label involved (empty for system-wide events)
        amounts: Requested amounts (if applicable)
        safe_sequence: Finishing order backing a safe verdict (if applicable)
        reason: Reason for the decision
    """
    event_type: EventType
    label: str = ""
    amounts: Optional[List[int]] = None
    safe_sequence: Optional[List[int]] = None
    reason: str = ""

    def __str__(self) -> str:
        """Format event for logging."""
        if self.event_type == EventType.SAFE_STATE:
            seq = " -> ".join(f"P{pid}" for pid in self.safe_sequence or [])
            return f"System is SAFE (sequence: {seq})"
        elif self.event_type == EventType.UNSAFE_STATE:
            return "System is UNSAFE"
        elif self.event_type == EventType.REJECTED:
            return f"{self.label} requests {self.amounts} - REJECTED ({self.reason})"
        elif self.event_type == EventType.GRANTED:
            return f"{self.label} requests {self.amounts} - {self.reason}"
        elif self.event_type == EventType.DENIED:
            return f"{self.label} requests {self.amounts} - {self.reason}"
        else:
            return f"{self.event_type.value}: {self.reason}"


@dataclass
class EventLog:
    """Collection of evaluation events."""
    events: list = None

    def __post_init__(self):
        if self.events is None:
            self.events = []

    def add(self, event: EvaluationEvent) -> None:
        """Add an event to the log."""
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> list:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def display(self) -> str:
        """Format all events for display."""
        return "\n".join(str(event) for event in self.events)
