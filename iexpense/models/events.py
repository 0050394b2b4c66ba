"""
Store Event Models for iExpense

Every successful mutation of the expense store produces a StoreEvent.
Subscribers receive it and re-pull whatever projection they display;
the activity logger writes it to the structured log.

DESIGN DECISION: Events describe what changed, not the new state.
Consumers always re-derive from the store so they never drift from it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class StoreEventType(str, Enum):
    """Kinds of change the store announces."""
    EXPENSE_ADDED = "expense_added"
    EXPENSES_REMOVED = "expenses_removed"


class StoreEventSeverity(str, Enum):
    """Severity level for store events."""
    INFO = "info"
    WARNING = "warning"


class StoreEvent(BaseModel):
    """
    A single store change.

    `persisted` is False when the change is held in memory only because
    writing the blob failed.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the change happened (UTC)"
    )
    event_type: StoreEventType
    expense_ids: list[UUID] = Field(
        default_factory=list,
        description="Records added or removed by this change"
    )
    record_count: int = Field(
        ...,
        ge=0,
        description="Number of records in the store after the change"
    )
    persisted: bool = True
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def severity(self) -> StoreEventSeverity:
        if not self.persisted:
            return StoreEventSeverity.WARNING
        return StoreEventSeverity.INFO

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_ids": [str(expense_id) for expense_id in self.expense_ids],
            "record_count": self.record_count,
            "persisted": self.persisted,
            "details": self.details,
        }
