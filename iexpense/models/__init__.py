"""
Data Models Package

This package contains all Pydantic models used in iExpense.
All data flowing through the system must conform to these schemas.
"""

from iexpense.models.expense import (
    BACKGROUND_OPACITY,
    PLACEHOLDER_NAME,
    STEP_SIZES,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    Severity,
    StepMode,
    ValidationIssue,
    ValidationResult,
)
from iexpense.models.events import (
    StoreEvent,
    StoreEventSeverity,
    StoreEventType,
)
from iexpense.models.projection import (
    EMPTY_STATE_MESSAGE,
    EMPTY_STATE_TITLE,
    ExpenseProjection,
    ExpenseSection,
    ProjectedExpense,
)

__all__ = [
    # Expense models
    "BACKGROUND_OPACITY",
    "PLACEHOLDER_NAME",
    "STEP_SIZES",
    "ExpenseCategory",
    "ExpenseDraft",
    "ExpenseRecord",
    "Severity",
    "StepMode",
    "ValidationIssue",
    "ValidationResult",
    # Store events
    "StoreEvent",
    "StoreEventSeverity",
    "StoreEventType",
    # Projection models
    "EMPTY_STATE_MESSAGE",
    "EMPTY_STATE_TITLE",
    "ExpenseProjection",
    "ExpenseSection",
    "ProjectedExpense",
]
