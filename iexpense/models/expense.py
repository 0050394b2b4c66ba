"""
Core Data Models for iExpense

These models define the schemas for every expense flowing through the
system. They are designed to:
1. Enforce type safety at runtime
2. Be serializable to the persisted JSON blob
3. Keep identity separate from anything the user can edit

DESIGN DECISION: Every record carries a generated UUID. Names are free
text and frequently repeat ("Coffee"), so they are never used as identity.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Declaration order is the order sections are displayed in.
    """
    PERSONAL = "Personal"
    BUSINESS = "Business"


class Severity(str, Enum):
    """
    Three-tier bucketing of an amount, used purely for visual emphasis.

    Never stored; always recomputed from the amount.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def color(self) -> str:
        """Foreground color for the amount."""
        return _SEVERITY_COLORS[self]

    @property
    def background_opacity(self) -> float:
        """Opacity applied to `color` for the row background."""
        return BACKGROUND_OPACITY


_SEVERITY_COLORS = {
    Severity.LOW: "blue",
    Severity.MEDIUM: "orange",
    Severity.HIGH: "red",
}

BACKGROUND_OPACITY = 0.05


class StepMode(str, Enum):
    """Direction of the amount stepper buttons on the add form."""
    ADD = "Add"
    SUBTRACT = "Subtract"


STEP_SIZES = (1, 10, 100)

PLACEHOLDER_NAME = "New Expense"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single expense entry as held by the store.

    CRITICAL: Records are immutable. There is no edit operation; an
    expense is added once and removed once.

    The category is persisted under the key "type" to stay compatible
    with blobs written by earlier versions of the app.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
        populate_by_name=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID, never reused"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display label"
    )
    category: ExpenseCategory = Field(
        ...,
        alias="type",
        description="Personal or Business"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in the display currency"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_float_amount(cls, v: object) -> object:
        return _float_to_decimal(v)


def _float_to_decimal(v: object) -> object:
    # Decimal(4.1) would carry binary noise; go through the shortest repr.
    if isinstance(v, float):
        return Decimal(str(v))
    return v


class ExpenseDraft(BaseModel):
    """
    State of the add-expense form before the user saves.

    Unlike ExpenseRecord this is mutable and may hold invalid values;
    ExpenseDraftValidator decides whether it can be saved.
    """
    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    category: ExpenseCategory = ExpenseCategory.PERSONAL
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    step_mode: StepMode = StepMode.ADD

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_float_amount(cls, v: object) -> object:
        """Convert floats through str so 4.5 becomes Decimal('4.5')."""
        return _float_to_decimal(v)

    def step(
        self,
        size: Union[int, Decimal],
        mode: Optional[StepMode] = None,
    ) -> Decimal:
        """
        Apply one press of a stepper button.

        Subtracting more than the current amount clamps to zero.
        Returns the new amount.
        """
        size = Decimal(size)
        mode = mode or self.step_mode

        if mode == StepMode.ADD:
            self.amount = self.amount + size
        elif self.amount >= size:
            self.amount = self.amount - size
        else:
            self.amount = Decimal("0")

        return self.amount

    def to_record(self) -> ExpenseRecord:
        """Build a record with a freshly generated id."""
        return ExpenseRecord(
            name=self.name,
            category=self.category,
            amount=self.amount,
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem that keeps a draft from being saved."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'placeholder', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Result of validating an ExpenseDraft.

    The presentation layer disables its save action unless `can_save`.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def can_save(self) -> bool:
        return not self.issues

    @property
    def error_count(self) -> int:
        return len(self.issues)
