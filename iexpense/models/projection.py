"""
Projection Models

A projection is the read-only, display-ready view of the store: filtered,
sorted, grouped by category and classified by severity. It is rebuilt on
every query and never written back.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from iexpense.models.expense import ExpenseCategory, ExpenseRecord, Severity


EMPTY_STATE_TITLE = "No Expenses Yet"
EMPTY_STATE_MESSAGE = "Press '+' to add new expenses."


class ProjectedExpense(BaseModel):
    """One row of a section."""
    model_config = ConfigDict(frozen=True)

    record: ExpenseRecord
    severity: Severity
    store_index: int = Field(
        ...,
        ge=0,
        description="Position of the record in store (insertion) order"
    )

    @property
    def id(self) -> UUID:
        return self.record.id


class ExpenseSection(BaseModel):
    """All displayed expenses of a single category, in display order."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    rows: tuple[ProjectedExpense, ...]

    @property
    def title(self) -> str:
        return self.category.value

    @property
    def total(self) -> Decimal:
        return sum((row.record.amount for row in self.rows), Decimal("0"))

    def ids_at(self, positions: Iterable[int]) -> list[UUID]:
        """
        Map positions within this section to record ids.

        Positions outside the section are ignored.
        """
        return [
            self.rows[position].id
            for position in sorted(set(positions))
            if 0 <= position < len(self.rows)
        ]


class ExpenseProjection(BaseModel):
    """
    Sections in fixed category order, only non-empty ones present.
    """
    model_config = ConfigDict(frozen=True)

    sections: tuple[ExpenseSection, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when nothing passes the filter; drives the empty state."""
        return not self.sections

    @property
    def rows(self) -> list[ProjectedExpense]:
        return [row for section in self.sections for row in section.rows]

    @property
    def total(self) -> Decimal:
        return sum((section.total for section in self.sections), Decimal("0"))

    def section(self, category: ExpenseCategory) -> Optional[ExpenseSection]:
        for section in self.sections:
            if section.category == category:
                return section
        return None

    def ids_at(
        self,
        category: ExpenseCategory,
        positions: Iterable[int],
    ) -> list[UUID]:
        """
        Resolve positions in a displayed section to stable record ids.

        This is how a swipe-to-delete on a sorted or filtered list finds
        the right records; store positions are never used for that.
        """
        section = self.section(category)
        if section is None:
            return []
        return section.ids_at(positions)
