"""
Add-Expense Validation

Decides whether the add form's Save action is enabled. A draft can be
saved only when:
- the name is not blank
- the name is not the placeholder ("New Expense")
- the amount is greater than zero

IMPORTANT: Validation never silently fixes a draft.
It reports issues and the form stays open.
"""

from typing import Optional

from iexpense.config import get_settings
from iexpense.models.expense import (
    ExpenseDraft,
    ValidationIssue,
    ValidationResult,
)


class ExpenseDraftValidator:
    """Checks an ExpenseDraft before it becomes an ExpenseRecord."""

    def __init__(self, placeholder_name: Optional[str] = None):
        """
        Args:
            placeholder_name: Name treated as "not filled in".
                              Defaults to the configured placeholder.
        """
        if placeholder_name is None:
            placeholder_name = get_settings().app.placeholder_name
        self._placeholder_name = placeholder_name

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        issues = []

        name = draft.name.strip()
        if not name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Enter a name for the expense",
            ))
        elif name == self._placeholder_name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="placeholder",
                message=f"'{self._placeholder_name}' is a placeholder, enter a real name",
            ))

        if draft.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))

        return ValidationResult(issues=issues)

    def can_save(self, draft: ExpenseDraft) -> bool:
        return self.validate(draft).can_save
