"""Tests for add-expense draft validation."""

from decimal import Decimal

import pytest

from iexpense.models.expense import ExpenseDraft
from iexpense.validation import ExpenseDraftValidator


@pytest.fixture
def validator():
    return ExpenseDraftValidator(placeholder_name="New Expense")


class TestExpenseDraftValidator:
    """Tests for the save-enabled rules of the add form."""

    def test_valid_draft(self, validator):
        draft = ExpenseDraft(name="Coffee", amount=Decimal("4.50"))
        result = validator.validate(draft)
        assert result.can_save is True
        assert result.issues == []

    def test_empty_name(self, validator):
        result = validator.validate(ExpenseDraft(name="   ", amount=Decimal("1")))
        assert result.can_save is False
        assert [(i.field, i.issue_type) for i in result.issues] == [("name", "missing")]

    def test_placeholder_name(self, validator):
        result = validator.validate(ExpenseDraft(name="New Expense", amount=Decimal("1")))
        assert [(i.field, i.issue_type) for i in result.issues] == [("name", "placeholder")]

    def test_zero_amount(self, validator):
        result = validator.validate(ExpenseDraft(name="Coffee"))
        assert [(i.field, i.issue_type) for i in result.issues] == [("amount", "invalid_value")]

    def test_all_issues_reported(self, validator):
        """Test that every problem is reported, not just the first."""
        result = validator.validate(ExpenseDraft())
        assert result.error_count == 2
        assert validator.can_save(ExpenseDraft()) is False

    def test_stepper_makes_draft_valid(self, validator):
        draft = ExpenseDraft(name="Taxi")
        assert validator.can_save(draft) is False
        draft.step(10)
        assert validator.can_save(draft) is True

    def test_default_placeholder_from_settings(self):
        """Test that the configured placeholder is used by default."""
        validator = ExpenseDraftValidator()
        result = validator.validate(ExpenseDraft(name="New Expense", amount=Decimal("5")))
        assert result.can_save is False

    def test_custom_placeholder(self):
        validator = ExpenseDraftValidator(placeholder_name="Untitled")
        assert validator.can_save(ExpenseDraft(name="New Expense", amount=Decimal("5"))) is True
        assert validator.can_save(ExpenseDraft(name="Untitled", amount=Decimal("5"))) is False
