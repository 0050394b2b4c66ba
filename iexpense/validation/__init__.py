"""Validation package."""

from iexpense.validation.validator import ExpenseDraftValidator

__all__ = ["ExpenseDraftValidator"]
