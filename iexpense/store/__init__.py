"""Expense store package."""

from iexpense.store.expense_store import (
    DEFAULT_STORAGE_KEY,
    ExpenseStore,
    StoreListener,
)

__all__ = ["DEFAULT_STORAGE_KEY", "ExpenseStore", "StoreListener"]
