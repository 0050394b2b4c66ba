"""
Main Orchestrator for iExpense

This module ties the components together for a presentation layer:
1. Add (draft → validate → record → store)
2. List (store → projection with the current sort and filter)
3. Delete (displayed rows → record ids → store)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing draft validation
- Deletion from a displayed list always goes through record ids
- Every store change is logged
"""

from collections.abc import Iterable
from typing import Callable, Optional
from uuid import UUID

import structlog

from iexpense.audit import ActivityLogger
from iexpense.config import get_settings
from iexpense.models.events import StoreEvent
from iexpense.models.expense import (
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    ValidationResult,
)
from iexpense.models.projection import ExpenseProjection, ProjectedExpense
from iexpense.queries import (
    ExpenseFilter,
    SortOrder,
    derive_projection,
    format_currency,
)
from iexpense.services.storage import BlobStorageInterface, FileBlobStorage
from iexpense.store import ExpenseStore
from iexpense.validation import ExpenseDraftValidator


logger = structlog.get_logger(__name__)


class ExpenseTracker:
    """
    Facade a UI drives.

    Holds the current sort and filter selection; everything else is read
    from the store on demand.
    """

    def __init__(
        self,
        storage: Optional[BlobStorageInterface] = None,
        store: Optional[ExpenseStore] = None,
        validator: Optional[ExpenseDraftValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        sort: SortOrder = SortOrder.NAME_THEN_AMOUNT,
        filter_by: ExpenseFilter = ExpenseFilter.ALL,
    ):
        settings = get_settings()
        app_settings = settings.app

        if store is None:
            store_settings = settings.store
            storage = storage or FileBlobStorage(store_settings.data_dir)
            store = ExpenseStore(
                storage,
                key=store_settings.storage_key,
                placeholder_name=app_settings.placeholder_name,
            )

        self._store = store
        self._validator = validator or ExpenseDraftValidator(app_settings.placeholder_name)
        self._activity_logger = activity_logger or ActivityLogger()
        self._activity_logger.attach(self._store.subscribe)
        self._currency_code = app_settings.currency_code

        self.sort = SortOrder(sort)
        self.filter_by = ExpenseFilter(filter_by)

    @property
    def store(self) -> ExpenseStore:
        return self._store

    @property
    def has_unsaved_changes(self) -> bool:
        return self._store.has_unsaved_changes

    def on_change(self, callback: Callable[[StoreEvent], None]) -> Callable[[], None]:
        """Subscribe a view to store changes; returns the unsubscribe callable."""
        return self._store.subscribe(callback)

    # =========================================================================
    # ADD FLOW
    # =========================================================================

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        return self._validator.validate(draft)

    def submit(self, draft: ExpenseDraft) -> tuple[Optional[ExpenseRecord], ValidationResult]:
        """
        Validate a draft and add it to the store.

        Returns (record, validation). The record is None when the draft
        did not validate or the store declined it.
        """
        validation = self._validator.validate(draft)
        if not validation.can_save:
            logger.info(
                "draft_rejected",
                issues=[issue.issue_type for issue in validation.issues],
            )
            return None, validation

        record = draft.to_record()
        if not self._store.add(record):
            return None, validation
        return record, validation

    # =========================================================================
    # LIST FLOW
    # =========================================================================

    def projection(
        self,
        sort: Optional[SortOrder] = None,
        filter_by: Optional[ExpenseFilter] = None,
    ) -> ExpenseProjection:
        """Derive the current view; arguments override the held selection."""
        return derive_projection(
            self._store.records,
            sort=sort or self.sort,
            filter_by=filter_by or self.filter_by,
        )

    def display_amount(self, row: ProjectedExpense) -> str:
        return format_currency(row.record.amount, self._currency_code)

    # =========================================================================
    # DELETE FLOW
    # =========================================================================

    def delete(self, expense_ids: Iterable[UUID]) -> list[ExpenseRecord]:
        return self._store.remove_by_ids(expense_ids)

    def delete_in_section(
        self,
        category: ExpenseCategory,
        positions: Iterable[int],
    ) -> list[ExpenseRecord]:
        """
        Delete rows by their position in a displayed section.

        Positions are resolved against the projection currently shown,
        then removed by id.
        """
        ids = self.projection().ids_at(category, positions)
        return self._store.remove_by_ids(ids)
