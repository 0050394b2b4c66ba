"""
Expense Store

The single source of truth for the expense list.

GUARANTEES:
- Insertion order is preserved; display order is derived elsewhere
- Every mutation rewrites the full blob through the storage port
- Loading and saving never raise to the caller

DESIGN DECISION: Persistence is fail-soft. A blob that cannot be read or
decoded loads as an empty list; a write that fails leaves the in-memory
list authoritative for the rest of the session and flips
`has_unsaved_changes`. Nothing here blocks or crashes the UI.

Callers that delete from a sorted or filtered list must resolve the rows
to ids (see ExpenseProjection.ids_at) and use remove_by_ids. remove_at
works on store order only.
"""

from collections.abc import Iterable, Iterator
from typing import Callable, Optional
from uuid import UUID

import structlog
from pydantic import TypeAdapter, ValidationError

from iexpense.models.events import StoreEvent, StoreEventType
from iexpense.models.expense import PLACEHOLDER_NAME, ExpenseRecord
from iexpense.services.storage import BlobStorageInterface, StorageError


DEFAULT_STORAGE_KEY = "Items"

_RECORDS_ADAPTER = TypeAdapter(list[ExpenseRecord])

StoreListener = Callable[[StoreEvent], None]

logger = structlog.get_logger(__name__)


class ExpenseStore:
    """
    Owns the authoritative, persisted sequence of ExpenseRecord.

    No other component mutates the sequence; `records` hands out an
    immutable snapshot.
    """

    def __init__(
        self,
        storage: BlobStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        placeholder_name: str = PLACEHOLDER_NAME,
    ):
        """
        Initialize the store and load persisted expenses.

        Args:
            storage: Blob storage port the list is persisted through
            key: Fixed key the list lives under
            placeholder_name: Name treated as "not filled in" by `add`
        """
        self._storage = storage
        self._key = key
        self._placeholder_name = placeholder_name
        self._listeners: list[StoreListener] = []
        self._unsaved = False
        self._records: list[ExpenseRecord] = self.load()

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._records)

    @property
    def key(self) -> str:
        return self._key

    @property
    def has_unsaved_changes(self) -> bool:
        """True when the most recent write to storage failed."""
        return self._unsaved

    def get(self, expense_id: UUID) -> Optional[ExpenseRecord]:
        for record in self._records:
            if record.id == expense_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(self.records)

    def __contains__(self, expense_id: object) -> bool:
        return any(record.id == expense_id for record in self._records)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> list[ExpenseRecord]:
        """
        Read and decode the persisted list.

        Returns an empty list when the blob is absent, unreadable or does
        not decode into records. Never raises.
        """
        try:
            blob = self._storage.read(self._key)
        except (StorageError, OSError, ValueError) as e:
            logger.warning("expense_load_failed", key=self._key, error=str(e))
            return []

        if blob is None:
            return []

        try:
            decoded = _RECORDS_ADAPTER.validate_json(blob)
        except (ValidationError, ValueError) as e:
            logger.warning(
                "expense_blob_undecodable",
                key=self._key,
                error=str(e),
                size_bytes=len(blob),
            )
            return []

        records: list[ExpenseRecord] = []
        seen: set[UUID] = set()
        for record in decoded:
            if record.id in seen:
                logger.warning("duplicate_expense_id_dropped", expense_id=str(record.id))
                continue
            seen.add(record.id)
            records.append(record)

        logger.debug("expenses_loaded", key=self._key, record_count=len(records))
        return records

    def save(self) -> bool:
        """
        Encode the full list and overwrite the blob.

        Returns True if storage accepted the write. Failures are logged
        and recorded in `has_unsaved_changes`, never raised.
        """
        try:
            blob = _RECORDS_ADAPTER.dump_json(self._records, by_alias=True)
            written = self._storage.write(self._key, blob)
        except (StorageError, OSError, ValueError) as e:
            logger.error(
                "expense_save_failed",
                key=self._key,
                error=str(e),
                record_count=len(self._records),
            )
            written = False
        else:
            if not written:
                logger.error(
                    "expense_save_rejected",
                    key=self._key,
                    record_count=len(self._records),
                )

        self._unsaved = not written
        return written

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add(self, record: ExpenseRecord) -> bool:
        """
        Append a record and persist.

        Records that would break the store's invariants (blank or
        placeholder name, amount not above zero, id already present)
        are dropped and False is returned.
        """
        reason = self._rejection_reason(record)
        if reason is not None:
            logger.info(
                "expense_rejected",
                expense_id=str(record.id),
                reason=reason,
            )
            return False

        self._records.append(record)
        persisted = self.save()
        self._notify(StoreEvent(
            event_type=StoreEventType.EXPENSE_ADDED,
            expense_ids=[record.id],
            record_count=len(self._records),
            persisted=persisted,
            details={
                "name": record.name,
                "category": record.category.value,
                "amount": str(record.amount),
            },
        ))
        return True

    def remove_at(self, positions: Iterable[int]) -> list[ExpenseRecord]:
        """
        Remove records at zero-based positions in store order.

        Positions outside the list are ignored. Returns the removed
        records in store order.
        """
        wanted = {p for p in positions if 0 <= p < len(self._records)}
        if not wanted:
            return []

        removed = [self._records[p] for p in sorted(wanted)]
        self._records = [
            record for index, record in enumerate(self._records)
            if index not in wanted
        ]
        self._after_removal(removed)
        return removed

    def remove_by_id(self, expense_id: UUID) -> bool:
        """Remove a single record by id. Returns False if it was not present."""
        return bool(self.remove_by_ids([expense_id]))

    def remove_by_ids(self, expense_ids: Iterable[UUID]) -> list[ExpenseRecord]:
        """
        Remove every record whose id is given; unknown ids are ignored.

        Returns the removed records in store order.
        """
        wanted = set(expense_ids)
        removed = [record for record in self._records if record.id in wanted]
        if not removed:
            return []

        self._records = [record for record in self._records if record.id not in wanted]
        self._after_removal(removed)
        return removed

    # =========================================================================
    # CHANGE NOTIFICATION
    # =========================================================================

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a callback fired after every successful mutation.

        Returns a callable that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # Log failure but don't raise
                logger.error(
                    "store_listener_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                    event_type=event.event_type.value,
                )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _after_removal(self, removed: list[ExpenseRecord]) -> None:
        persisted = self.save()
        self._notify(StoreEvent(
            event_type=StoreEventType.EXPENSES_REMOVED,
            expense_ids=[record.id for record in removed],
            record_count=len(self._records),
            persisted=persisted,
        ))

    def _rejection_reason(self, record: ExpenseRecord) -> Optional[str]:
        name = record.name.strip()
        if not name:
            return "empty_name"
        if name == self._placeholder_name:
            return "placeholder_name"
        if record.amount <= 0:
            return "non_positive_amount"
        if record.id in self:
            return "duplicate_id"
        return None
