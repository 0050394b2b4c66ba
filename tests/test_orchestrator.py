"""End-to-end tests for the ExpenseTracker orchestrator."""

import logging
from decimal import Decimal

import pytest

from iexpense.audit import ActivityLogger
from iexpense.config import get_settings
from iexpense.models.events import StoreEventType
from iexpense.models.expense import ExpenseCategory, ExpenseDraft, Severity
from iexpense.orchestrator import ExpenseTracker
from iexpense.queries import ExpenseFilter, SortOrder
from iexpense.services.storage import FileBlobStorage, InMemoryBlobStorage


PERSONAL = ExpenseCategory.PERSONAL
BUSINESS = ExpenseCategory.BUSINESS


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep every test away from the real data directory and .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("IEXPENSE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage():
    return InMemoryBlobStorage()


@pytest.fixture
def tracker(storage):
    return ExpenseTracker(storage=storage)


def submit(tracker, name, category, amount):
    record, validation = tracker.submit(
        ExpenseDraft(name=name, category=category, amount=Decimal(amount))
    )
    assert validation.can_save, validation.issues
    return record


class TestEndToEnd:
    """The Coffee / Laptop scenario."""

    def test_sections_severity_and_filter(self, tracker):
        submit(tracker, "Coffee", PERSONAL, "4.50")
        submit(tracker, "Laptop", BUSINESS, "1499.00")

        projection = tracker.projection()
        personal = projection.section(PERSONAL)
        business = projection.section(BUSINESS)
        assert [(r.record.name, r.severity) for r in personal.rows] == [("Coffee", Severity.LOW)]
        assert [(r.record.name, r.severity) for r in business.rows] == [("Laptop", Severity.HIGH)]

        filtered = tracker.projection(filter_by=ExpenseFilter.BUSINESS)
        assert filtered.section(PERSONAL) is None
        assert [s.category for s in filtered.sections] == [BUSINESS]

    def test_display_amount(self, tracker):
        submit(tracker, "Laptop", BUSINESS, "1499")
        row = tracker.projection().rows[0]
        assert tracker.display_amount(row) == "$1,499.00"

    def test_persists_across_sessions(self, tmp_path):
        first = ExpenseTracker(storage=FileBlobStorage(tmp_path / "blobs"))
        submit(first, "Coffee", PERSONAL, "4.50")

        second = ExpenseTracker(storage=FileBlobStorage(tmp_path / "blobs"))
        assert [r.name for r in second.store] == ["Coffee"]

    def test_default_storage_uses_configured_directory(self, tmp_path):
        tracker = ExpenseTracker()
        submit(tracker, "Coffee", PERSONAL, "4.50")
        assert (tmp_path / "data" / "Items.json").exists()


class TestSubmit:
    """Tests for the add flow."""

    def test_invalid_draft_not_added(self, tracker):
        record, validation = tracker.submit(ExpenseDraft(name="New Expense"))
        assert record is None
        assert validation.error_count == 2
        assert len(tracker.store) == 0

    def test_valid_draft_added(self, tracker, storage):
        record = submit(tracker, "Coffee", PERSONAL, "4.50")
        assert record in list(tracker.store)
        assert storage.write_count == 1
        assert tracker.has_unsaved_changes is False

    def test_long_name_added(self, tracker):
        """Test that a validated draft with a long name is stored, not raised."""
        draft = ExpenseDraft(name="x" * 201, amount=Decimal("5"))
        assert tracker.validate(draft).can_save is True

        record, validation = tracker.submit(draft)
        assert validation.can_save is True
        assert record is not None
        assert tracker.store.get(record.id).name == "x" * 201


class TestDelete:
    """Tests for deleting from a displayed, sorted list."""

    def test_delete_in_section_uses_display_order(self, tracker):
        """Test that a swipe on a sorted section removes the row shown there."""
        expensive = submit(tracker, "Dinner", PERSONAL, "80")
        cheap = submit(tracker, "Coffee", PERSONAL, "4.50")
        submit(tracker, "Laptop", BUSINESS, "1499")

        tracker.sort = SortOrder.AMOUNT_THEN_NAME
        removed = tracker.delete_in_section(PERSONAL, {0})

        assert removed == [cheap]
        assert expensive.id in tracker.store
        assert len(tracker.store) == 2

    def test_delete_in_filtered_section(self, tracker):
        submit(tracker, "Coffee", PERSONAL, "4.50")
        laptop = submit(tracker, "Laptop", BUSINESS, "1499")

        tracker.filter_by = ExpenseFilter.BUSINESS
        assert tracker.delete_in_section(BUSINESS, {0}) == [laptop]
        assert [r.name for r in tracker.store] == ["Coffee"]

    def test_delete_by_ids(self, tracker):
        coffee = submit(tracker, "Coffee", PERSONAL, "4.50")
        assert tracker.delete([coffee.id]) == [coffee]
        assert tracker.projection().is_empty is True


class TestNotifications:
    """Tests for change subscriptions through the tracker."""

    def test_on_change_receives_events(self, tracker):
        events = []
        unsubscribe = tracker.on_change(events.append)
        coffee = submit(tracker, "Coffee", PERSONAL, "4.50")
        tracker.delete([coffee.id])
        unsubscribe()
        submit(tracker, "Tea", PERSONAL, "3")

        assert [e.event_type for e in events] == [
            StoreEventType.EXPENSE_ADDED,
            StoreEventType.EXPENSES_REMOVED,
        ]

    def test_activity_logger_attached(self, storage):
        activity = ActivityLogger()
        tracker = ExpenseTracker(storage=storage, activity_logger=activity)
        submit(tracker, "Coffee", PERSONAL, "4.50")
        assert activity.events_logged == 1


class TestConstruction:
    """Tests for building a tracker from settings."""

    def test_invalid_storage_key_starts_empty(self, monkeypatch):
        """Test that a storage key the file backend rejects does not crash startup."""
        monkeypatch.setenv("IEXPENSE_STORAGE_KEY", "My Items")
        get_settings.cache_clear()

        tracker = ExpenseTracker()
        assert tracker.projection().is_empty is True

        submit(tracker, "Coffee", PERSONAL, "4.50")
        assert len(tracker.store) == 1
        assert tracker.has_unsaved_changes is True

    def test_leaves_root_logger_alone(self, storage):
        """Test that building a tracker does not reconfigure stdlib logging."""
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)

        ExpenseTracker(storage=storage)

        assert root.level == level
        assert root.handlers == handlers
