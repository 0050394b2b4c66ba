"""
Projection Engine

DESIGN DECISION: Deriving what to display is a PURE function of
(records, sort keys, filter). It owns no data and has no side effects,
so it is recomputed on every query and can never fall out of sync with
the store.

Order of operations:
1. Filter by category (or keep everything for "All")
2. Stable multi-key sort of the filtered records
3. Group into one section per category, fixed category order,
   empty sections omitted
4. Classify each amount into a severity
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict

from iexpense.models.expense import ExpenseCategory, ExpenseRecord, Severity
from iexpense.models.projection import (
    ExpenseProjection,
    ExpenseSection,
    ProjectedExpense,
)


LOW_SEVERITY_LIMIT = Decimal("100")
MEDIUM_SEVERITY_LIMIT = Decimal("1000")


class ExpenseFilter(str, Enum):
    """The three choices of the filter menu."""
    ALL = "All"
    PERSONAL = "Personal"
    BUSINESS = "Business"

    def matches(self, record: ExpenseRecord) -> bool:
        if self is ExpenseFilter.ALL:
            return True
        return record.category.value == self.value


class SortField(str, Enum):
    NAME = "name"
    AMOUNT = "amount"


class SortDescriptor(BaseModel):
    """One key of a multi-key sort."""
    model_config = ConfigDict(frozen=True)

    field: SortField
    reverse: bool = False

    def key(self, record: ExpenseRecord) -> Union[str, Decimal]:
        if self.field == SortField.NAME:
            return record.name.casefold()
        return record.amount


class SortOrder(str, Enum):
    """The two orderings offered by the sort menu."""
    AMOUNT_THEN_NAME = "amount_then_name"
    NAME_THEN_AMOUNT = "name_then_amount"

    @property
    def descriptors(self) -> list[SortDescriptor]:
        if self is SortOrder.AMOUNT_THEN_NAME:
            return [SortDescriptor(field=SortField.AMOUNT), SortDescriptor(field=SortField.NAME)]
        return [SortDescriptor(field=SortField.NAME), SortDescriptor(field=SortField.AMOUNT)]


SortSpec = Union[SortOrder, Sequence[SortDescriptor]]


def classify(amount: Union[Decimal, float, int]) -> Severity:
    """
    Bucket an amount for visual emphasis.

    amount <= 100 is LOW, amount <= 1000 is MEDIUM, anything above is HIGH.
    Boundary values belong to the lower bucket.
    """
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))

    if amount <= LOW_SEVERITY_LIMIT:
        return Severity.LOW
    if amount <= MEDIUM_SEVERITY_LIMIT:
        return Severity.MEDIUM
    return Severity.HIGH


def filter_records(
    records: Iterable[ExpenseRecord],
    filter_by: ExpenseFilter = ExpenseFilter.ALL,
) -> list[ExpenseRecord]:
    """Keep matching records, preserving their relative order."""
    filter_by = ExpenseFilter(filter_by)
    return [record for record in records if filter_by.matches(record)]


def sort_records(
    records: Iterable[ExpenseRecord],
    sort: SortSpec = SortOrder.NAME_THEN_AMOUNT,
) -> list[ExpenseRecord]:
    """
    Stable sort by descriptors evaluated left to right.

    Records equal on every key keep their incoming relative order.
    """
    descriptors = sort.descriptors if isinstance(sort, SortOrder) else list(sort)
    ordered = list(records)
    # Least significant key first; each pass is stable.
    for descriptor in reversed(descriptors):
        ordered.sort(key=descriptor.key, reverse=descriptor.reverse)
    return ordered


def derive_projection(
    records: Sequence[ExpenseRecord],
    sort: SortSpec = SortOrder.NAME_THEN_AMOUNT,
    filter_by: ExpenseFilter = ExpenseFilter.ALL,
) -> ExpenseProjection:
    """
    Build the grouped, ordered, classified view of `records`.

    `records` must be in store order; each row remembers its store index.
    """
    store_index = {record.id: index for index, record in enumerate(records)}
    ordered = sort_records(filter_records(records, filter_by), sort)

    sections = []
    for category in ExpenseCategory:
        rows = tuple(
            ProjectedExpense(
                record=record,
                severity=classify(record.amount),
                store_index=store_index[record.id],
            )
            for record in ordered
            if record.category == category
        )
        if rows:
            sections.append(ExpenseSection(category=category, rows=rows))

    return ExpenseProjection(sections=tuple(sections))
