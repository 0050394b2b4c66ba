"""Projection queries over the expense store."""

from iexpense.queries.formatting import CURRENCY_SYMBOLS, format_currency
from iexpense.queries.projection import (
    ExpenseFilter,
    SortDescriptor,
    SortField,
    SortOrder,
    classify,
    derive_projection,
    filter_records,
    sort_records,
)

__all__ = [
    "CURRENCY_SYMBOLS",
    "ExpenseFilter",
    "SortDescriptor",
    "SortField",
    "SortOrder",
    "classify",
    "derive_projection",
    "filter_records",
    "format_currency",
    "sort_records",
]
