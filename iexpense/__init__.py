"""
iExpense - Source Package

Core of a personal and business expense tracker: a persisted expense
store and the pure projection that turns it into display sections.

DESIGN PRINCIPLES:
1. The store is the single source of truth
2. Display order is derived, never stored
3. Persistence failures never crash the UI
4. Records are identified by generated ids, never by name or position
5. Storage is injected and swappable
"""

__version__ = "1.0.0"
__author__ = "iExpense Team"
