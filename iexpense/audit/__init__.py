"""Activity logging package."""

from iexpense.audit.logger import ActivityLogger

__all__ = ["ActivityLogger"]
