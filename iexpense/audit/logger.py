"""
Activity Logger

DESIGN DECISION: Every change to the expense list is logged.
This provides:
1. A history of what was added and removed
2. Visibility into changes that could not be saved to disk
3. Debugging capability without a debugger attached

The activity logger:
- Subscribes to the store like any other consumer
- Never raises back into the store (logging must not break a mutation)
"""

from typing import Callable, Optional

import structlog

from iexpense.models.events import StoreEvent, StoreEventSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """
    Writes every store event to the structured log.

    Usage:
        activity = ActivityLogger()
        unsubscribe = store.subscribe(activity.log)
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("iexpense.activity")
        self.events_logged = 0

    def log(self, event: StoreEvent) -> None:
        """
        Log a store event at a level matching its severity.

        Changes held in memory only are logged as warnings.
        """
        log_dict = event.to_log_dict()

        if event.severity == StoreEventSeverity.WARNING:
            self._logger.warning("store_event", **log_dict)
        else:
            self._logger.info("store_event", **log_dict)

        self.events_logged += 1

    def attach(self, subscribe: Callable[[Callable[[StoreEvent], None]], Callable[[], None]]) -> Callable[[], None]:
        """
        Subscribe to a store through its `subscribe` method.

        Returns the unsubscribe callable.
        """
        return subscribe(self.log)
