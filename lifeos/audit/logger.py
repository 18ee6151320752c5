"""
Engine Audit Logger

DESIGN DECISION: The engine itself is pure, but the flows around it
(rate refreshes, record fetches, dashboard builds) are logged so a
degraded answer can be traced back to its cause.

The audit logger:
- Writes structured JSON through structlog
- Never raises into the caller
- Supports correlation IDs to trace the events of one request
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from lifeos.config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Set the stdlib root level that structlog's level filter reads.

    Defaults to AppSettings.log_level (env LOG_LEVEL).
    """
    level = (level or get_settings().app.log_level).upper()
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


configure_logging()

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


def get_logger(name: Optional[str] = None):
    """Get a structlog logger bound to the given module name."""
    return structlog.get_logger(name)


class EngineAuditLogger:
    """
    Named events for the engine's flows.

    Each method maps one significant step to one log line so the
    event names stay stable for log queries.
    """

    def __init__(self, logger=None):
        self._logger = logger or get_logger("lifeos.audit")

    def _emit(self, level: str, event: str, correlation_id: Optional[UUID], **fields) -> None:
        if correlation_id is not None:
            fields["correlation_id"] = str(correlation_id)
        try:
            getattr(self._logger, level)(event, **fields)
        except Exception as e:
            # Log failure but don't raise
            get_logger(__name__).error("audit_emit_failed", audit_event=event, error=str(e))

    def log_dashboard_built(
        self,
        identity: str,
        status: str,
        alert_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "info",
            "dashboard_built",
            correlation_id,
            identity=identity,
            status=status,
            alert_count=alert_count,
        )

    def log_net_worth_computed(
        self,
        identity: str,
        snapshot_count: int,
        current_try: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "info",
            "net_worth_computed",
            correlation_id,
            identity=identity,
            snapshot_count=snapshot_count,
            current_try=current_try,
        )

    def log_exchange_rate_degraded(
        self,
        source: str,
        rate: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """A stale or fallback rate was served instead of a live one."""
        self._emit(
            "warning",
            "exchange_rate_degraded",
            correlation_id,
            source=source,
            rate=rate,
        )

    def log_record_source_failed(
        self,
        identity: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "error",
            "record_source_failed",
            correlation_id,
            identity=identity,
            error=error_message,
        )

    def log_entry_prepared(
        self,
        entry_type: str,
        amount_try: str,
        rate: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "info",
            "entry_prepared",
            correlation_id,
            entry_type=entry_type,
            amount_try=amount_try,
            rate=rate,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new request (e.g. a dashboard load)
    and pass it through all subsequent operations.
    """
    return uuid4()
