"""Audit logging package."""

from lifeos.audit.logger import (
    EngineAuditLogger,
    configure_logging,
    create_correlation_id,
    get_logger,
)

__all__ = ["EngineAuditLogger", "configure_logging", "create_correlation_id", "get_logger"]
