"""Audit logging package."""

from hydration.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
