"""Decision audit trail."""
from __future__ import annotations

from school_permissions.audit.logger import DecisionAuditLogger

__all__ = ["DecisionAuditLogger"]
