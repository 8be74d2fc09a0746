"""Engine configuration."""
from __future__ import annotations

from school_permissions.config.loader import AuditConfig, ConfigLoader, EngineConfig, ScheduleConfig

__all__ = ["AuditConfig", "ConfigLoader", "EngineConfig", "ScheduleConfig"]
