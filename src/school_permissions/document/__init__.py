"""Permission document model, codec and loader.

Example
-------
::

    from school_permissions.document import DocumentLoader, PermissionDocument

    document = DocumentLoader().load("roles/profesor.json")
    updated = document.with_grant("calificaciones", "publicar")
"""
from __future__ import annotations

from school_permissions.document.loader import DocumentConfigError, DocumentLoader
from school_permissions.document.modules import (
    AdministrationPermissions,
    AttendancePermissions,
    CommunicationsPermissions,
    CrudPermissions,
    DisciplinePermissions,
    FinancePermissions,
    GradesPermissions,
    LibraryPermissions,
    ModulePermissions,
    PermissionRecord,
    ReportsPermissions,
    StudentsPermissions,
    TeachersPermissions,
)
from school_permissions.document.restrictions import AccessSchedule, RestrictionSet
from school_permissions.document.schema import PermissionDocument
from school_permissions.document.special_config import AuditLevel, SpecialConfig

__all__ = [
    # Document
    "PermissionDocument",
    "ModulePermissions",
    "RestrictionSet",
    "AccessSchedule",
    "SpecialConfig",
    "AuditLevel",
    # Module records
    "PermissionRecord",
    "CrudPermissions",
    "StudentsPermissions",
    "TeachersPermissions",
    "GradesPermissions",
    "AttendancePermissions",
    "DisciplinePermissions",
    "LibraryPermissions",
    "FinancePermissions",
    "ReportsPermissions",
    "CommunicationsPermissions",
    "AdministrationPermissions",
    # Loader
    "DocumentConfigError",
    "DocumentLoader",
]
