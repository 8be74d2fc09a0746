"""school-permissions — Role-based authorization policy engine for school management systems.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import school_permissions as sp
>>> sp.__version__
'0.1.0'
>>> document = sp.PermissionDocument().with_grant("calificaciones", "ver")
>>> sp.has_permission(document, "Calificaciones", "VER")
True
>>> sp.PolicyEvaluator().evaluate(document, sp.AccessRequest("calificaciones", "editar")).allowed
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

from school_permissions.guard import AccessGuard

# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------
from school_permissions.document.schema import PermissionDocument
from school_permissions.document.modules import ModulePermissions
from school_permissions.document.restrictions import AccessSchedule, RestrictionSet
from school_permissions.document.special_config import AuditLevel, SpecialConfig
from school_permissions.document.loader import DocumentConfigError, DocumentLoader

# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------
from school_permissions.policy.evaluator import (
    AccessDecision,
    AccessRequest,
    PolicyEvaluator,
    granted_actions,
    has_permission,
    is_device_allowed,
    is_ip_allowed,
    is_location_allowed,
    is_within_access_window,
)
from school_permissions.policy.registry import (
    MODULE_NAMES,
    ModuleSpec,
    UnknownPermissionError,
    actions_for,
    is_known,
    module_names,
)
from school_permissions.policy.scorer import access_level, permission_summary, rank_documents

# ---------------------------------------------------------------------------
# Roles, config, audit and templates
# ---------------------------------------------------------------------------
from school_permissions.roles.role import RESERVED_GLOBAL_CODES, Role
from school_permissions.config.loader import ConfigLoader, EngineConfig
from school_permissions.audit.logger import DecisionAuditLogger
from school_permissions.templates.role_templates import get_template, list_templates

__all__ = [
    "__version__",
    "AccessGuard",
    # Document
    "PermissionDocument",
    "ModulePermissions",
    "RestrictionSet",
    "AccessSchedule",
    "SpecialConfig",
    "AuditLevel",
    "DocumentConfigError",
    "DocumentLoader",
    # Policy
    "AccessDecision",
    "AccessRequest",
    "PolicyEvaluator",
    "granted_actions",
    "has_permission",
    "is_device_allowed",
    "is_ip_allowed",
    "is_location_allowed",
    "is_within_access_window",
    "MODULE_NAMES",
    "ModuleSpec",
    "UnknownPermissionError",
    "actions_for",
    "is_known",
    "module_names",
    "access_level",
    "permission_summary",
    "rank_documents",
    # Roles, config, audit, templates
    "RESERVED_GLOBAL_CODES",
    "Role",
    "ConfigLoader",
    "EngineConfig",
    "DecisionAuditLogger",
    "get_template",
    "list_templates",
]
