"""Policy evaluation: module registry, evaluator and access scorer."""
from __future__ import annotations

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
    parse_time_of_day,
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

__all__ = [
    # Evaluator
    "AccessDecision",
    "AccessRequest",
    "PolicyEvaluator",
    "granted_actions",
    "has_permission",
    "is_device_allowed",
    "is_ip_allowed",
    "is_location_allowed",
    "is_within_access_window",
    "parse_time_of_day",
    # Registry
    "MODULE_NAMES",
    "ModuleSpec",
    "UnknownPermissionError",
    "actions_for",
    "is_known",
    "module_names",
    # Scorer
    "access_level",
    "permission_summary",
    "rank_documents",
]
