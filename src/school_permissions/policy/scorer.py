"""Coarse access level of a permission document.

The score is a weighted sum over a handful of high-signal permissions and
is meant for tiering and sorting roles.  It is not an authorization input:
use :func:`~school_permissions.policy.evaluator.has_permission` for that.

Example
-------
>>> doc = PermissionDocument().with_grant("administracion", "gestionar_roles")
>>> access_level(doc)
15
"""
from __future__ import annotations

from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.evaluator import has_permission

# (module, action, weight)
ACCESS_WEIGHTS: tuple[tuple[str, str, int], ...] = (
    ("estudiantes", "ver", 1),
    ("estudiantes", "crear", 2),
    ("estudiantes", "editar", 2),
    ("estudiantes", "eliminar", 3),
    ("administracion", "gestionar_usuarios", 10),
    ("administracion", "configurar_colegio", 10),
    ("administracion", "gestionar_roles", 15),
)

_HEADLINE_PERMISSIONS: tuple[tuple[str, str, str], ...] = (
    ("estudiantes", "ver", "View students"),
    ("calificaciones", "crear", "Create grades"),
    ("administracion", "gestionar_usuarios", "Manage users"),
)

NO_HEADLINE_PERMISSIONS = "No headline permissions"


def access_level(document: PermissionDocument) -> int:
    """Return the weighted access level of ``document`` (0 for deny-all)."""
    return sum(
        weight
        for module, action, weight in ACCESS_WEIGHTS
        if has_permission(document, module, action)
    )


def permission_summary(document: PermissionDocument) -> list[str]:
    """Return labels for the headline permissions granted by ``document``."""
    labels = [
        label
        for module, action, label in _HEADLINE_PERMISSIONS
        if has_permission(document, module, action)
    ]
    if document.special_config.access_all_schools:
        labels.append("All-school access")
    return labels or [NO_HEADLINE_PERMISSIONS]


def rank_documents(documents: dict[str, PermissionDocument]) -> list[tuple[str, int]]:
    """Return ``(name, access_level)`` pairs, highest level first.

    Ties keep name order so the ranking is deterministic.
    """
    scored = [(name, access_level(doc)) for name, doc in sorted(documents.items())]
    return sorted(scored, key=lambda pair: -pair[1])
