"""Test that the quickstart API works for school-permissions."""
from __future__ import annotations

from datetime import datetime


def test_quickstart_import() -> None:
    import school_permissions as sp

    assert sp.__version__ == "0.1.0"


def test_quickstart_deny_by_default() -> None:
    from school_permissions import AccessRequest, PermissionDocument, PolicyEvaluator

    decision = PolicyEvaluator().evaluate(PermissionDocument(), AccessRequest("estudiantes", "ver"))
    assert decision.allowed is False


def test_quickstart_grant_and_check() -> None:
    from school_permissions import PermissionDocument, has_permission

    document = PermissionDocument().with_grant("estudiantes", "ver")
    assert has_permission(document, "Estudiantes", "VER") is True
    assert has_permission(document, "estudiantes", "crear") is False


def test_quickstart_template_with_guard() -> None:
    from school_permissions import AccessGuard, AccessRequest, get_template

    guard = AccessGuard()
    request = AccessRequest("asistencia", "registrar", timestamp=datetime(2024, 3, 4, 7, 30))
    assert guard.check(get_template("profesor"), request).allowed is True


def test_quickstart_access_level() -> None:
    from school_permissions import access_level, get_template

    assert access_level(get_template("admin_global")) > access_level(get_template("profesor"))


def test_quickstart_guard_repr() -> None:
    from school_permissions import AccessGuard

    assert "AccessGuard" in repr(AccessGuard())
