#!/usr/bin/env python3
"""Example: Roles, schedules and decision auditing — school-permissions

Creates a teacher role from the ``profesor`` template, restricts it to a
morning schedule with a holiday, and runs requests through an AccessGuard
that writes an audit trail.

Usage:
    python examples/02_role_schedule.py

Requirements:
    pip install school-permissions
"""
from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import school_permissions as sp


def main() -> None:
    # Step 1: Start from a template and tighten its schedule
    template = sp.get_template("profesor")
    schedule = template.restrictions.access_schedule.model_copy(
        update={
            "start_time": "07:00",
            "end_time": "12:30",
            "date_exceptions": (datetime(2024, 3, 25).date(),),
        }
    )
    permissions = template.with_restrictions(
        template.restrictions.model_copy(update={"access_schedule": schedule})
    ).with_special_config(sp.SpecialConfig(audit_level=sp.AuditLevel.MEDIUM))

    role = sp.Role.school_role("profesor", "Profesor de aula", uuid4(), permissions)
    print(f"Role: {role}")
    print(f"Access level: {role.access_level}")

    # Step 2: Guard requests and audit every decision
    with tempfile.TemporaryDirectory() as tmp:
        audit = sp.DecisionAuditLogger(Path(tmp) / "decisions.jsonl")
        guard = sp.AccessGuard(audit_logger=audit)

        requests = [
            sp.AccessRequest("asistencia", "registrar", timestamp=datetime(2024, 3, 4, 8, 0)),
            sp.AccessRequest("asistencia", "registrar", timestamp=datetime(2024, 3, 4, 14, 0)),
            sp.AccessRequest("asistencia", "registrar", timestamp=datetime(2024, 3, 25, 9, 0)),
            sp.AccessRequest("calificaciones", "publicar", timestamp=datetime(2024, 3, 4, 9, 0)),
        ]
        print("\nDecisions:")
        for request in requests:
            decision = guard.check_role(role, request)
            status = "ALLOW" if decision else f"DENY ({decision.failed_check})"
            print(f"  {request.timestamp:%a %Y-%m-%d %H:%M} {request.module}.{request.action}: {status}")

        # Step 3: Deactivated roles are denied outright
        decision = guard.check_role(role.deactivate(), requests[0])
        print(f"\nInactive role: {decision.reason}")

        print(f"\nAudit records written: {audit.count()}")


if __name__ == "__main__":
    main()
