#!/usr/bin/env python3
"""Example: Quickstart — school-permissions

Minimal working example: build a permission document, check a few
actions, and score the document.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install school-permissions
"""
from __future__ import annotations

import school_permissions as sp


def main() -> None:
    print(f"school-permissions version: {sp.__version__}")

    # Step 1: Decode a document as stored next to the role record
    document = sp.PermissionDocument.from_dict({
        "modulos": {
            "estudiantes": {"ver": True},
            "calificaciones": {"ver": True, "crear": True, "editar": True},
        },
        "restricciones": {"ip_permitidas": ["10.0.0.7"]},
    })

    # Step 2: Check permissions (names are case-insensitive)
    checks = [
        ("Estudiantes", "VER"),
        ("calificaciones", "publicar"),
        ("cafeteria", "ver"),
    ]
    print("\nPermission checks:")
    for module, action in checks:
        icon = "ALLOW" if sp.has_permission(document, module, action) else "DENY"
        print(f"  [{icon}] {module}.{action}")

    # Step 3: Evaluate full requests, including the IP allowlist
    evaluator = sp.PolicyEvaluator()
    print("\nRequest evaluation:")
    for ip in ["10.0.0.7", "192.168.1.20"]:
        decision = evaluator.evaluate(document, sp.AccessRequest("calificaciones", "editar", ip=ip))
        print(f"  {ip}: {'ALLOW' if decision else 'DENY'} ({decision.reason})")

    # Step 4: Score the document
    document = document.with_grant("administracion", "gestionar_usuarios")
    print(f"\nAccess level: {sp.access_level(document)}")
    print(f"Summary: {', '.join(sp.permission_summary(document))}")


if __name__ == "__main__":
    main()
