"""Shared bootstrap for school-permissions benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"
_BENCHMARKS = _REPO_ROOT / "benchmarks"

for _path in [str(_SRC), str(_BENCHMARKS)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.evaluator import AccessRequest, PolicyEvaluator
from school_permissions.templates.role_templates import get_template

__all__ = [
    "AccessRequest",
    "PermissionDocument",
    "PolicyEvaluator",
    "get_template",
]
