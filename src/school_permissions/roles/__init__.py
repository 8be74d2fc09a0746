"""Role records carrying a permission document."""
from __future__ import annotations

from school_permissions.roles.role import RESERVED_GLOBAL_CODES, Role

__all__ = ["RESERVED_GLOBAL_CODES", "Role"]
