"""Built-in role permission presets."""
from __future__ import annotations

from school_permissions.templates.role_templates import get_template, list_templates, write_template

__all__ = ["get_template", "list_templates", "write_template"]
