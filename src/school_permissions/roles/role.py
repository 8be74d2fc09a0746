"""Role record — a named role and the permission document it carries.

A role is either *global* (no ``school_id``), in which case its code must be
one of the reserved codes ``ADMIN_GLOBAL`` or ``SUPER_ADMIN``, or it belongs
to exactly one school and must not use a reserved code.

The permission document arrives from storage as JSON.  A document that
cannot be decoded does not make the role unusable: it is replaced by a
deny-all document and a warning is logged.

Roles are immutable.  Every update method returns a new ``Role`` with a
fresh ``updated_at``.

Example
-------
>>> role = Role.school_role("PROFESOR", "Profesor de aula", school_id=uuid4())
>>> role.has_permission("calificaciones", "ver")
False
>>> role = role.with_permissions(role.permissions.with_grant("calificaciones", "ver"))
>>> role.has_permission("calificaciones", "ver")
True
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.evaluator import has_permission, is_ip_allowed, is_within_access_window
from school_permissions.policy import scorer

logger = logging.getLogger(__name__)

RESERVED_GLOBAL_CODES: frozenset[str] = frozenset(["ADMIN_GLOBAL", "SUPER_ADMIN"])

_MAX_CODE_LENGTH = 50
_MAX_NAME_LENGTH = 100
_MAX_DESCRIPTION_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Role(BaseModel):
    """A role of the school system.

    Attributes
    ----------
    code:
        Unique code such as ``PROFESOR`` or ``COORDINADOR``.  Upper-cased.
    name:
        Display name.
    school_id:
        Owning school, or ``None`` for a global role.
    description:
        Optional free text; blank becomes ``None``.
    active:
        Inactive roles are denied everything by :class:`AccessGuard`.
    permissions:
        The role's :class:`PermissionDocument`.  Accepts a document, a dict
        or a JSON string on input.
    created_at, updated_at:
        UTC timestamps.
    """

    model_config = {"frozen": True}

    code: str
    name: str
    school_id: UUID | None = None
    description: str | None = None
    active: bool = True
    permissions: PermissionDocument = Field(default_factory=PermissionDocument)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @field_validator("code")
    @classmethod
    def validate_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Role code is required.")
        if len(value) > _MAX_CODE_LENGTH:
            raise ValueError(f"Role code must not exceed {_MAX_CODE_LENGTH} characters.")
        return value.upper()

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Role name is required.")
        if len(value) > _MAX_NAME_LENGTH:
            raise ValueError(f"Role name must not exceed {_MAX_NAME_LENGTH} characters.")
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        if len(value) > _MAX_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Role description must not exceed {_MAX_DESCRIPTION_LENGTH} characters."
            )
        return value.strip()

    @field_validator("permissions", mode="before")
    @classmethod
    def decode_permissions(cls, value: object) -> object:
        if isinstance(value, PermissionDocument):
            return value
        if value is None:
            return PermissionDocument()
        try:
            if isinstance(value, (str, bytes)):
                return PermissionDocument.from_json(value)
            return PermissionDocument.model_validate(value)
        except (ValueError, TypeError, ValidationError) as exc:
            logger.warning("Undecodable role permissions replaced by deny-all document: %s", exc)
            return PermissionDocument()

    @model_validator(mode="after")
    def check_scope_matches_code(self) -> Role:
        if self.school_id is None and self.code not in RESERVED_GLOBAL_CODES:
            raise ValueError(
                f"Global roles must use one of {sorted(RESERVED_GLOBAL_CODES)}; got {self.code!r}."
            )
        if self.school_id is not None and self.code in RESERVED_GLOBAL_CODES:
            raise ValueError(f"Code {self.code!r} is reserved for global roles.")
        return self

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def global_role(
        cls,
        code: str,
        name: str,
        permissions: PermissionDocument | None = None,
        description: str | None = None,
    ) -> Role:
        """Create a global role (``ADMIN_GLOBAL`` or ``SUPER_ADMIN``)."""
        return cls(
            code=code,
            name=name,
            permissions=permissions or PermissionDocument(),
            description=description,
        )

    @classmethod
    def school_role(
        cls,
        code: str,
        name: str,
        school_id: UUID,
        permissions: PermissionDocument | None = None,
        description: str | None = None,
    ) -> Role:
        """Create a role scoped to one school."""
        if school_id.int == 0:
            raise ValueError("school_id must not be the nil UUID for a school role.")
        return cls(
            code=code,
            name=name,
            school_id=school_id,
            permissions=permissions or PermissionDocument(),
            description=description,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_global(self) -> bool:
        return self.school_id is None

    @property
    def is_predefined_global(self) -> bool:
        return self.is_global and self.code in RESERVED_GLOBAL_CODES

    def has_permission(self, module: str, action: str) -> bool:
        return has_permission(self.permissions, module, action)

    def permits_access_at(self, timestamp: datetime) -> bool:
        return is_within_access_window(self.permissions.restrictions, timestamp)

    def permits_access_from_ip(self, ip: str) -> bool:
        return is_ip_allowed(self.permissions.restrictions, ip)

    def belongs_to_school(self, school_id: UUID) -> bool:
        """Global roles belong to every school."""
        return self.is_global or self.school_id == school_id

    def can_be_deleted(self, active_assignments: int = 0) -> bool:
        """Predefined global roles and roles still assigned cannot be deleted."""
        if self.is_predefined_global:
            return False
        return active_assignments == 0

    @property
    def access_level(self) -> int:
        return scorer.access_level(self.permissions)

    def permission_summary(self) -> str:
        return ", ".join(scorer.permission_summary(self.permissions))

    def permissions_json(self, indent: int | None = 2) -> str:
        """Serialise the permission document for storage."""
        return self.permissions.to_json(indent=indent)

    # ------------------------------------------------------------------
    # Copy-on-write updates
    # ------------------------------------------------------------------

    def _updated(self, **changes: object) -> Role:
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        data["updated_at"] = _utcnow()
        return type(self).model_validate(data)

    def with_permissions(self, permissions: PermissionDocument) -> Role:
        return self._updated(permissions=permissions)

    def activate(self) -> Role:
        return self if self.active else self._updated(active=True)

    def deactivate(self) -> Role:
        return self._updated(active=False) if self.active else self

    def with_school(self, school_id: UUID) -> Role:
        """Move a school role to another school."""
        if self.is_predefined_global:
            raise ValueError("The school of a predefined global role cannot be changed.")
        if school_id.int == 0:
            raise ValueError("school_id must not be the nil UUID.")
        return self._updated(school_id=school_id)

    def clone_for(self, code: str, name: str, school_id: UUID | None = None) -> Role:
        """Return a new role with this role's permissions and description."""
        if school_id is None:
            return Role.global_role(code, name, self.permissions, self.description)
        return Role.school_role(code, name, school_id, self.permissions, self.description)

    def __str__(self) -> str:
        scope = "GLOBAL" if self.is_global else f"school {self.school_id}"
        state = "active" if self.active else "inactive"
        return f"{self.code} ({self.name}) - {scope} - {state}"

