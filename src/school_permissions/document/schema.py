"""PermissionDocument — the complete permission set of one role.

A document is built once per role record, usually from the JSON stored
alongside the role, and is immutable afterwards.  Updates go through
:meth:`PermissionDocument.with_grant`, which returns a new document.

Example
-------
>>> doc = PermissionDocument.from_dict({"modulos": {"estudiantes": {"ver": True}}})
>>> doc.modules.students.view
True
>>> doc.to_dict()["configuracion_especial"]["nivel_auditoria"]
'BASICO'
"""
from __future__ import annotations

import json

import yaml
from pydantic import BaseModel, Field, field_validator

from school_permissions.document.modules import _WIRE_MODEL_CONFIG, ModulePermissions
from school_permissions.document.restrictions import RestrictionSet
from school_permissions.document.special_config import SpecialConfig


class PermissionDocument(BaseModel):
    """Module permissions, restrictions and special configuration of a role.

    Attributes
    ----------
    modules:
        One record per functional module (``modulos`` on the wire).
    restrictions:
        Schedule, network, device and scoping restrictions
        (``restricciones``).
    special_config:
        Miscellaneous flags and limits (``configuracion_especial``).
    """

    model_config = _WIRE_MODEL_CONFIG

    modules: ModulePermissions = Field(default_factory=ModulePermissions, alias="modulos")
    restrictions: RestrictionSet = Field(default_factory=RestrictionSet, alias="restricciones")
    special_config: SpecialConfig = Field(
        default_factory=SpecialConfig, alias="configuracion_especial"
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_section_is_default(cls, value: object) -> object:
        return {} if value is None else value

    # ------------------------------------------------------------------
    # Copy-on-write updates
    # ------------------------------------------------------------------

    def with_grant(self, module: str, action: str, allowed: bool = True) -> PermissionDocument:
        """Return a copy of this document with one action flag set.

        Parameters
        ----------
        module:
            Module wire name (e.g. ``"calificaciones"``), case-insensitive.
        action:
            Action wire name within the module (e.g. ``"publicar"``).
        allowed:
            New value of the flag.

        Raises
        ------
        UnknownPermissionError
            If the module or the action is not part of the registry.
        """
        from school_permissions.policy.registry import resolve

        module_attr, action_attr = resolve(module, action)
        record = getattr(self.modules, module_attr)
        modules = self.modules.model_copy(
            update={module_attr: record.model_copy(update={action_attr: bool(allowed)})}
        )
        return self.model_copy(update={"modules": modules})

    def with_restrictions(self, restrictions: RestrictionSet) -> PermissionDocument:
        """Return a copy of this document with a replaced restriction set."""
        return self.model_copy(update={"restrictions": restrictions})

    def with_special_config(self, special_config: SpecialConfig) -> PermissionDocument:
        """Return a copy of this document with a replaced special configuration."""
        return self.model_copy(update={"special_config": special_config})

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-compatible dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> PermissionDocument:
        """Deserialise from a dict using wire names or attribute names."""
        return cls.model_validate(data)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> PermissionDocument:
        data: dict[str, object] = json.loads(json_str) or {}
        return cls.from_dict(data)

    def to_yaml(self) -> str:
        return yaml.dump(
            self.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> PermissionDocument:
        data: dict[str, object] = yaml.safe_load(yaml_str) or {}
        return cls.from_dict(data)
