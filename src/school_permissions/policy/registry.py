"""Module registry — the fixed module/action vocabulary of the engine.

The registry is built once, at import time, from the wire aliases of the
module permission models.  It maps every ``(module, action)`` pair to an
accessor that reads the corresponding flag from a
:class:`~school_permissions.document.schema.PermissionDocument`, so the
vocabulary of each module is statically enumerable and no string branching
is needed at evaluation time.

Names are normalised with ``strip().lower()`` before lookup.

Example
-------
>>> actions_for("Biblioteca")[:5]
('ver', 'crear', 'editar', 'eliminar', 'exportar')
>>> is_known("calificaciones", "PUBLICAR")
True
>>> lookup("estudiantes", "volar") is None
True
"""
from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING, Callable

from school_permissions.document.modules import (
    CrudPermissions,
    ModulePermissions,
    PermissionRecord,
)

if TYPE_CHECKING:
    from school_permissions.document.schema import PermissionDocument

Accessor = Callable[["PermissionDocument"], bool]


class UnknownPermissionError(LookupError):
    """Raised by update APIs when a module or action name is not registered.

    Evaluation never raises this; unknown names simply resolve to deny.
    """

    def __init__(self, module: str, action: str | None = None) -> None:
        self.module = module
        self.action = action
        if action is None:
            message = f"Unknown module {module!r}. Known modules: {list(MODULE_NAMES)}."
        else:
            message = (
                f"Unknown action {action!r} for module {module!r}. "
                f"Known actions: {list(actions_for(module))}."
            )
        super().__init__(message)


@dataclass(frozen=True)
class ModuleSpec:
    """Registry entry for one module.

    Attributes
    ----------
    name:
        Wire name of the module (e.g. ``"calificaciones"``).
    attribute:
        Attribute name on :class:`ModulePermissions` (e.g. ``"grades"``).
    record_type:
        The pydantic model of the module's permission record.
    actions:
        Action wire name → attribute name on ``record_type``, in field order.
    """

    name: str
    attribute: str
    record_type: type[PermissionRecord]
    actions: dict[str, str]

    @property
    def is_crud(self) -> bool:
        return issubclass(self.record_type, CrudPermissions)


def _normalise(name: object) -> str:
    return name.strip().lower() if isinstance(name, str) else ""


def _build_registry() -> dict[str, ModuleSpec]:
    registry: dict[str, ModuleSpec] = {}
    for attribute, module_field in ModulePermissions.model_fields.items():
        record_type = module_field.annotation
        if not (isinstance(record_type, type) and issubclass(record_type, PermissionRecord)):
            raise TypeError(f"Module field {attribute!r} is not a PermissionRecord.")
        actions = {
            (action_field.alias or action_attr): action_attr
            for action_attr, action_field in record_type.model_fields.items()
        }
        name = module_field.alias or attribute
        registry[name] = ModuleSpec(
            name=name,
            attribute=attribute,
            record_type=record_type,
            actions=actions,
        )
    return registry


_REGISTRY: dict[str, ModuleSpec] = _build_registry()

_ACCESSORS: dict[tuple[str, str], Accessor] = {
    (spec.name, action): attrgetter(f"modules.{spec.attribute}.{action_attr}")
    for spec in _REGISTRY.values()
    for action, action_attr in spec.actions.items()
}

MODULE_NAMES: tuple[str, ...] = tuple(_REGISTRY)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def module_names() -> tuple[str, ...]:
    """Return the wire names of all registered modules, in document order."""
    return MODULE_NAMES


def get_module(module: str) -> ModuleSpec | None:
    """Return the :class:`ModuleSpec` for ``module``, or ``None`` if unknown."""
    return _REGISTRY.get(_normalise(module))


def actions_for(module: str) -> tuple[str, ...]:
    """Return the action vocabulary of ``module`` (empty for unknown modules)."""
    spec = get_module(module)
    return tuple(spec.actions) if spec is not None else ()


def is_known(module: str, action: str) -> bool:
    """Return True if ``(module, action)`` is a registered pair."""
    return (_normalise(module), _normalise(action)) in _ACCESSORS


def lookup(module: str, action: str) -> Accessor | None:
    """Return the flag accessor for ``(module, action)``, or ``None``."""
    return _ACCESSORS.get((_normalise(module), _normalise(action)))


def resolve(module: str, action: str) -> tuple[str, str]:
    """Return the ``(module_attribute, action_attribute)`` pair for a wire pair.

    Raises
    ------
    UnknownPermissionError
        If either name is not registered.
    """
    spec = get_module(module)
    if spec is None:
        raise UnknownPermissionError(str(module))
    action_attr = spec.actions.get(_normalise(action))
    if action_attr is None:
        raise UnknownPermissionError(spec.name, str(action))
    return spec.attribute, action_attr


def iter_pairs() -> list[tuple[str, str]]:
    """Return every registered ``(module, action)`` pair."""
    return list(_ACCESSORS)
