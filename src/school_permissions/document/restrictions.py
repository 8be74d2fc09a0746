"""Cross-cutting restrictions attached to a role.

The scoping flags (``only_own_students`` and friends) are advisory: they are
consumed by the query-scoping layer, not evaluated here.  The access schedule
and the IP/device/location allowlists are evaluated by
:mod:`school_permissions.policy.evaluator`.
"""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from school_permissions.document.modules import _WIRE_MODEL_CONFIG

DEFAULT_WORKING_DAYS: tuple[str, ...] = ("lunes", "martes", "miercoles", "jueves", "viernes")


class AccessSchedule(BaseModel):
    """Time-of-day window, weekday allowlist and blocked dates.

    Attributes
    ----------
    active:
        When ``False`` the schedule never restricts access.
    start_time, end_time:
        Inclusive ``HH:MM`` bounds.  Kept as raw strings so that a malformed
        value still loads and is handled by the evaluator's fallback.
    days_of_week:
        Weekday names (Spanish or English, any case).
    date_exceptions:
        Calendar dates on which access is denied outright.  ISO datetimes are
        accepted on input and truncated to their date.
    """

    model_config = _WIRE_MODEL_CONFIG

    active: bool = Field(default=False, alias="activo")
    start_time: str = Field(default="06:00", alias="hora_inicio")
    end_time: str = Field(default="18:00", alias="hora_fin")
    days_of_week: tuple[str, ...] = Field(default=DEFAULT_WORKING_DAYS, alias="dias_semana")
    date_exceptions: tuple[date, ...] = Field(default=(), alias="excepciones_fechas")

    @field_validator("date_exceptions", mode="before")
    @classmethod
    def truncate_datetimes(cls, value: object) -> object:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        dates: list[object] = []
        for item in value:
            if isinstance(item, datetime):
                dates.append(item.date())
            elif isinstance(item, str) and len(item) > 10:
                # "2026-03-02T00:00:00" as written by the persistence layer
                dates.append(item[:10])
            else:
                dates.append(item)
        return dates


class RestrictionSet(BaseModel):
    """Restrictions and scoping flags for a role."""

    model_config = _WIRE_MODEL_CONFIG

    only_own_students: bool = Field(default=True, alias="solo_sus_estudiantes")
    only_own_subjects: bool = Field(default=True, alias="solo_sus_materias")
    only_own_group: bool = Field(default=False, alias="solo_su_grupo")
    only_same_school: bool = Field(default=True, alias="solo_su_colegio")
    access_schedule: AccessSchedule = Field(default_factory=AccessSchedule, alias="horario_acceso")
    allowed_ips: tuple[str, ...] = Field(default=(), alias="ip_permitidas")
    # Reserved; never combined with access_schedule.
    only_during_work_hours: bool = Field(default=False, alias="solo_horario_laboral")
    allowed_devices: tuple[str, ...] = Field(default=(), alias="dispositivos_permitidos")
    allowed_locations: tuple[str, ...] = Field(default=(), alias="ubicaciones_permitidas")

    @field_validator("access_schedule", mode="before")
    @classmethod
    def null_schedule_is_inactive(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("allowed_ips", "allowed_devices", "allowed_locations", mode="before")
    @classmethod
    def null_list_is_empty(cls, value: object) -> object:
        return () if value is None else value
