"""Special configuration flags of a role (``configuracion_especial``)."""
from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, field_validator

from school_permissions.document.modules import _WIRE_MODEL_CONFIG

CustomValue = Union[str, int, float, bool, None]


class AuditLevel(str, Enum):
    """How much of a role's activity is recorded."""

    BASIC = "BASICO"
    MEDIUM = "MEDIO"
    FULL = "COMPLETO"


class SpecialConfig(BaseModel):
    """Independent flags and limits that tune a role's behaviour.

    ``student_query_limit`` and ``file_download_limit`` are range-checked
    here, at construction time; enforcement of the limits belongs to the
    callers that run the queries and serve the downloads.

    ``custom_settings`` is opaque passthrough data and never influences a
    decision of the policy engine.
    """

    model_config = _WIRE_MODEL_CONFIG

    can_view_final_grades: bool = Field(default=True, alias="puede_ver_notas_finales")
    can_edit_after_publication: bool = Field(default=False, alias="puede_editar_despues_publicacion")
    requires_change_authorization: bool = Field(default=True, alias="requiere_autorizacion_cambios")
    notify_important_changes: bool = Field(default=True, alias="notificar_cambios_importantes")
    student_query_limit: int = Field(default=100, ge=0, le=10000, alias="limite_estudiantes_consulta")
    multiple_sessions: bool = Field(default=False, alias="sesion_multiple")
    offline_access: bool = Field(default=False, alias="acceso_modo_offline")
    audit_level: AuditLevel = Field(default=AuditLevel.BASIC, alias="nivel_auditoria")
    can_delegate_permissions: bool = Field(default=False, alias="puede_delegar_permisos")
    historical_data_access: bool = Field(default=True, alias="acceso_datos_historicos")
    file_download_limit: int = Field(default=10, ge=0, le=1000, alias="limite_descarga_archivos")
    can_run_heavy_reports: bool = Field(default=False, alias="puede_ejecutar_reportes_pesados")
    real_time_notifications: bool = Field(default=True, alias="notificaciones_tiempo_real")
    custom_settings: dict[str, CustomValue] = Field(
        default_factory=dict, alias="configuracion_personalizada"
    )
    access_all_schools: bool = Field(default=False, alias="acceso_todos_colegios")

    @field_validator("audit_level", mode="before")
    @classmethod
    def normalise_audit_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("custom_settings", mode="before")
    @classmethod
    def null_settings_is_empty(cls, value: object) -> object:
        return {} if value is None else value
