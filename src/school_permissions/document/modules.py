"""Per-module permission records for a role permission document.

Each functional module of the school system carries its own record of
boolean action flags.  Six modules share the CRUD base shape
(``ver``/``crear``/``editar``/``eliminar``/``exportar``) and add their own
extras; the remaining four are flat sets of independently named flags.

Every flag defaults to ``False``, so a freshly constructed record denies
everything.  Python attributes use English names; the wire names used by
the persisted JSON are the field aliases.

Example
-------
>>> record = GradesPermissions.model_validate({"ver": True, "publicar": True})
>>> record.view, record.publish, record.edit
(True, True, False)
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_WIRE_MODEL_CONFIG = {
    "frozen": True,
    "populate_by_name": True,
    "extra": "ignore",
}


class PermissionRecord(BaseModel):
    """Base for every module record: frozen, alias-aware, null means denied."""

    model_config = _WIRE_MODEL_CONFIG

    @field_validator("*", mode="before")
    @classmethod
    def null_is_denied(cls, value: object) -> object:
        return False if value is None else value


# ---------------------------------------------------------------------------
# CRUD-shaped modules
# ---------------------------------------------------------------------------


class CrudPermissions(PermissionRecord):
    """The five base actions shared by CRUD-shaped modules."""

    view: bool = Field(default=False, alias="ver")
    create: bool = Field(default=False, alias="crear")
    edit: bool = Field(default=False, alias="editar")
    delete: bool = Field(default=False, alias="eliminar")
    export: bool = Field(default=False, alias="exportar")


class StudentsPermissions(CrudPermissions):
    """Student management (``estudiantes``)."""

    enroll_students: bool = Field(default=False, alias="matricular_estudiantes")
    change_group: bool = Field(default=False, alias="cambiar_grupo")
    view_family_information: bool = Field(default=False, alias="ver_informacion_familiar")
    edit_personal_data: bool = Field(default=False, alias="editar_datos_personales")
    generate_certificates: bool = Field(default=False, alias="generar_certificados")
    view_academic_history: bool = Field(default=False, alias="ver_historial_academico")
    manage_documents: bool = Field(default=False, alias="gestionar_documentos")


class TeachersPermissions(CrudPermissions):
    """Teacher management (``profesores``)."""

    assign_subjects: bool = Field(default=False, alias="asignar_materias")
    assign_groups: bool = Field(default=False, alias="asignar_grupos")
    view_schedules: bool = Field(default=False, alias="ver_horarios")
    edit_schedules: bool = Field(default=False, alias="editar_horarios")
    evaluate_performance: bool = Field(default=False, alias="evaluar_desempeño")
    manage_permissions: bool = Field(default=False, alias="gestionar_permisos")


class GradesPermissions(CrudPermissions):
    """Grades (``calificaciones``)."""

    publish: bool = Field(default=False, alias="publicar")
    view_other_subjects: bool = Field(default=False, alias="ver_otras_materias")
    edit_after_publication: bool = Field(default=False, alias="editar_despues_publicacion")
    create_evaluation_types: bool = Field(default=False, alias="crear_tipos_evaluacion")
    configure_scales: bool = Field(default=False, alias="configurar_escalas")
    generate_report_cards: bool = Field(default=False, alias="generar_boletines")
    view_statistics: bool = Field(default=False, alias="ver_estadisticas")
    make_up_assessments: bool = Field(default=False, alias="recuperaciones")


class AttendancePermissions(CrudPermissions):
    """Attendance (``asistencia``)."""

    record: bool = Field(default=False, alias="registrar")
    justify: bool = Field(default=False, alias="justificar")
    edit_records: bool = Field(default=False, alias="editar_registros")
    view_statistics: bool = Field(default=False, alias="ver_estadisticas")
    notify_absences: bool = Field(default=False, alias="notificar_ausencias")
    generate_reports: bool = Field(default=False, alias="generar_reportes")
    configure_statuses: bool = Field(default=False, alias="configurar_estados")


class DisciplinePermissions(CrudPermissions):
    """Discipline (``disciplina``)."""

    create_observations: bool = Field(default=False, alias="crear_observaciones")
    edit_observations: bool = Field(default=False, alias="editar_observaciones")
    approve_sanctions: bool = Field(default=False, alias="aprobar_sanciones")
    follow_ups: bool = Field(default=False, alias="seguimientos")
    coexistence_committee: bool = Field(default=False, alias="comite_convivencia")


class LibraryPermissions(CrudPermissions):
    """Library (``biblioteca``)."""

    manage_loans: bool = Field(default=False, alias="gestionar_prestamos")
    catalog_books: bool = Field(default=False, alias="catalogar_libros")
    reserve_resources: bool = Field(default=False, alias="reservar_recursos")
    late_fees: bool = Field(default=False, alias="multas_retrasos")


# ---------------------------------------------------------------------------
# Non-CRUD modules
# ---------------------------------------------------------------------------


class FinancePermissions(PermissionRecord):
    """Finance (``financiero``)."""

    view_invoices: bool = Field(default=False, alias="ver_facturas")
    create_invoices: bool = Field(default=False, alias="crear_facturas")
    edit_invoices: bool = Field(default=False, alias="editar_facturas")
    void_invoices: bool = Field(default=False, alias="anular_facturas")
    receive_payments: bool = Field(default=False, alias="recibir_pagos")
    apply_discounts: bool = Field(default=False, alias="aplicar_descuentos")
    generate_receipts: bool = Field(default=False, alias="generar_recibos")
    view_receivables: bool = Field(default=False, alias="ver_cartera")
    financial_reports: bool = Field(default=False, alias="reportes_financieros")
    configure_concepts: bool = Field(default=False, alias="configurar_conceptos")
    manage_scholarships: bool = Field(default=False, alias="gestionar_becas")
    account_statements: bool = Field(default=False, alias="estados_cuenta")


class ReportsPermissions(PermissionRecord):
    """Reports (``reportes``)."""

    report_cards: bool = Field(default=False, alias="boletines")
    certificates: bool = Field(default=False, alias="certificados")
    student_lists: bool = Field(default=False, alias="listas_estudiantes")
    academic_reports: bool = Field(default=False, alias="reportes_academicos")
    financial_reports: bool = Field(default=False, alias="reportes_financieros")
    disciplinary_reports: bool = Field(default=False, alias="reportes_disciplinarios")
    attendance_reports: bool = Field(default=False, alias="reportes_asistencia")
    general_statistics: bool = Field(default=False, alias="estadisticas_generales")
    export_data: bool = Field(default=False, alias="exportar_datos")
    customize_templates: bool = Field(default=False, alias="personalizar_plantillas")
    government_reports: bool = Field(default=False, alias="reportes_gobierno")


class CommunicationsPermissions(PermissionRecord):
    """Communications (``comunicaciones``)."""

    send_notifications: bool = Field(default=False, alias="enviar_notificaciones")
    guardian_messages: bool = Field(default=False, alias="mensajes_acudientes")
    bulk_messages: bool = Field(default=False, alias="mensajes_masivos")
    create_circulars: bool = Field(default=False, alias="crear_circulares")
    configure_templates: bool = Field(default=False, alias="configurar_plantillas")
    message_history: bool = Field(default=False, alias="historial_mensajes")
    automatic_notifications: bool = Field(default=False, alias="notificaciones_automaticas")
    emergency_alerts: bool = Field(default=False, alias="emergency_alerts")


class AdministrationPermissions(PermissionRecord):
    """System administration (``administracion``)."""

    manage_users: bool = Field(default=False, alias="gestionar_usuarios")
    configure_school: bool = Field(default=False, alias="configurar_colegio")
    manage_roles: bool = Field(default=False, alias="gestionar_roles")
    audit_logs: bool = Field(default=False, alias="logs_auditoria")
    backup_restore: bool = Field(default=False, alias="backup_restaurar")
    configure_periods: bool = Field(default=False, alias="configurar_periodos")
    manage_grade_levels: bool = Field(default=False, alias="gestionar_grados")
    configure_schedules: bool = Field(default=False, alias="configurar_horarios")
    integrations: bool = Field(default=False, alias="integraciones")
    advanced_configuration: bool = Field(default=False, alias="configuracion_avanzada")


# ---------------------------------------------------------------------------
# Module container
# ---------------------------------------------------------------------------


class ModulePermissions(BaseModel):
    """The fixed set of ten module records.

    A key that is absent (or ``null``) on the wire yields a default record,
    so every module is always present and denies everything unless granted.
    """

    model_config = _WIRE_MODEL_CONFIG

    students: StudentsPermissions = Field(default_factory=StudentsPermissions, alias="estudiantes")
    teachers: TeachersPermissions = Field(default_factory=TeachersPermissions, alias="profesores")
    grades: GradesPermissions = Field(default_factory=GradesPermissions, alias="calificaciones")
    attendance: AttendancePermissions = Field(default_factory=AttendancePermissions, alias="asistencia")
    finance: FinancePermissions = Field(default_factory=FinancePermissions, alias="financiero")
    reports: ReportsPermissions = Field(default_factory=ReportsPermissions, alias="reportes")
    communications: CommunicationsPermissions = Field(
        default_factory=CommunicationsPermissions, alias="comunicaciones"
    )
    administration: AdministrationPermissions = Field(
        default_factory=AdministrationPermissions, alias="administracion"
    )
    discipline: DisciplinePermissions = Field(default_factory=DisciplinePermissions, alias="disciplina")
    library: LibraryPermissions = Field(default_factory=LibraryPermissions, alias="biblioteca")

    @field_validator("*", mode="before")
    @classmethod
    def null_module_is_empty(cls, value: object) -> object:
        return {} if value is None else value
