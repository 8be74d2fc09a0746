"""Built-in permission document presets for common school roles.

Five presets are bundled: a global administrator with every action
granted, and starting points for coordinators, teachers, secretaries and
librarians.  Presets are starting points, not policy: copy one and adjust it
to the school.

Example
-------
>>> from school_permissions.templates.role_templates import get_template, list_templates
>>> list_templates()
['admin_global', 'bibliotecario', 'coordinador', 'profesor', 'secretaria']
>>> get_template("profesor").modules.attendance.record
True
"""
from __future__ import annotations

from pathlib import Path

import yaml

from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.registry import iter_pairs

# ---------------------------------------------------------------------------
# Template definitions
# ---------------------------------------------------------------------------

_COORDINADOR = """\
# Academic coordinator
# ---------------------
# Oversees groups, grades and discipline across the school.
modulos:
  estudiantes:
    ver: true
    editar: true
    exportar: true
    cambiar_grupo: true
    ver_informacion_familiar: true
    ver_historial_academico: true
  profesores:
    ver: true
    asignar_grupos: true
    ver_horarios: true
    editar_horarios: true
  calificaciones:
    ver: true
    publicar: true
    ver_otras_materias: true
    generar_boletines: true
    ver_estadisticas: true
  asistencia:
    ver: true
    justificar: true
    ver_estadisticas: true
    generar_reportes: true
  disciplina:
    ver: true
    crear: true
    editar: true
    crear_observaciones: true
    editar_observaciones: true
    aprobar_sanciones: true
    seguimientos: true
    comite_convivencia: true
  reportes:
    boletines: true
    listas_estudiantes: true
    reportes_academicos: true
    reportes_disciplinarios: true
    reportes_asistencia: true
  comunicaciones:
    enviar_notificaciones: true
    mensajes_acudientes: true
    crear_circulares: true
restricciones:
  solo_sus_estudiantes: false
  solo_sus_materias: false
configuracion_especial:
  limite_estudiantes_consulta: 1000
  nivel_auditoria: MEDIO
  puede_ejecutar_reportes_pesados: true
"""

_PROFESOR = """\
# Classroom teacher
# ------------------
# Grades and attendance for the teacher's own subjects and students,
# on school days during school hours.
modulos:
  estudiantes:
    ver: true
  calificaciones:
    ver: true
    crear: true
    editar: true
  asistencia:
    ver: true
    crear: true
    registrar: true
  disciplina:
    ver: true
    crear_observaciones: true
  comunicaciones:
    mensajes_acudientes: true
restricciones:
  horario_acceso:
    activo: true
    hora_inicio: "06:00"
    hora_fin: "19:00"
    dias_semana: [lunes, martes, miercoles, jueves, viernes]
"""

_SECRETARIA = """\
# School secretary
# -----------------
# Enrolment, certificates and front-desk billing.
modulos:
  estudiantes:
    ver: true
    crear: true
    editar: true
    matricular_estudiantes: true
    generar_certificados: true
    gestionar_documentos: true
  financiero:
    ver_facturas: true
    crear_facturas: true
    recibir_pagos: true
    generar_recibos: true
    estados_cuenta: true
  reportes:
    certificados: true
    listas_estudiantes: true
restricciones:
  solo_sus_estudiantes: false
  horario_acceso:
    activo: true
    hora_inicio: "07:00"
    hora_fin: "17:00"
configuracion_especial:
  nivel_auditoria: COMPLETO
"""

_BIBLIOTECARIO = """\
# Librarian
# ----------
modulos:
  estudiantes:
    ver: true
  biblioteca:
    ver: true
    crear: true
    editar: true
    eliminar: true
    exportar: true
    gestionar_prestamos: true
    catalogar_libros: true
    reservar_recursos: true
    multas_retrasos: true
restricciones:
  solo_sus_estudiantes: false
"""

_YAML_TEMPLATES: dict[str, str] = {
    "bibliotecario": _BIBLIOTECARIO,
    "coordinador": _COORDINADOR,
    "profesor": _PROFESOR,
    "secretaria": _SECRETARIA,
}


def _admin_global() -> PermissionDocument:
    document = PermissionDocument.from_dict(
        {
            "restricciones": {
                "solo_sus_estudiantes": False,
                "solo_sus_materias": False,
                "solo_su_colegio": False,
            },
            "configuracion_especial": {
                "puede_editar_despues_publicacion": True,
                "requiere_autorizacion_cambios": False,
                "limite_estudiantes_consulta": 10000,
                "sesion_multiple": True,
                "nivel_auditoria": "COMPLETO",
                "puede_delegar_permisos": True,
                "limite_descarga_archivos": 1000,
                "puede_ejecutar_reportes_pesados": True,
                "acceso_todos_colegios": True,
            },
        }
    )
    for module, action in iter_pairs():
        document = document.with_grant(module, action)
    return document


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_templates() -> list[str]:
    """Return the sorted names of all bundled presets."""
    return sorted([*_YAML_TEMPLATES, "admin_global"])


def get_template(name: str) -> PermissionDocument:
    """Return the permission document of preset ``name``.

    Raises
    ------
    KeyError
        If ``name`` is not a bundled preset.
    """
    if name == "admin_global":
        return _admin_global()
    if name not in _YAML_TEMPLATES:
        raise KeyError(
            f"Template {name!r} not found. Available: {list_templates()}"
        )
    return PermissionDocument.from_yaml(_YAML_TEMPLATES[name])


def write_template(name: str, output_path: str | Path) -> Path:
    """Write preset ``name`` to ``output_path``.

    The file is JSON unless the suffix is ``.yaml`` or ``.yml``.  Parent
    directories are created as needed.

    Returns
    -------
    Path
        The resolved output path.
    """
    document = get_template(name)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in (".yaml", ".yml"):
        content = yaml.dump(
            document.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True
        )
    else:
        content = document.to_json()
    output_path.write_text(content + ("" if content.endswith("\n") else "\n"), encoding="utf-8")
    return output_path.resolve()
