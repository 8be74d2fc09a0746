"""Loader for persisted permission documents.

Role permission documents are stored as JSON next to the role record.
``DocumentLoader`` reads them from files (JSON, or YAML for hand-written
fixtures), strings or already-parsed dicts, and turns every structural or
validation problem into a :class:`DocumentConfigError`.

Document shape
--------------
::

    {
      "modulos": {
        "estudiantes": {"ver": true, "crear": false},
        "calificaciones": {"ver": true, "publicar": true}
      },
      "restricciones": {
        "horario_acceso": {
          "activo": true,
          "hora_inicio": "07:00",
          "hora_fin": "17:00",
          "dias_semana": ["lunes", "martes", "miercoles", "jueves", "viernes"],
          "excepciones_fechas": ["2026-12-25"]
        },
        "ip_permitidas": ["10.0.0.7"]
      },
      "configuracion_especial": {"nivel_auditoria": "MEDIO"}
    }

Example
-------
::

    loader = DocumentLoader()
    document = loader.load("roles/profesor.json")
    assert document.modules.grades.view
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from school_permissions.document.schema import PermissionDocument

logger = logging.getLogger(__name__)

_YAML_SUFFIXES: frozenset[str] = frozenset([".yaml", ".yml"])


class DocumentConfigError(ValueError):
    """Raised when a permission document is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path of the document that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class DocumentLoader:
    """Builds :class:`PermissionDocument` instances from persisted data.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are an error.  Default
        ``False`` (unknown keys are ignored, as newer writers may add them).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(
        [
            "modulos",
            "restricciones",
            "configuracion_especial",
            "modules",
            "restrictions",
            "special_config",
        ]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, document_path: str | Path) -> PermissionDocument:
        """Load a document from a JSON (or ``.yaml``/``.yml``) file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        DocumentConfigError
            If the file cannot be parsed or fails validation.
        """
        document_path = Path(document_path)
        if not document_path.exists():
            raise FileNotFoundError(f"Permission document not found: {document_path}")

        text = document_path.read_text(encoding="utf-8")
        fmt = "yaml" if document_path.suffix.lower() in _YAML_SUFFIXES else "json"
        return self.load_from_string(text, fmt=fmt, config_path=str(document_path))

    def load_from_string(
        self,
        text: str,
        fmt: str = "json",
        config_path: str | None = None,
    ) -> PermissionDocument:
        """Load a document from a JSON or YAML string.

        Parameters
        ----------
        text:
            Serialised document.
        fmt:
            ``"json"`` (default) or ``"yaml"``.
        config_path:
            Optional source identifier used in error messages.
        """
        match fmt:
            case "json":
                try:
                    raw = json.loads(text) if text.strip() else {}
                except json.JSONDecodeError as exc:
                    raise DocumentConfigError(f"Failed to parse JSON: {exc}", config_path) from exc
            case "yaml":
                try:
                    raw = yaml.safe_load(text) or {}
                except yaml.YAMLError as exc:
                    raise DocumentConfigError(f"Failed to parse YAML: {exc}", config_path) from exc
            case _:
                raise DocumentConfigError(f"Unsupported document format {fmt!r}.", config_path)
        return self.load_from_dict(raw, config_path=config_path)

    def load_from_dict(
        self,
        data: object,
        config_path: str | None = None,
    ) -> PermissionDocument:
        """Validate an already-parsed document and build the model."""
        self._validate_structure(data, config_path)
        try:
            document = PermissionDocument.model_validate(data)
        except ValidationError as exc:
            raise DocumentConfigError(
                f"Invalid permission document: {exc.error_count()} error(s)\n{exc}",
                config_path,
            ) from exc

        logger.info("Loaded permission document from %s", config_path or "<dict>")
        return document

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate_structure(self, data: object, config_path: str | None) -> None:
        if not isinstance(data, dict):
            raise DocumentConfigError(
                f"Permission document must be a mapping; got {type(data).__name__}.",
                config_path,
            )

        if self._strict:
            unknown_keys = set(data.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise DocumentConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )
