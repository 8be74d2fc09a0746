"""Tests for DocumentLoader."""
from __future__ import annotations

import json
import pathlib

import pytest

from school_permissions.document.loader import DocumentConfigError, DocumentLoader
from school_permissions.document.schema import PermissionDocument


_VALID_DOCUMENT: dict[str, object] = {
    "modulos": {"asistencia": {"ver": True, "registrar": True}},
    "restricciones": {"ip_permitidas": ["10.0.0.7"]},
}


@pytest.fixture()
def loader() -> DocumentLoader:
    return DocumentLoader()


@pytest.fixture()
def strict_loader() -> DocumentLoader:
    return DocumentLoader(strict=True)


# ---------------------------------------------------------------------------
# load_from_dict
# ---------------------------------------------------------------------------


class TestDocumentLoaderFromDict:
    def test_returns_permission_document(self, loader: DocumentLoader) -> None:
        document = loader.load_from_dict(_VALID_DOCUMENT)
        assert isinstance(document, PermissionDocument)
        assert document.modules.attendance.record is True

    def test_non_mapping_raises(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="mapping"):
            loader.load_from_dict(["modulos"])

    def test_invalid_value_raises(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="Invalid permission document"):
            loader.load_from_dict({"configuracion_especial": {"limite_descarga_archivos": 5000}})

    def test_unknown_top_key_ignored_when_lenient(self, loader: DocumentLoader) -> None:
        document = loader.load_from_dict({**_VALID_DOCUMENT, "version": 2})
        assert document.modules.attendance.view is True

    def test_unknown_top_key_rejected_when_strict(self, strict_loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="Unknown top-level keys"):
            strict_loader.load_from_dict({**_VALID_DOCUMENT, "version": 2})

    def test_strict_accepts_attribute_names(self, strict_loader: DocumentLoader) -> None:
        document = strict_loader.load_from_dict({"modules": {"library": {"view": True}}})
        assert document.modules.library.view is True

    def test_error_carries_config_path(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError) as exc_info:
            loader.load_from_dict("nope", config_path="roles/x.json")
        assert exc_info.value.config_path == "roles/x.json"
        assert "[roles/x.json]" in str(exc_info.value)

    def test_error_is_value_error(self) -> None:
        assert issubclass(DocumentConfigError, ValueError)


# ---------------------------------------------------------------------------
# load_from_string
# ---------------------------------------------------------------------------


class TestDocumentLoaderFromString:
    def test_json_string(self, loader: DocumentLoader) -> None:
        document = loader.load_from_string(json.dumps(_VALID_DOCUMENT))
        assert document.restrictions.allowed_ips == ("10.0.0.7",)

    def test_yaml_string(self, loader: DocumentLoader) -> None:
        text = "modulos:\n  biblioteca:\n    gestionar_prestamos: true\n"
        document = loader.load_from_string(text, fmt="yaml")
        assert document.modules.library.manage_loans is True

    def test_blank_json_is_default(self, loader: DocumentLoader) -> None:
        assert loader.load_from_string("  ") == PermissionDocument()

    def test_malformed_json_raises(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="Failed to parse JSON"):
            loader.load_from_string("{not json")

    def test_malformed_yaml_raises(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="Failed to parse YAML"):
            loader.load_from_string("modulos: [unclosed", fmt="yaml")

    def test_unsupported_format_raises(self, loader: DocumentLoader) -> None:
        with pytest.raises(DocumentConfigError, match="Unsupported"):
            loader.load_from_string("{}", fmt="toml")


# ---------------------------------------------------------------------------
# load (files)
# ---------------------------------------------------------------------------


class TestDocumentLoaderFromFile:
    def test_load_json_file(self, loader: DocumentLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "profesor.json"
        path.write_text(json.dumps(_VALID_DOCUMENT), encoding="utf-8")
        document = loader.load(path)
        assert document.modules.attendance.record is True

    def test_load_yaml_file(self, loader: DocumentLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "profesor.yml"
        path.write_text("modulos:\n  asistencia:\n    justificar: true\n", encoding="utf-8")
        document = loader.load(str(path))
        assert document.modules.attendance.justify is True

    def test_missing_file_raises(self, loader: DocumentLoader, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.json")

    def test_invalid_file_reports_path(self, loader: DocumentLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DocumentConfigError) as exc_info:
            loader.load(path)
        assert exc_info.value.config_path == str(path)
