"""Tests for the permission, schedule and allowlist checks and PolicyEvaluator."""
from __future__ import annotations

from datetime import date, datetime, time

import pytest

from school_permissions.document.restrictions import AccessSchedule, RestrictionSet
from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.evaluator import (
    AccessDecision,
    AccessRequest,
    PolicyEvaluator,
    granted_actions,
    has_permission,
    is_device_allowed,
    is_ip_allowed,
    is_location_allowed,
    is_within_access_window,
    parse_time_of_day,
    weekday_index,
)
from school_permissions.policy.registry import iter_pairs

# 2024-03-04 is a Monday.
_MONDAY = date(2024, 3, 4)


def _at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute))


def _restrictions(**schedule: object) -> RestrictionSet:
    fields: dict[str, object] = {
        "activo": True,
        "hora_inicio": "08:00",
        "hora_fin": "17:00",
        "dias_semana": ["lunes"],
    }
    fields.update(schedule)
    return RestrictionSet.model_validate({"horario_acceso": fields})


@pytest.fixture()
def viewer() -> PermissionDocument:
    return PermissionDocument.from_dict({"modulos": {"estudiantes": {"ver": True}}})


# ---------------------------------------------------------------------------
# has_permission
# ---------------------------------------------------------------------------


class TestHasPermission:
    def test_fresh_document_denies_every_pair(self) -> None:
        document = PermissionDocument()
        for module, action in iter_pairs():
            assert has_permission(document, module, action) is False

    def test_granted_pair_allowed(self, viewer: PermissionDocument) -> None:
        assert has_permission(viewer, "estudiantes", "ver") is True
        assert has_permission(viewer, "estudiantes", "crear") is False

    def test_case_insensitive(self, viewer: PermissionDocument) -> None:
        assert has_permission(viewer, "Estudiantes", "VER") == has_permission(
            viewer, "estudiantes", "ver"
        )
        assert has_permission(viewer, "  ESTUDIANTES ", "Ver") is True

    def test_unknown_module_denied(self, viewer: PermissionDocument) -> None:
        assert has_permission(viewer, "unknown_module", "ver") is False

    def test_unknown_action_denied(self, viewer: PermissionDocument) -> None:
        assert has_permission(viewer, "estudiantes", "unknown_action") is False

    def test_action_from_other_module_denied(self) -> None:
        document = PermissionDocument().with_grant("calificaciones", "publicar")
        assert has_permission(document, "estudiantes", "publicar") is False

    def test_non_string_names_denied(self, viewer: PermissionDocument) -> None:
        assert has_permission(viewer, None, "ver") is False  # type: ignore[arg-type]
        assert has_permission(viewer, "estudiantes", 3) is False  # type: ignore[arg-type]

    def test_non_document_denied(self) -> None:
        assert has_permission({"modulos": {}}, "estudiantes", "ver") is False  # type: ignore[arg-type]

    def test_every_pair_grantable(self) -> None:
        for module, action in iter_pairs():
            document = PermissionDocument().with_grant(module, action)
            assert has_permission(document, module, action) is True

    def test_granted_actions(self) -> None:
        document = (
            PermissionDocument()
            .with_grant("estudiantes", "ver")
            .with_grant("biblioteca", "gestionar_prestamos")
        )
        assert granted_actions(document) == {
            "estudiantes": ["ver"],
            "biblioteca": ["gestionar_prestamos"],
        }

    def test_granted_actions_empty(self) -> None:
        assert granted_actions(PermissionDocument()) == {}


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------


class TestParsing:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("08:00", time(8, 0)),
            ("8:05", time(8, 5)),
            ("17:30:15", time(17, 30, 15)),
            (" 06:00 ", time(6, 0)),
        ],
    )
    def test_valid_times(self, text: str, expected: time) -> None:
        assert parse_time_of_day(text) == expected

    @pytest.mark.parametrize("text", ["25:00", "08:60", "8am", "", "0800", None, 800])
    def test_malformed_times(self, text: object) -> None:
        assert parse_time_of_day(text) is None

    @pytest.mark.parametrize(
        "name, expected",
        [("lunes", 0), ("Miércoles", 2), ("miercoles", 2), ("SABADO", 5), ("Sunday", 6)],
    )
    def test_weekday_names(self, name: str, expected: int) -> None:
        assert weekday_index(name) == expected

    def test_unknown_weekday(self) -> None:
        assert weekday_index("feriado") is None


class TestAccessWindow:
    @pytest.mark.parametrize(
        "timestamp",
        [datetime(2024, 3, 9, 0, 0), datetime(2024, 3, 10, 23, 59), _at(_MONDAY, 3)],
    )
    def test_inactive_schedule_always_allows(self, timestamp: datetime) -> None:
        assert is_within_access_window(RestrictionSet(), timestamp) is True

    @pytest.mark.parametrize(
        "hour, minute, expected",
        [(8, 0, True), (17, 0, True), (7, 59, False), (17, 1, False), (12, 30, True)],
    )
    def test_boundaries_inclusive(self, hour: int, minute: int, expected: bool) -> None:
        assert is_within_access_window(_restrictions(), _at(_MONDAY, hour, minute)) is expected

    def test_end_second_past_minute_denied(self) -> None:
        timestamp = datetime.combine(_MONDAY, time(17, 0, 1))
        assert is_within_access_window(_restrictions(), timestamp) is False

    def test_exception_overrides_window(self) -> None:
        restrictions = _restrictions(excepciones_fechas=[_MONDAY.isoformat()])
        assert is_within_access_window(restrictions, _at(_MONDAY, 10)) is False

    def test_exception_on_other_date_ignored(self) -> None:
        restrictions = _restrictions(excepciones_fechas=["2024-03-11"])
        assert is_within_access_window(restrictions, _at(_MONDAY, 10)) is True

    def test_weekday_not_allowed(self) -> None:
        tuesday = date(2024, 3, 5)
        assert is_within_access_window(_restrictions(), _at(tuesday, 10)) is False

    def test_weekday_names_case_insensitive_and_bilingual(self) -> None:
        restrictions = _restrictions(dias_semana=["MONDAY", "Miércoles"])
        assert is_within_access_window(restrictions, _at(_MONDAY, 10)) is True
        assert is_within_access_window(restrictions, _at(date(2024, 3, 6), 10)) is True

    def test_default_days_exclude_weekend(self) -> None:
        restrictions = RestrictionSet(access_schedule=AccessSchedule(active=True))
        assert is_within_access_window(restrictions, _at(_MONDAY, 10)) is True
        assert is_within_access_window(restrictions, datetime(2024, 3, 9, 10)) is False

    def test_malformed_bounds_allow_by_default(self) -> None:
        restrictions = _restrictions(hora_inicio="ocho")
        assert is_within_access_window(restrictions, _at(_MONDAY, 3)) is True

    def test_malformed_bounds_deny_when_configured(self) -> None:
        restrictions = _restrictions(hora_fin="17h")
        assert is_within_access_window(restrictions, _at(_MONDAY, 10), on_malformed="deny") is False

    def test_malformed_bounds_do_not_bypass_weekday(self) -> None:
        restrictions = _restrictions(hora_inicio="ocho")
        assert is_within_access_window(restrictions, datetime(2024, 3, 9, 10)) is False

    def test_reversed_window_denies(self) -> None:
        restrictions = _restrictions(hora_inicio="22:00", hora_fin="06:00")
        assert is_within_access_window(restrictions, _at(_MONDAY, 23)) is False

    def test_non_datetime_denied_when_active(self) -> None:
        assert is_within_access_window(_restrictions(), "2024-03-04T10:00") is False  # type: ignore[arg-type]

    def test_work_hours_flag_is_inert(self) -> None:
        restrictions = RestrictionSet(only_during_work_hours=True)
        assert is_within_access_window(restrictions, datetime(2024, 3, 10, 3)) is True


# ---------------------------------------------------------------------------
# Allowlists
# ---------------------------------------------------------------------------


class TestAllowlists:
    def test_empty_ip_list_allows_any(self) -> None:
        assert is_ip_allowed(RestrictionSet(), "1.2.3.4") is True

    def test_ip_membership(self) -> None:
        restrictions = RestrictionSet(allowed_ips=("9.9.9.9",))
        assert is_ip_allowed(restrictions, "1.2.3.4") is False
        assert is_ip_allowed(restrictions, "9.9.9.9") is True

    def test_no_cidr_expansion(self) -> None:
        restrictions = RestrictionSet(allowed_ips=("10.0.0.0/24",))
        assert is_ip_allowed(restrictions, "10.0.0.7") is False

    def test_missing_ip(self) -> None:
        assert is_ip_allowed(RestrictionSet(), None) is True
        assert is_ip_allowed(RestrictionSet(allowed_ips=("9.9.9.9",)), None) is False

    def test_devices(self) -> None:
        restrictions = RestrictionSet(allowed_devices=("tablet-01",))
        assert is_device_allowed(restrictions, "tablet-01") is True
        assert is_device_allowed(restrictions, "tablet-02") is False
        assert is_device_allowed(RestrictionSet(), "anything") is True

    def test_locations(self) -> None:
        restrictions = RestrictionSet(allowed_locations=("sede-norte",))
        assert is_location_allowed(restrictions, "sede-norte") is True
        assert is_location_allowed(restrictions, "sede-sur") is False
        assert is_location_allowed(RestrictionSet(), None) is True


# ---------------------------------------------------------------------------
# PolicyEvaluator
# ---------------------------------------------------------------------------


class TestPolicyEvaluator:
    def test_invalid_malformed_policy_rejected(self) -> None:
        with pytest.raises(ValueError, match="on_malformed_schedule"):
            PolicyEvaluator(on_malformed_schedule="maybe")  # type: ignore[arg-type]

    def test_default_policy_is_allow(self) -> None:
        assert PolicyEvaluator().on_malformed_schedule == "allow"

    def test_allowed_decision(self, viewer: PermissionDocument) -> None:
        decision = PolicyEvaluator().evaluate(viewer, AccessRequest("estudiantes", "ver"))
        assert isinstance(decision, AccessDecision)
        assert decision.allowed is True
        assert decision.failed_check is None
        assert bool(decision) is True

    def test_permission_checked_first(self) -> None:
        document = PermissionDocument().with_restrictions(RestrictionSet(allowed_ips=("9.9.9.9",)))
        decision = PolicyEvaluator().evaluate(document, AccessRequest("estudiantes", "ver", ip="1.1.1.1"))
        assert decision.failed_check == "permission"
        assert not decision

    def test_schedule_failure(self, viewer: PermissionDocument) -> None:
        document = viewer.with_restrictions(_restrictions())
        request = AccessRequest("estudiantes", "ver", timestamp=_at(_MONDAY, 18))
        decision = PolicyEvaluator().evaluate(document, request)
        assert decision.failed_check == "schedule"

    def test_malformed_schedule_policy_applied(self, viewer: PermissionDocument) -> None:
        document = viewer.with_restrictions(_restrictions(hora_inicio="??"))
        request = AccessRequest("estudiantes", "ver", timestamp=_at(_MONDAY, 10))
        assert PolicyEvaluator().evaluate(document, request).allowed is True
        assert PolicyEvaluator("deny").evaluate(document, request).failed_check == "schedule"

    @pytest.mark.parametrize(
        "restrictions, request_kwargs, failed",
        [
            (RestrictionSet(allowed_ips=("9.9.9.9",)), {"ip": "1.1.1.1"}, "ip"),
            (RestrictionSet(allowed_devices=("d1",)), {"device_id": "d2"}, "device"),
            (RestrictionSet(allowed_locations=("l1",)), {"location_id": None}, "location"),
        ],
    )
    def test_allowlist_failures(
        self,
        viewer: PermissionDocument,
        restrictions: RestrictionSet,
        request_kwargs: dict[str, object],
        failed: str,
    ) -> None:
        document = viewer.with_restrictions(restrictions)
        decision = PolicyEvaluator().evaluate(document, AccessRequest("estudiantes", "ver", **request_kwargs))  # type: ignore[arg-type]
        assert decision.allowed is False
        assert decision.failed_check == failed

    def test_decision_echoes_request_names(self, viewer: PermissionDocument) -> None:
        decision = PolicyEvaluator().evaluate(viewer, AccessRequest("Estudiantes", "VER"))
        assert decision.module == "Estudiantes"
        assert decision.action == "VER"
        assert decision.allowed is True

    def test_evaluate_all_preserves_order(self, viewer: PermissionDocument) -> None:
        requests = [AccessRequest("estudiantes", "ver"), AccessRequest("estudiantes", "crear")]
        decisions = PolicyEvaluator().evaluate_all(viewer, requests)
        assert [d.allowed for d in decisions] == [True, False]

    def test_request_context(self) -> None:
        request = AccessRequest("asistencia", "registrar", timestamp=_at(_MONDAY, 9), ip="10.0.0.7")
        assert request.to_context() == {
            "module": "asistencia",
            "action": "registrar",
            "timestamp": "2024-03-04T09:00:00",
            "ip": "10.0.0.7",
            "device_id": None,
            "location_id": None,
        }


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


def test_view_students_only_document(viewer: PermissionDocument) -> None:
    assert has_permission(viewer, "estudiantes", "ver") is True
    assert has_permission(viewer, "estudiantes", "crear") is False
    assert is_within_access_window(viewer.restrictions, datetime(2024, 3, 10, 2, 30)) is True
    assert is_ip_allowed(viewer.restrictions, "203.0.113.5") is True
