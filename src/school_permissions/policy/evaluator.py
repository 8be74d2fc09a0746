"""Policy evaluation over a role's permission document.

The module-level functions are pure: they read a document (or its
restriction set) and return a boolean, never mutate their inputs and never
raise.  Unknown modules and actions resolve to deny.

:class:`PolicyEvaluator` combines the individual checks for one request,
in a fixed order, and reports the first check that failed.

Example
-------
::

    doc = PermissionDocument.from_dict({"modulos": {"estudiantes": {"ver": True}}})
    assert has_permission(doc, "Estudiantes", "VER") is True
    assert has_permission(doc, "estudiantes", "crear") is False

    evaluator = PolicyEvaluator()
    decision = evaluator.evaluate(
        doc,
        AccessRequest(module="estudiantes", action="ver", ip="10.0.0.7"),
    )
    assert decision.allowed
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Literal

from school_permissions.document.restrictions import RestrictionSet
from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.registry import MODULE_NAMES, get_module, lookup

logger = logging.getLogger(__name__)

MalformedPolicy = Literal["allow", "deny"]

_MALFORMED_POLICIES: frozenset[str] = frozenset(["allow", "deny"])

# Weekday names as written in schedules, mapped to datetime.weekday().
_WEEKDAYS: dict[str, int] = {
    "lunes": 0,
    "martes": 1,
    "miercoles": 2,
    "miércoles": 2,
    "jueves": 3,
    "viernes": 4,
    "sabado": 5,
    "sábado": 5,
    "domingo": 6,
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


# ---------------------------------------------------------------------------
# Module / action check
# ---------------------------------------------------------------------------


def has_permission(document: PermissionDocument, module: str, action: str) -> bool:
    """Return True if ``document`` grants ``action`` within ``module``.

    Both names are matched case-insensitively against the registry.  An
    unknown module or an action outside the module's vocabulary is denied.
    """
    accessor = lookup(module, action)
    if accessor is None:
        logger.debug("Unknown permission %r.%r resolved to deny", module, action)
        return False
    if not isinstance(document, PermissionDocument):
        logger.warning("has_permission: expected PermissionDocument, got %r", type(document))
        return False
    return bool(accessor(document))


def granted_actions(document: PermissionDocument) -> dict[str, list[str]]:
    """Return the granted actions of every module that grants at least one."""
    granted: dict[str, list[str]] = {}
    for module in MODULE_NAMES:
        spec = get_module(module)
        if spec is None:
            continue
        record = getattr(document.modules, spec.attribute)
        actions = [name for name, attr in spec.actions.items() if getattr(record, attr)]
        if actions:
            granted[module] = actions
    return granted


# ---------------------------------------------------------------------------
# Schedule check
# ---------------------------------------------------------------------------


def parse_time_of_day(text: object) -> time | None:
    """Parse ``H:MM``, ``HH:MM`` or ``HH:MM:SS``; return ``None`` if malformed."""
    if not isinstance(text, str):
        return None
    match = _TIME_OF_DAY.match(text.strip())
    if match is None:
        return None
    hour, minute, second = int(match[1]), int(match[2]), int(match[3] or 0)
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


def weekday_index(name: object) -> int | None:
    """Return the ``datetime.weekday()`` index of a weekday name, or ``None``."""
    if not isinstance(name, str):
        return None
    return _WEEKDAYS.get(name.strip().lower())


def is_within_access_window(
    restrictions: RestrictionSet,
    timestamp: datetime,
    on_malformed: MalformedPolicy = "allow",
) -> bool:
    """Return True if ``timestamp`` falls inside the role's access schedule.

    Checks, in order:

    1. An inactive schedule allows every timestamp.
    2. The weekday must be one of ``days_of_week``.
    3. A date listed in ``date_exceptions`` is denied regardless of time.
    4. Unparsable bounds resolve per ``on_malformed`` (``"allow"`` by default).
    5. ``start_time <= time-of-day <= end_time``, inclusive.  Windows that
       cross midnight are not supported: ``start > end`` denies everything.

    The timestamp is compared on its own wall clock; no timezone
    conversion is applied.
    """
    schedule = restrictions.access_schedule
    if not schedule.active:
        return True

    if not isinstance(timestamp, datetime):
        logger.warning("is_within_access_window: expected datetime, got %r", type(timestamp))
        return False

    allowed_days = {weekday_index(day) for day in schedule.days_of_week}
    if timestamp.weekday() not in allowed_days:
        return False

    if timestamp.date() in schedule.date_exceptions:
        return False

    start = parse_time_of_day(schedule.start_time)
    end = parse_time_of_day(schedule.end_time)
    if start is None or end is None:
        logger.warning(
            "Malformed access schedule bounds %r-%r; resolving to %s",
            schedule.start_time,
            schedule.end_time,
            on_malformed,
        )
        return on_malformed == "allow"

    return start <= timestamp.time() <= end


# ---------------------------------------------------------------------------
# Network / device / location checks
# ---------------------------------------------------------------------------


def _in_allowlist(allowlist: tuple[str, ...], value: str | None) -> bool:
    # An empty allowlist means the restriction is not in use.
    if not allowlist:
        return True
    return value in allowlist


def is_ip_allowed(restrictions: RestrictionSet, ip: str | None) -> bool:
    """Return True if ``ip`` is in ``allowed_ips`` or the list is empty.

    Matching is exact string membership; CIDR ranges are not expanded.
    """
    return _in_allowlist(restrictions.allowed_ips, ip)


def is_device_allowed(restrictions: RestrictionSet, device_id: str | None) -> bool:
    """Return True if ``device_id`` is in ``allowed_devices`` or the list is empty."""
    return _in_allowlist(restrictions.allowed_devices, device_id)


def is_location_allowed(restrictions: RestrictionSet, location_id: str | None) -> bool:
    """Return True if ``location_id`` is in ``allowed_locations`` or the list is empty."""
    return _in_allowlist(restrictions.allowed_locations, location_id)


# ---------------------------------------------------------------------------
# Combined evaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccessRequest:
    """Context of one authorization check.

    Attributes
    ----------
    module, action:
        Wire names of the module and action being attempted.
    timestamp:
        Wall-clock time of the request.  ``None`` means "now".
    ip, device_id, location_id:
        Request identifiers.  A missing identifier only passes when the
        corresponding allowlist is empty.
    """

    module: str
    action: str
    timestamp: datetime | None = None
    ip: str | None = None
    device_id: str | None = None
    location_id: str | None = None

    def to_context(self) -> dict[str, object]:
        """Return the request as a JSON-compatible dict."""
        return {
            "module": self.module,
            "action": self.action,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "ip": self.ip,
            "device_id": self.device_id,
            "location_id": self.location_id,
        }


@dataclass(frozen=True)
class AccessDecision:
    """Immutable outcome of :meth:`PolicyEvaluator.evaluate`.

    Attributes
    ----------
    allowed:
        Final decision.
    reason:
        Human-readable explanation.
    module, action:
        The request's module and action, as supplied.
    failed_check:
        ``None`` when allowed; otherwise the first failing check:
        ``"permission"``, ``"schedule"``, ``"ip"``, ``"device"``,
        ``"location"`` (or ``"role"`` when set by :class:`AccessGuard`).
    """

    allowed: bool
    reason: str
    module: str
    action: str
    failed_check: str | None = None

    def __bool__(self) -> bool:
        """Return True if the request is allowed."""
        return self.allowed


class PolicyEvaluator:
    """Runs every check for a request and ANDs the results.

    Parameters
    ----------
    on_malformed_schedule:
        Outcome of the schedule check when the time bounds cannot be
        parsed: ``"allow"`` (default) or ``"deny"``.
    """

    def __init__(self, on_malformed_schedule: MalformedPolicy = "allow") -> None:
        if on_malformed_schedule not in _MALFORMED_POLICIES:
            raise ValueError(
                f"on_malformed_schedule must be one of {sorted(_MALFORMED_POLICIES)}; "
                f"got {on_malformed_schedule!r}."
            )
        self._on_malformed: MalformedPolicy = on_malformed_schedule

    @property
    def on_malformed_schedule(self) -> MalformedPolicy:
        return self._on_malformed

    def evaluate(self, document: PermissionDocument, request: AccessRequest) -> AccessDecision:
        """Evaluate ``request`` against ``document``.

        Checks run in the order permission, schedule, IP, device, location;
        the first failure determines the reason.
        """
        restrictions = document.restrictions
        timestamp = request.timestamp if request.timestamp is not None else datetime.now()

        checks: list[tuple[str, bool, str]] = [
            (
                "permission",
                has_permission(document, request.module, request.action),
                f"Action '{request.action}' on module '{request.module}' is not granted.",
            ),
            (
                "schedule",
                is_within_access_window(restrictions, timestamp, self._on_malformed),
                f"Access at {timestamp} is outside the role's schedule.",
            ),
            (
                "ip",
                is_ip_allowed(restrictions, request.ip),
                f"IP address {request.ip!r} is not in the allowlist.",
            ),
            (
                "device",
                is_device_allowed(restrictions, request.device_id),
                f"Device {request.device_id!r} is not in the allowlist.",
            ),
            (
                "location",
                is_location_allowed(restrictions, request.location_id),
                f"Location {request.location_id!r} is not in the allowlist.",
            ),
        ]

        for check_name, passed, reason in checks:
            if not passed:
                logger.debug(
                    "Access DENY: module=%s action=%s check=%s",
                    request.module,
                    request.action,
                    check_name,
                )
                return AccessDecision(
                    allowed=False,
                    reason=reason,
                    module=request.module,
                    action=request.action,
                    failed_check=check_name,
                )

        logger.debug("Access ALLOW: module=%s action=%s", request.module, request.action)
        return AccessDecision(
            allowed=True,
            reason=f"Action '{request.action}' on module '{request.module}' is allowed.",
            module=request.module,
            action=request.action,
        )

    def evaluate_all(
        self,
        document: PermissionDocument,
        requests: list[AccessRequest],
    ) -> list[AccessDecision]:
        """Evaluate a batch of requests against the same document, in order."""
        return [self.evaluate(document, request) for request in requests]
