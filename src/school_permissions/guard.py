"""AccessGuard — one-call authorization for the common case.

Example
-------
::

    from school_permissions import AccessGuard, AccessRequest

    guard = AccessGuard()
    decision = guard.check_role(role, AccessRequest(module="asistencia", action="registrar"))
    print(decision.allowed)

"""
from __future__ import annotations

from school_permissions.audit.logger import DecisionAuditLogger
from school_permissions.config.loader import EngineConfig
from school_permissions.document.schema import PermissionDocument
from school_permissions.policy.evaluator import AccessDecision, AccessRequest, PolicyEvaluator
from school_permissions.roles.role import Role


class AccessGuard:
    """Wraps :class:`PolicyEvaluator` with engine config and decision auditing.

    Parameters
    ----------
    config:
        Engine configuration.  Defaults are used when omitted.
    audit_logger:
        Explicit audit logger.  When omitted and ``config.audit.enabled`` is
        set, one is created at ``config.audit.log_path``.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        audit_logger: DecisionAuditLogger | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._evaluator = PolicyEvaluator(
            on_malformed_schedule=self._config.schedule.on_malformed
        )
        if audit_logger is None and self._config.audit.enabled:
            audit_logger = DecisionAuditLogger(self._config.audit.log_path)
        self._audit = audit_logger

    def check(
        self,
        document: PermissionDocument,
        request: AccessRequest,
        role_code: str | None = None,
    ) -> AccessDecision:
        """Evaluate ``request`` against ``document`` and audit the decision."""
        decision = self._evaluator.evaluate(document, request)
        self._record(decision, request, document, role_code)
        return decision

    def check_role(self, role: Role, request: AccessRequest) -> AccessDecision:
        """Evaluate ``request`` for ``role``; inactive roles are always denied."""
        if not role.active:
            decision = AccessDecision(
                allowed=False,
                reason=f"Role '{role.code}' is inactive.",
                module=request.module,
                action=request.action,
                failed_check="role",
            )
            self._record(decision, request, role.permissions, role.code)
            return decision
        return self.check(role.permissions, request, role_code=role.code)

    def _record(
        self,
        decision: AccessDecision,
        request: AccessRequest,
        document: PermissionDocument,
        role_code: str | None,
    ) -> None:
        if self._audit is None:
            return
        self._audit.log_decision(
            decision,
            request,
            audit_level=document.special_config.audit_level,
            role_code=role_code,
        )

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def evaluator(self) -> PolicyEvaluator:
        return self._evaluator

    @property
    def audit_logger(self) -> DecisionAuditLogger | None:
        return self._audit

    def __repr__(self) -> str:
        return f"AccessGuard(audit={'on' if self._audit else 'off'})"
