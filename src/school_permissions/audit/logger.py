"""Append-only JSONL audit trail of authorization decisions.

Each record carries a UTC ISO-8601 timestamp, a session identifier and the
decision fields.  How much is recorded follows the role's audit level
(``nivel_auditoria``):

- ``BASICO``:   denials only
- ``MEDIO``:    every decision
- ``COMPLETO``: every decision plus the request context (request time,
  IP, device and location)

Thread-safety is achieved with a ``threading.Lock`` so one logger can be
shared by concurrent evaluations.

Example
-------
>>> from pathlib import Path
>>> audit = DecisionAuditLogger(Path("/tmp/decisions.jsonl"))
>>> audit.log_decision(decision, request, AuditLevel.MEDIUM, role_code="PROFESOR")
True
>>> audit.count()
1
"""
from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from school_permissions.document.special_config import AuditLevel
from school_permissions.policy.evaluator import AccessDecision, AccessRequest


class DecisionAuditLogger:
    """Append-only JSONL logger for access decisions.

    Parameters
    ----------
    log_path:
        Path to the ``.jsonl`` audit file.  Parent directories are created
        on first write.
    session_id:
        Identifier stamped on every record.  A random UUID is generated if
        not supplied.
    """

    def __init__(
        self,
        log_path: Path,
        session_id: str | None = None,
    ) -> None:
        self._log_path = Path(log_path)
        self._session_id: str = session_id or str(uuid.uuid4())
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def log_decision(
        self,
        decision: AccessDecision,
        request: AccessRequest,
        audit_level: AuditLevel = AuditLevel.BASIC,
        role_code: str | None = None,
    ) -> bool:
        """Record ``decision`` if ``audit_level`` calls for it.

        Returns
        -------
        bool
            ``True`` when a record was written.
        """
        if audit_level is AuditLevel.BASIC and decision.allowed:
            return False

        entry: dict[str, object] = {
            "event": "access_decision",
            "role": role_code,
            "module": decision.module,
            "action": decision.action,
            "allowed": decision.allowed,
            "failed_check": decision.failed_check,
            "reason": decision.reason,
            "audit_level": audit_level.value,
        }
        if audit_level is AuditLevel.FULL:
            entry["request"] = request.to_context()

        self.log(entry)
        return True

    def log(self, entry: dict[str, object]) -> None:
        """Append an arbitrary event record.

        ``timestamp`` and ``session_id`` are added automatically.
        """
        record: dict[str, object] = {
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            "session_id": self._session_id,
            **entry,
        }
        self._write(record)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def read_all(self) -> list[dict[str, object]]:
        """Return all records, oldest first (empty if the file is missing)."""
        return list(self._iter_records())

    def query(self, filters: dict[str, object]) -> list[dict[str, object]]:
        """Return records whose top-level fields equal every filter value.

        Example
        -------
        >>> audit.query({"allowed": False, "module": "financiero"})
        [...]
        """
        return [
            record
            for record in self._iter_records()
            if all(record.get(k) == v for k, v in filters.items())
        ]

    def count(self) -> int:
        return sum(1 for _ in self._iter_records())

    def last_n(self, n: int) -> list[dict[str, object]]:
        """Return the ``n`` most recent records."""
        all_records = list(self._iter_records())
        return all_records[-n:] if n < len(all_records) else all_records

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _write(self, record: dict[str, object]) -> None:
        with self._lock:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")

    def _iter_records(self) -> Iterator[dict[str, object]]:
        if not self._log_path.exists():
            return
        with self._lock:
            with self._log_path.open("r", encoding="utf-8") as fh:
                for line in fh:
                    line = line.strip()
                    if line:
                        try:
                            yield json.loads(line)
                        except json.JSONDecodeError:
                            pass  # Skip malformed lines silently.

    @property
    def log_path(self) -> Path:
        return self._log_path

    @property
    def session_id(self) -> str:
        return self._session_id
