"""Benchmark: PolicyEvaluator throughput, in evaluations per second.

Measures how many PolicyEvaluator.evaluate() calls complete per second
against the ``profesor`` template with an active schedule and an IP
allowlist, cycling through allowed and denied requests.
"""
from __future__ import annotations

import json
import sys
import time
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from school_permissions.policy.evaluator import AccessRequest, PolicyEvaluator
from school_permissions.templates.role_templates import get_template

_ITERATIONS: int = 10_000


def _make_requests() -> list[AccessRequest]:
    monday_morning = datetime(2024, 3, 4, 9, 15)
    return [
        AccessRequest("calificaciones", "editar", timestamp=monday_morning, ip="10.0.0.7"),
        AccessRequest("Asistencia", "REGISTRAR", timestamp=monday_morning, ip="10.0.0.7"),
        AccessRequest("calificaciones", "publicar", timestamp=monday_morning, ip="10.0.0.7"),
        AccessRequest("estudiantes", "ver", timestamp=datetime(2024, 3, 9, 9, 15), ip="10.0.0.7"),
        AccessRequest("estudiantes", "ver", timestamp=monday_morning, ip="192.168.1.20"),
        AccessRequest("cafeteria", "ver", timestamp=monday_morning, ip="10.0.0.7"),
    ]


def bench_evaluation_throughput() -> dict[str, object]:
    """Benchmark PolicyEvaluator.evaluate() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    template = get_template("profesor")
    document = template.with_restrictions(
        template.restrictions.model_copy(update={"allowed_ips": ("10.0.0.7",)})
    )
    evaluator = PolicyEvaluator()
    requests = _make_requests()

    start = time.perf_counter()
    for i in range(_ITERATIONS):
        evaluator.evaluate(document, requests[i % len(requests)])
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "policy_evaluation_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
    }
    print(
        f"[bench_evaluation_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_evaluation_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
