"""Score aggregation across evaluated runs (stdlib only, no numpy needed)."""

from __future__ import annotations

import math
from typing import Iterable

from foundry_samples.evaluator.evaluation import EvaluationOutcome


def mean(scores: list[float]) -> float:
    return sum(scores) / len(scores) if scores else 0.0


def stdev(scores: list[float]) -> float:
    """Sample standard deviation; 0.0 below two scores."""
    if len(scores) < 2:
        return 0.0
    centre = mean(scores)
    variance = sum((s - centre) ** 2 for s in scores) / (len(scores) - 1)
    return math.sqrt(variance)


def median(scores: list[float]) -> float:
    if not scores:
        return 0.0
    ordered = sorted(scores)
    mid, odd = divmod(len(ordered), 2)
    return float(ordered[mid]) if odd else (ordered[mid - 1] + ordered[mid]) / 2.0


def describe(scores: list[float]) -> dict[str, float]:
    """``{"mean", "stdev", "median", "min", "max", "n"}`` of one evaluator's scores."""
    return {
        "mean": round(mean(scores), 4),
        "stdev": round(stdev(scores), 4),
        "median": round(median(scores), 4),
        "min": min(scores),
        "max": max(scores),
        "n": len(scores),
    }


def fmt_stat(scores: list[float]) -> str:
    """mean +/- sigma  [min, med, max]  (n=...)."""
    if not scores:
        return "—"
    d = describe(scores)
    return (
        f"{d['mean']:.2f} ± {d['stdev']:.2f}"
        f"  [min={d['min']:.2f}, med={d['median']:.2f}, max={d['max']:.2f}]"
        f"  (n={d['n']})"
    )


def collect_scores(outcomes: Iterable[EvaluationOutcome]) -> dict[str, list[float]]:
    """Group every numeric score by evaluator name, in first-seen order."""
    grouped: dict[str, list[float]] = {}
    for outcome in outcomes:
        for name, score in outcome.scores.items():
            grouped.setdefault(name, []).append(score)
    return grouped


def summarize(outcomes: Iterable[EvaluationOutcome]) -> dict[str, dict[str, float]]:
    """Per-evaluator statistics keyed by evaluator name."""
    return {name: describe(values) for name, values in collect_scores(outcomes).items()}
