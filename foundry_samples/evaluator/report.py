"""Console reports for single evaluations and for a batch of them."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from foundry_samples.common.console import header, section
from foundry_samples.evaluator.evaluation import EvaluationOutcome
from foundry_samples.evaluator.stats import collect_scores, fmt_stat, summarize


def print_transcript(turns: Sequence[tuple[str, str]]) -> None:
    print(section("CONVERSATION"))
    for role, text in turns:
        print(f"  {role:>9}: {text}")


def print_outcome(outcome: EvaluationOutcome, question: str | None = None) -> None:
    """Scores, per-evaluator fields and feedback of one evaluation."""
    title = f"EVALUATION {outcome.evaluation_id}"
    print(section(title))
    if question:
        print(f"  Question: {question}")
    print(f"  Thread:   {outcome.thread_id}")
    print(f"  Run:      {outcome.run_id}")
    print(f"  Status:   {outcome.status}")

    if outcome.scores:
        print("\n  Overall Scores:")
        for name, score in outcome.scores.items():
            print(f"    {name:<22} {score:>8.2f}")

    if outcome.results:
        print("\n  Evaluator Results:")
        for name, fields in outcome.results.items():
            print(f"    Evaluator: {name}")
            for key, value in fields.items():
                print(f"      {key}: {value}")
    else:
        print("\n  No inline results; scores are published to the project's Application Insights.")

    if outcome.feedback:
        print("\n  Evaluation Feedback:")
        for line in outcome.feedback.splitlines():
            print(f"    {line}")


def print_aggregate(outcomes: Sequence[EvaluationOutcome]) -> None:
    """Per-evaluator statistics over every evaluated run."""
    print(header(f"AGGREGATE SCORES  ({len(outcomes)} evaluated runs)"))
    grouped = collect_scores(outcomes)
    if not grouped:
        print("  No numeric scores returned.")
        return
    print(f"  {'Evaluator':<22} {'Scores'}")
    print(f"  {'─' * 22} {'─' * 50}")
    for name, values in grouped.items():
        print(f"  {name:<22} {fmt_stat(values)}")
    print(f"\n{'=' * 76}\n")


def dump_raw(outcomes: Sequence[EvaluationOutcome], output: str | Path) -> Path:
    """Write outcomes plus their summary as JSON and return the path."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(
        {
            "evaluations": [o.to_dict() for o in outcomes],
            "summary": summarize(outcomes),
        },
        indent=2,
        default=str,
    ))
    return path
