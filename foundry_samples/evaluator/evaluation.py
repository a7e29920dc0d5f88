"""Agent-run evaluation: submit, poll to completion, normalise the output."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

import structlog

from foundry_samples.common.constants import EVALUATION_TERMINAL_STATES, EVALUATORS
from foundry_samples.common.errors import ConfigurationError, EvaluationError
from foundry_samples.runner.polling import PollPolicy, normalize_status, wait_for_status

_log = structlog.get_logger("evaluation")


@dataclass
class EvaluationOutcome:
    """Scores of one evaluated (thread, run) pair."""

    evaluation_id: str
    thread_id: str
    run_id: str
    status: str
    scores: dict[str, float] = field(default_factory=dict)
    results: dict[str, dict[str, Any]] = field(default_factory=dict)
    feedback: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def resolve_evaluators(names: Iterable[str]) -> dict[str, str]:
    """Map short evaluator names to platform evaluator ids."""
    from azure.ai.projects.models import EvaluatorIds

    resolved: dict[str, str] = {}
    unknown = []
    for name in names:
        member = EVALUATORS.get(name)
        if member is None or not hasattr(EvaluatorIds, member):
            unknown.append(name)
            continue
        resolved[name] = getattr(EvaluatorIds, member).value
    if unknown:
        raise ConfigurationError(
            message=f"Unknown evaluator(s): {', '.join(unknown)} "
            f"(choose from {', '.join(sorted(EVALUATORS))})"
        )
    return resolved


def submit_evaluation(
    project: Any,
    thread_id: str,
    run_id: str,
    evaluator_ids: dict[str, str],
    *,
    model: str,
) -> Any:
    """Start a remote agent evaluation and return the SDK evaluation object."""
    try:
        insights = project.telemetry.get_connection_string()
    except Exception as exc:
        raise EvaluationError(
            "Agent evaluation needs an Application Insights resource connected "
            f"to the project: {exc}"
        ) from exc

    from azure.ai.projects.models import AgentEvaluationRequest, EvaluatorConfiguration

    request = AgentEvaluationRequest(
        thread_id=thread_id,
        run_id=run_id,
        evaluators={
            name: EvaluatorConfiguration(id=eid, init_params={"deployment_name": model})
            for name, eid in evaluator_ids.items()
        },
        app_insights_connection_string=insights,
    )
    evaluation = project.evaluations.create_agent_evaluation(request)
    _log.info("evaluation_submitted", evaluation_id=evaluation.id,
              thread_id=thread_id, run_id=run_id, evaluators=sorted(evaluator_ids))
    return evaluation


def outcome_from(
    evaluation: Any, evaluation_id: str, thread_id: str, run_id: str
) -> EvaluationOutcome:
    """Flatten an SDK evaluation object into an EvaluationOutcome.

    Accepts the ``AgentEvaluation`` returned on submit (which may carry inline
    ``result`` items) as well as the ``Evaluation`` status record served by
    ``project.evaluations.get``, which has neither ``id`` nor ``result``.
    """
    outcome = EvaluationOutcome(
        evaluation_id=evaluation_id,
        thread_id=thread_id,
        run_id=run_id,
        status=normalize_status(evaluation.status),
    )
    feedback: list[str] = []
    for item in getattr(evaluation, "result", None) or []:
        name = getattr(item, "evaluator", None) or getattr(item, "evaluator_id", "evaluator")
        score = getattr(item, "score", None)
        if isinstance(score, (int, float)):
            outcome.scores[name] = float(score)
        outcome.results[name] = {
            k: v
            for k, v in {
                "score": score,
                "status": normalize_status(getattr(item, "status", None)) or None,
                "reason": getattr(item, "reason", None),
                "error": getattr(item, "error", None),
                **(getattr(item, "additional_details", None) or {}),
            }.items()
            if v is not None
        }
        reason = getattr(item, "reason", None)
        if reason:
            feedback.append(f"{name}: {reason}")
    outcome.feedback = "\n".join(feedback)
    return outcome


def evaluate_run(
    project: Any,
    thread_id: str,
    run_id: str,
    evaluators: Iterable[str],
    *,
    model: str,
    policy: PollPolicy | None = None,
) -> EvaluationOutcome:
    """Evaluate one completed run and block until it reaches a terminal status.

    Scores come from the submitted ``AgentEvaluation`` when the service
    answers inline.  Otherwise the status record is polled; it carries no
    scores, which the service then publishes to Application Insights only.
    """
    evaluator_ids = resolve_evaluators(evaluators)
    evaluation = submit_evaluation(project, thread_id, run_id, evaluator_ids, model=model)
    evaluation_id = evaluation.id

    if normalize_status(evaluation.status) not in EVALUATION_TERMINAL_STATES:
        evaluation = wait_for_status(
            lambda: project.evaluations.get(evaluation_id),
            EVALUATION_TERMINAL_STATES,
            policy=policy,
            describe=f"evaluation {evaluation_id}",
        )
    outcome = outcome_from(evaluation, evaluation_id, thread_id, run_id)
    if outcome.status == "completed" and not outcome.results:
        _log.info("evaluation_scores_in_app_insights", evaluation_id=evaluation_id)
    if outcome.status != "completed":
        error = getattr(evaluation, "error", None) or outcome.status
        raise EvaluationError(f"Evaluation {outcome.evaluation_id} {outcome.status}: {error}")
    _log.info("evaluation_completed", evaluation_id=outcome.evaluation_id, scores=outcome.scores)
    return outcome
