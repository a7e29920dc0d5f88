"""CLI entrypoint for the agent evaluation sample."""

from __future__ import annotations

import argparse
from datetime import datetime

import structlog
from azure.core.exceptions import AzureError

from foundry_samples.common.config import load_settings, poll_policy
from foundry_samples.common.console import fail, info, ok, warn
from foundry_samples.common.constants import (
    CAPITALS_AGENT_INSTRUCTIONS,
    CAPITALS_QUESTIONS,
    DEFAULT_EVALUATORS,
    EVALUATORS,
    RESULTS_DIR,
)
from foundry_samples.common.errors import ConfigurationError, FoundrySampleError
from foundry_samples.common.logging import configure_structlog, results_logger
from foundry_samples.common.platform import build_project_client
from foundry_samples.evaluator.evaluation import EvaluationOutcome, evaluate_run, resolve_evaluators
from foundry_samples.evaluator.report import (
    dump_raw,
    print_aggregate,
    print_outcome,
    print_transcript,
)
from foundry_samples.runner.extraction import transcript
from foundry_samples.runner.session import AgentSession

_log = structlog.get_logger("evaluator")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Run a capitals agent and evaluate its runs with Foundry evaluators.",
        epilog=(
            "Demo: %(prog)s  |  "
            "Existing run: %(prog)s --thread THREAD_ID --run RUN_ID"
        ),
    )
    parser.add_argument("--thread", default=None, help="Thread of an existing run")
    parser.add_argument("--run", default=None, help="Existing run to evaluate")
    parser.add_argument(
        "-q", "--question", action="append", default=None,
        help="Question for the demo agent (repeatable)",
    )
    parser.add_argument(
        "-e", "--evaluators",
        default=",".join(DEFAULT_EVALUATORS),
        help=f"Comma-separated evaluators ({', '.join(sorted(EVALUATORS))})",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Path to write raw JSON data dump",
    )
    args = parser.parse_args(argv)
    if bool(args.thread) != bool(args.run):
        parser.error("--thread and --run must be given together.")

    try:
        settings = load_settings().require("AZURE_AI_ENDPOINT", "MODEL_DEPLOYMENT_NAME")
    except ConfigurationError as exc:
        fail(f"{exc}. Set it in your environment or .env file.")
    configure_structlog(settings.log_level, settings.log_format, sample="evaluation")

    evaluators = [e.strip() for e in args.evaluators.split(",") if e.strip()]
    try:
        resolve_evaluators(evaluators)
    except ConfigurationError as exc:
        fail(str(exc))

    results_dir = RESULTS_DIR / datetime.now().strftime("%Y%m%d_%H%M%S")
    results_log = results_logger(results_dir)
    policy = poll_policy(settings)
    outcomes: list[EvaluationOutcome] = []

    def _evaluate(thread_id: str, run_id: str, question: str | None = None) -> None:
        info(f"Evaluating run {run_id} with {', '.join(evaluators)} ...")
        try:
            outcome = evaluate_run(
                project, thread_id, run_id, evaluators,
                model=settings.model_deployment_name, policy=policy,
            )
        except ConfigurationError as exc:
            fail(str(exc))
        except (AzureError, FoundrySampleError) as exc:
            _log.error("evaluation_failed", run_id=run_id, error=str(exc), exc_info=True)
            warn(f"Evaluation of run {run_id} failed: {exc}")
            return
        outcomes.append(outcome)
        results_log.info("evaluation", question=question, **outcome.to_dict())
        print_outcome(outcome, question)

    with build_project_client(settings) as project:
        if args.run:
            _evaluate(args.thread, args.run)
        else:
            try:
                with AgentSession(
                    project.agents,
                    model=settings.model_deployment_name,
                    name="evaluation-test-agent",
                    instructions=CAPITALS_AGENT_INSTRUCTIONS,
                    policy=policy,
                ) as session:
                    ok(f"Created agent {session.agent_id}")
                    for question in args.question or CAPITALS_QUESTIONS:
                        try:
                            reply = session.ask(question, new_thread=True)
                        except (AzureError, FoundrySampleError) as exc:
                            warn(f"Question failed: {exc}")
                            continue
                        print_transcript(transcript(project.agents, reply.outcome.thread_id))
                        if not reply.outcome.completed:
                            warn(f"Run {reply.outcome.run_id} {reply.outcome.status}; skipping evaluation.")
                            continue
                        _evaluate(reply.outcome.thread_id, reply.outcome.run_id, question)
            except (AzureError, FoundrySampleError) as exc:
                _log.error("demo_failed", error=str(exc), exc_info=True)
                fail(f"Evaluation demo aborted: {exc}")

    if len(outcomes) > 1:
        print_aggregate(outcomes)
    if args.output:
        ok(f"Raw data saved to {dump_raw(outcomes, args.output)}")
    info(f"Evaluation log: {results_dir / 'evaluations.jsonl'}")
