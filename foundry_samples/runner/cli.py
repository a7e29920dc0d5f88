"""CLI entrypoint for the getting-started samples.

Subcommands:
  agent        provision a simple agent, ask it one question, clean up
  file-search  upload documents, build a vector store, ask questions about them
  chat         one chat completion through the project's Azure OpenAI client
  langchain    LangChain chat model with project tools bound, answering two prompts
  connections  list project connections (or show one with --name)
  deployments  list model deployments (or show one with --name)
  index        create/update an Azure AI Search backed project index
  sweep        delete resources left behind by sessions that crashed
"""

from __future__ import annotations

import argparse
import textwrap
from pathlib import Path

import structlog
from azure.core.exceptions import AzureError
from openai import OpenAIError

from foundry_samples.common.config import Settings, load_settings, poll_policy
from foundry_samples.common.console import (
    banner,
    fail,
    info,
    ok,
    speaker,
    teardown_summary,
    turn_break,
    warn,
)
from foundry_samples.common.constants import (
    CHAT_SYSTEM_PROMPT,
    CHAT_USER_PROMPT,
    DOCUMENTS_DIR,
    FILE_SEARCH_INSTRUCTIONS,
    FILE_SEARCH_QUESTIONS,
    LANGCHAIN_PLAIN_PROMPT,
    LANGCHAIN_TOOL_PROMPTS,
    SIMPLE_AGENT_INSTRUCTIONS,
    SIMPLE_AGENT_QUESTION,
)
from foundry_samples.common.errors import ConfigurationError, FoundrySampleError
from foundry_samples.common.logging import configure_structlog
from foundry_samples.common.platform import build_chat_client, build_chat_model, build_project_client
from foundry_samples.integrations.langchain_chat import ProjectAssistant, content_text
from foundry_samples.integrations.langchain_tools import build_project_tools
from foundry_samples.runner import catalog
from foundry_samples.runner.session import AgentSession, sweep_orphans
from foundry_samples.web.services import ChatService, ProjectService

_log = structlog.get_logger("cli")


def _converse(settings: Settings, *, instructions: str, questions: list[str],
              files: list[Path], track: bool) -> None:
    """Provision, ask every question, and always tear down."""
    project = build_project_client(settings)
    with project:
        try:
            session = AgentSession(
                project.agents,
                model=settings.model_deployment_name,
                instructions=instructions,
                files=files,
                policy=poll_policy(settings),
                track=track,
            )
            with session:
                ok(f"Agent ready: {session.agent_id}")
                if files:
                    res = session.resources
                    ok(f"Vector store {res.vector_store_id} over {len(res.file_ids)} file(s)")

                for question in questions:
                    turn_break()
                    speaker("user", question)
                    try:
                        reply = session.ask(question)
                    except (AzureError, FoundrySampleError) as exc:
                        _log.error("question_failed", question=question, error=str(exc), exc_info=True)
                        warn(f"Question failed: {exc}")
                        continue
                    speaker("assistant", reply.text)
        except (AzureError, FoundrySampleError) as exc:
            _log.error("sample_failed", error=str(exc), exc_info=True)
            fail(f"Sample aborted: {exc}")

    teardown_summary(session.failures)


def cmd_agent(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT", "MODEL_DEPLOYMENT_NAME")
    banner("Simple Agent Example")
    _converse(
        settings,
        instructions=args.instructions or SIMPLE_AGENT_INSTRUCTIONS,
        questions=args.question or [SIMPLE_AGENT_QUESTION],
        files=[],
        track=args.track,
    )


def cmd_file_search(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT", "MODEL_DEPLOYMENT_NAME")
    files = [Path(p) for p in args.file] if args.file else sorted(DOCUMENTS_DIR.glob("*.md"))
    missing = [str(p) for p in files if not p.is_file()]
    if not files or missing:
        fail(f"No documents to upload (missing: {', '.join(missing) or DOCUMENTS_DIR})")

    banner("File Search Example")
    info(f"Uploading {len(files)} document(s): {', '.join(p.name for p in files)}")
    _converse(
        settings,
        instructions=FILE_SEARCH_INSTRUCTIONS,
        questions=args.question or list(FILE_SEARCH_QUESTIONS),
        files=files,
        track=args.track,
    )


def cmd_chat(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT", "MODEL_DEPLOYMENT_NAME")
    banner("Chat Completion Example")
    with build_project_client(settings) as project:
        chat = ChatService(
            build_chat_client(project, settings),
            ProjectService(project),
            settings.model_deployment_name,
        )
        speaker("system", args.system)
        speaker("user", args.message)
        speaker("assistant", chat.complete([
            {"role": "system", "content": args.system},
            {"role": "user", "content": args.message},
        ]))


def cmd_langchain(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT", "DEPLOYMENT_NAME")
    banner("LangChain Tool Calling Example")
    with build_project_client(settings) as project:
        deployment = catalog.get_deployment(project, settings.deployment_name)
        info(f"Using deployment: {deployment.name} (Type: {getattr(deployment, 'type', '')})")
        model = build_chat_model(settings)

        turn_break()
        speaker("user", LANGCHAIN_PLAIN_PROMPT)
        speaker("assistant", content_text(model.invoke(LANGCHAIN_PLAIN_PROMPT)))

        assistant = ProjectAssistant(model, build_project_tools(project))
        prompts = args.question or [
            p.format(deployment=settings.deployment_name) for p in LANGCHAIN_TOOL_PROMPTS
        ]
        for prompt in prompts:
            turn_break()
            speaker("user", prompt)
            try:
                answer = assistant.chat(prompt)
            except FoundrySampleError as exc:
                warn(f"Question failed: {exc}")
                continue
            speaker("assistant", answer)


def cmd_connections(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT")
    name = args.name or None
    with build_project_client(settings) as project:
        if name:
            print(catalog.describe_connection(catalog.get_connection(project, name)))
            return
        info("Listing all connections:")
        for connection in catalog.list_connections(project):
            print(catalog.describe_connection(connection))


def cmd_deployments(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT")
    with build_project_client(settings) as project:
        if not args.name:
            info("Listing all deployments:")
            for deployment in catalog.list_deployments(project):
                print(catalog.describe_deployment(deployment))
                print()
        name = args.name or settings.deployment_name
        if name:
            info(f"Deployment {name}:")
            print(catalog.describe_deployment(catalog.get_deployment(project, name)))


def cmd_index(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT")
    with build_project_client(settings) as project:
        index = catalog.create_search_index(
            project,
            name=settings.index_name,
            version=settings.index_version,
            connection_name=settings.ai_search_connection_name,
            index_name=settings.ai_search_index_name,
        )
    ok(f"Index created: {getattr(index, 'id', '')}")
    info(f"Index name: {index.name}")
    info(f"Index version: {index.version}")


def cmd_sweep(args: argparse.Namespace, settings: Settings) -> None:
    settings.require("AZURE_AI_ENDPOINT")
    with build_project_client(settings) as project:
        report = sweep_orphans(project.agents)
    if not report:
        ok("No orphaned sessions recorded.")
        return
    for session_id, failures in report.items():
        if failures:
            warn(f"{session_id}: {len(failures)} resource(s) could not be deleted")
        else:
            ok(f"{session_id}: cleaned up")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Azure AI Foundry getting-started samples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              python3 run_sample.py agent
              python3 run_sample.py agent -q "What is the capital of France?"
              python3 run_sample.py file-search --track
              python3 run_sample.py chat -m "Write me a haiku about rivers"
              python3 run_sample.py langchain
              python3 run_sample.py deployments --name gpt-4o
        """),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("agent", help="Simple agent conversation")
    p.add_argument("-q", "--question", action="append", help="Question to ask (repeatable)")
    p.add_argument("--instructions", default=None, help="Override the agent instructions")
    p.add_argument("--track", action="store_true", help="Record owned resources in Redis")
    p.set_defaults(func=cmd_agent)

    p = sub.add_parser("file-search", help="Agent with file search over uploaded documents")
    p.add_argument("-f", "--file", action="append", help="Document to upload (repeatable)")
    p.add_argument("-q", "--question", action="append", help="Question to ask (repeatable)")
    p.add_argument("--track", action="store_true", help="Record owned resources in Redis")
    p.set_defaults(func=cmd_file_search)

    p = sub.add_parser("chat", help="One chat completion against MODEL_DEPLOYMENT_NAME")
    p.add_argument("-m", "--message", default=CHAT_USER_PROMPT, help="User message")
    p.add_argument("--system", default=CHAT_SYSTEM_PROMPT, help="System prompt")
    p.set_defaults(func=cmd_chat)

    p = sub.add_parser("langchain", help="LangChain model with project tools bound")
    p.add_argument("-q", "--question", action="append", help="Question for the assistant (repeatable)")
    p.set_defaults(func=cmd_langchain)

    p = sub.add_parser("connections", help="List or show project connections")
    p.add_argument("--name", default=None, help="Connection name (default: CONNECTION_NAME)")
    p.set_defaults(func=cmd_connections)

    p = sub.add_parser("deployments", help="List or show model deployments")
    p.add_argument("--name", default=None, help="Show only this deployment (default: list all, then DEPLOYMENT_NAME)")
    p.set_defaults(func=cmd_deployments)

    p = sub.add_parser("index", help="Create an Azure AI Search project index")
    p.set_defaults(func=cmd_index)

    p = sub.add_parser("sweep", help="Delete resources recorded by crashed sessions")
    p.set_defaults(func=cmd_sweep)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        fail(str(exc))
    configure_structlog(settings.log_level, settings.log_format, sample=args.command)

    if args.command == "connections" and not args.name:
        args.name = settings.connection_name

    try:
        args.func(args, settings)
    except ConfigurationError as exc:
        fail(f"{exc}. Set it in your environment or .env file.")
    except (AzureError, OpenAIError) as exc:
        _log.error("request_failed", command=args.command, error=str(exc), exc_info=True)
        fail(f"{args.command} failed: {exc}")
