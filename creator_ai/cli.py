from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from loguru import logger

from creator_ai.config import load_config
from creator_ai.config.loader import masked_env_snapshot
from creator_ai.errors import CreatorAIError
from creator_ai.llm.endpoints import active_endpoint
from creator_ai.orchestrator.service import WritingAssistant
from creator_ai.storage.app_state import AppStateStore
from creator_ai.storage.chapters import crud as chapters_crud
from creator_ai.storage.llm_settings import crud as llm_settings_crud
from creator_ai.storage.project import init_project
from creator_ai.storage.sessions import crud as sessions_crud
from creator_ai.utils.logging import setup_logging

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="creator-ai")
    parser.add_argument("--config", type=Path, default=None, help="Path to custom config YAML")
    parser.add_argument("--profile", type=str, default=None, help="Config profile name")
    parser.add_argument("--state-dir", type=Path, default=None, help="Override app state directory")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Validate and print effective config")

    init_parser = subparsers.add_parser("init", help="Create or complete a project directory")
    init_parser.add_argument("project", type=Path, nargs="?", default=None, help="Project directory")

    chapters_parser = subparsers.add_parser("chapters", help="List chapters of a project")
    chapters_parser.add_argument("project", type=Path, help="Project directory")

    new_chapter_parser = subparsers.add_parser("new-chapter", help="Append a new empty chapter")
    new_chapter_parser.add_argument("project", type=Path, help="Project directory")
    new_chapter_parser.add_argument("title", type=str, help="Chapter title")

    models_parser = subparsers.add_parser("models", help="List models offered by the active endpoint")
    models_parser.add_argument("project", type=Path, help="Project directory")

    continue_parser = subparsers.add_parser("continue", help="Generate a continuation for a chapter")
    continue_parser.add_argument("project", type=Path, help="Project directory")
    continue_parser.add_argument("chapter_id", type=int, help="Chapter id")
    continue_parser.add_argument("--instruction", type=str, default="", help="Free-text instruction")
    continue_parser.add_argument(
        "--apply",
        choices=["append", "replace"],
        default=None,
        help="Write the generated text into the chapter and log its summary",
    )

    discuss_parser = subparsers.add_parser("discuss", help="Send a message to a chat session")
    discuss_parser.add_argument("project", type=Path, help="Project directory")
    discuss_parser.add_argument("message", type=str, help="Message text")
    discuss_parser.add_argument("--session", type=str, default=None, help="Session id (new session if absent)")

    return parser


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.state_dir:
        overrides["app"] = {"state_dir": str(args.state_dir)}
    return overrides


def _print_config(config) -> None:
    env_snapshot = masked_env_snapshot(config)
    console.print(Panel(Pretty(config.model_dump(mode="json")), title="Effective Config"))
    console.print(Panel(Pretty(env_snapshot), title="Env Snapshot"))


async def _run_command(args: argparse.Namespace, config) -> None:
    language = config.app.language
    app_state = AppStateStore(config.app.state_dir)

    if args.command == "config":
        _print_config(config)
        return

    if args.command == "init":
        project_dir = args.project or app_state.default_project_dir()
        info = init_project(project_dir, language=language)
        app_state.update(last_project_dir=info.project_dir)
        console.print(Panel(f"{info.project_name} ready at {info.project_dir}", title="Project"))
        return

    if args.command == "chapters":
        table = Table(title="Chapters", show_header=True, header_style="bold")
        table.add_column("ID")
        table.add_column("Title")
        for entry in chapters_crud.list_chapters(args.project):
            table.add_row(str(entry.id), entry.title)
        console.print(table)
        return

    if args.command == "new-chapter":
        entry = chapters_crud.create_chapter(args.project, args.title)
        app_state.update(last_project_dir=str(args.project), last_chapter_id=entry.id)
        console.print(Panel(f"Created chapter {entry.id}: {entry.title}", title="Chapter"))
        return

    assistant = WritingAssistant.from_config(config)

    if args.command == "models":
        endpoint = active_endpoint(llm_settings_crud.load_llm_config(args.project))
        models = await assistant.client.fetch_models(endpoint.base_url, endpoint.id)
        table = Table(title=f"Models ({endpoint.name})", show_header=True, header_style="bold")
        table.add_column("Model")
        for model in models:
            table.add_row(model)
        console.print(table)
        return

    if args.command == "continue":
        result = await assistant.continue_chapter(args.project, args.chapter_id, args.instruction)
        app_state.update(last_project_dir=str(args.project), last_chapter_id=args.chapter_id)
        console.print(Panel(result.content, title="Generated"))
        console.print(Panel(result.summary or "(none)", title="Summary"))
        if result.raw is not None:
            console.print(Panel("Reply was not in the expected JSON format.", title="Notice"))
        if args.apply:
            chapter = assistant.apply_generation(args.project, args.chapter_id, result, mode=args.apply)
            console.print(Panel(f"Chapter {chapter.id} saved ({len(chapter.content)} chars)", title="Applied"))
        return

    if args.command == "discuss":
        session_id = args.session
        if session_id is None:
            session_id = sessions_crud.create_chat_session(args.project, language=language).id
        reply = await assistant.discuss(args.project, session_id, args.message)
        app_state.update(last_project_dir=str(args.project), last_session_id=session_id)
        console.print(Panel(reply.content, title=f"Assistant ({session_id})"))
        return

    raise ValueError(f"Unsupported command: {args.command}")


async def _main_async() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    config = load_config(
        config_path=args.config,
        profile=args.profile,
        overrides=_build_overrides(args),
    )

    setup_logging(config.app.log_level)
    logger.info("Loaded configuration")

    try:
        await _run_command(args, config)
    except CreatorAIError as exc:
        console.print(Panel(exc.message, title="Error", style="red"))
        return 1
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(_main_async()))


if __name__ == "__main__":
    main()
