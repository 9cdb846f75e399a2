"""
Command-line entrypoint.

  todolist migrate          apply alembic migrations
  todolist serve            migrate, then run the API under uvicorn
  todolist tasks            print the task list through the client view
"""

import argparse
import asyncio
import logging

import httpx
import uvicorn

from todolist.client.api import TaskApiClient
from todolist.client.view import TaskFilter, TaskListView
from todolist.core.config import get_settings
from todolist.core.logging_setup import setup_logging
from todolist.migrations import upgrade_database

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todolist")
    sub = parser.add_subparsers(dest="command", required=True)

    migrate = sub.add_parser("migrate", help="apply database migrations")
    migrate.add_argument("--revision", default="head")

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument(
        "--skip-migrations",
        action="store_true",
        help="assume the schema is already up to date",
    )

    tasks = sub.add_parser("tasks", help="list tasks from a running API")
    tasks.add_argument("--api-url", default="http://127.0.0.1:8000/api/task")
    tasks.add_argument(
        "--filter",
        choices=[f.value for f in TaskFilter],
        default=TaskFilter.ALL.value,
    )
    return parser


async def _print_tasks(
    api_url: str, task_filter: str, http: httpx.AsyncClient | None = None
) -> int:
    async with TaskApiClient(api_url, client=http) as api:
        view = TaskListView(api)
        await view.load()

    if view.error:
        print(f"Error: {view.error}")
        return 1

    view.set_filter(task_filter)
    if not view.tasks:
        print("No tasks")
    elif not view.visible_tasks:
        print("No tasks match the current filter.")
    for task in view.visible_tasks:
        mark = "x" if task.is_completed else " "
        print(f"[{mark}] {task.title}  ({task.id})")
        if task.description:
            print(f"      {task.description}")
    print(view.items_left_label)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "migrate":
        upgrade_database(revision=args.revision)
        return 0

    if args.command == "serve":
        if not args.skip_migrations:
            upgrade_database()
        logger.info("Starting API on %s:%s", args.host, args.port)
        uvicorn.run(
            "todolist.main:app", host=args.host, port=args.port, log_config=None
        )
        return 0

    return asyncio.run(_print_tasks(args.api_url, args.filter))


if __name__ == "__main__":
    raise SystemExit(main())
