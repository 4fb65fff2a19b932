from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

from agentdeck.adapters.container.app_container import AppContainer
from agentdeck.app.agent_context import build_agent_task
from agentdeck.app.agent_selector import filter_agents
from agentdeck.core.sandbox import describe_sandbox_policy


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agentdeck")
    parser.add_argument("--config", type=str, default=None, help="Optional agentdeck.toml path.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("agents", help="List resolved agents.")
    show = subparsers.add_parser("show", help="Show one agent and its overrides.")
    show.add_argument("name")
    subparsers.add_parser("prompts", help="List discovered prompt documents.")
    select = subparsers.add_parser("select", help="Filter agents the way the agent picker does.")
    select.add_argument("query", nargs="?", default="agent")
    task = subparsers.add_parser("task", help="Print the prompt an agent would run a task with.")
    task.add_argument("name")
    task.add_argument("text", help="Task text. Use '-' to read stdin.")
    return parser


async def run(*, command: str, args: argparse.Namespace, console: Console) -> int:
    AppContainer.configure(Path(args.config).expanduser() if args.config else None)
    registry = AppContainer.get_agent_registry()

    if command == "agents":
        table = Table("name", "description", "built-in")
        for summary in registry.summaries():
            table.add_row(summary.name, summary.description, "yes" if summary.is_builtin else "")
        console.print(table)
    elif command == "show":
        config = registry.get(args.name)
        if config is None:
            console.print(f"[red]unknown agent: {args.name}[/]")
            return 1
        policy = registry.permissions_policy(args.name)
        effort = registry.reasoning_effort_override(args.name)
        console.print(f"[bold]{args.name}[/]")
        console.print(f"model: {registry.model_override(args.name) or 'inherit'}")
        console.print(f"reasoning_effort: {effort.value if effort is not None else 'inherit'}")
        console.print(f"permissions: {describe_sandbox_policy(policy) if policy is not None else 'inherit'}")
        console.print(f"tools: {', '.join(config.tools) if config.tools is not None else 'inherit'}")
        console.print("")
        console.print(registry.system_prompt(args.name), markup=False)
    elif command == "prompts":
        catalog = await AppContainer.initialize_prompts()
        table = Table("name", "path")
        for prompt in catalog.all():
            table.add_row(prompt.name, str(prompt.path))
        console.print(table)
    elif command == "select":
        table = Table("name", "description")
        for match in filter_agents(args.query, registry.summaries()):
            table.add_row(match.name, match.description)
        console.print(table)
    elif command == "task":
        text = sys.stdin.read() if args.text == "-" else args.text
        agent_task = build_agent_task(registry, args.name, text.strip())
        console.print(agent_task.prompt, markup=False)

    for diagnostic in registry.diagnostics:
        AppContainer.get_logger().debug(
            "agent load diagnostic",
            extra={"kind": diagnostic.kind, "source": str(diagnostic.source), "detail": diagnostic.message},
        )
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    console = Console()
    try:
        exit_code = asyncio.run(run(command=args.command, args=args, console=console))
    except KeyboardInterrupt:
        return
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
