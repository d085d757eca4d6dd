"""
Command-line interface for cotflow.
"""

import argparse
import asyncio
import json
import os
import sys

from cotflow.config.exceptions import AgentError
from cotflow.config.settings import settings
from cotflow.utils.logging import configure_logging


def _parse_parameters(pairs: list[str]) -> dict[str, str]:
    parameters = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected key=value, got: {pair}")
        parameters[key] = value
    return parameters


async def _run_agent(agent_id: str, parameters: dict[str, str]) -> int:
    from cotflow.api.app import _build_from_settings

    executor, resources = _build_from_settings(settings)
    try:
        result = await executor.execute(agent_id, parameters)
    except AgentError as e:
        print(f"{type(e).__name__}: {e.message}", file=sys.stderr)
        return 1
    finally:
        for resource in resources:
            await resource.close()
    print(json.dumps(result.model_dump(exclude_none=True)["blocks"], indent=2, ensure_ascii=False))
    return 0


def main():
    parser = argparse.ArgumentParser(description="cotflow - agent orchestration core")
    parser.add_argument(
        "--agents-dir",
        default=None,
        help="Directory of agent definition YAML files (default: COTFLOW_AGENTS_DIR)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Start the HTTP API (default)")
    serve.add_argument(
        "--host",
        default=settings.api_host,
        help=f"Host to bind to (default: {settings.api_host})",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"Port to bind to (default: {settings.api_port})",
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    serve.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)",
    )

    run = subparsers.add_parser("run", help="Execute one agent and print its output")
    run.add_argument("agent_id", help="Agent definition id")
    run.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Agent parameter, repeatable",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.agents_dir:
        # uvicorn builds the app in its own import; the environment carries the setting.
        os.environ["COTFLOW_AGENTS_DIR"] = args.agents_dir
        settings.agents_dir = args.agents_dir

    if args.command == "run":
        try:
            parameters = _parse_parameters(args.param)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
        sys.exit(asyncio.run(_run_agent(args.agent_id, parameters)))

    from cotflow.api import start_server

    kwargs = {}
    if getattr(args, "workers", 1) > 1:
        kwargs["workers"] = args.workers

    try:
        start_server(
            host=getattr(args, "host", settings.api_host),
            port=getattr(args, "port", settings.api_port),
            reload=getattr(args, "reload", False),
            **kwargs,
        )
    except KeyboardInterrupt:
        print("\nShutting down cotflow server...")
        sys.exit(0)


if __name__ == "__main__":
    main()
