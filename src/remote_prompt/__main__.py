"""Entry point for the remote-prompt CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib


def load_questions(path: Path) -> list[dict[str, Any]]:
    """Read static question definitions from a JSON or TOML file.

    JSON files hold a list of question objects; TOML files hold a
    ``[[questions]]`` array of tables.
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".toml":
        data = tomllib.loads(text).get("questions", [])
    else:
        data = json.loads(text)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(q, dict) for q in data):
        raise ValueError(f"{path} must contain a list of question objects")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="remote-prompt",
        description="Ask questions in the terminal or through a remote UI peer",
    )
    parser.add_argument("--log-dir", type=Path, help="Write JSON logs to this directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Ask the questions defined in a file")
    ask.add_argument("questions", type=Path, help="JSON or TOML question file")
    ask.add_argument("--socket", action="store_true", default=None, help="Forward questions to the peer")
    ask.add_argument("--host", help="Peer host")
    ask.add_argument("--port", type=int, help="Peer port")
    ask.add_argument("--bundle", action="store_true", default=None, help="Send questions in bundles")
    ask.add_argument("--json", action="store_true", help="Print answers as JSON")

    message = sub.add_parser("message", help="Send a one-shot message to the peer")
    message.add_argument("--type", "-t", required=True, help="Message type")
    message.add_argument("--code", "-c", default="", help="Message code")
    message.add_argument("--message", "-m", default="", help="Message text")
    message.add_argument("--host", help="Peer host")
    message.add_argument("--port", type=int, help="Peer port")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from remote_prompt.config import SessionConfig
    from remote_prompt.errors import PromptError
    from remote_prompt.log import setup_logging
    from remote_prompt.ui.console import Console

    setup_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)
    console = Console()

    if args.command == "ask":
        options = {"socket": args.socket, "host": args.host, "port": args.port, "bundle": args.bundle}
    else:
        options = {
            "type": args.type, "code": args.code, "message": args.message,
            "host": args.host, "port": args.port,
        }
    config = SessionConfig.load(workspace=Path.cwd(), options=options)

    try:
        if args.command == "ask":
            asyncio.run(_run_ask(console, config, args.questions, args.json))
        else:
            asyncio.run(_run_message(console, config))
    except (PromptError, ValueError, OSError) as e:
        console.print_error(str(e))
        return 1
    except KeyboardInterrupt:
        console.print_info("Cancelled.")
        return 130
    return 0


async def _run_ask(console, config, path: Path, as_json: bool):
    from remote_prompt.facade import prompt

    questions = load_questions(path)
    if config.socket:
        console.print_target(config.host, config.port, config.bundle)
    answers = await prompt(questions, config)
    if as_json:
        console.print_json(dict(answers))
    else:
        console.print_answers(answers)


async def _run_message(console, config):
    from remote_prompt.facade import socket_message

    await socket_message(config)
    console.print_success(f"Sent {config.message_type} message to {config.host}:{config.port}")


if __name__ == "__main__":
    sys.exit(main())
