"""Command-line front door for slashline.

Parses CLI options, merges them over the persisted config, and starts the demo
REPL on the controlling terminal.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .completion import DEFAULT_TRIGGER
from .quick_search import QuickSearchConfig
from .runtime import run_repl
from .runtime.app import ReplApp
from .runtime.config import (
    load_commands,
    load_config,
    load_quick_search_config,
    load_theme_name,
    load_trigger,
)
from .ui_theme import available_theme_names, resolve_theme


def _non_negative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _trigger_char(value: str) -> str:
    if len(value) != 1 or not value.isprintable() or value.isspace():
        raise argparse.ArgumentTypeError("trigger must be a single printable character")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terminal prompt with inline quick-search over slash commands."
    )
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        help="Maximum number of command rows shown at once (0 shows all).",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="Match command labels case-sensitively.",
    )
    parser.add_argument(
        "--no-force-match",
        action="store_true",
        help="Accept query keystrokes that leave no matching command.",
    )
    parser.add_argument(
        "--trigger",
        type=_trigger_char,
        default=None,
        help=f"Character that opens command search (default: {DEFAULT_TRIGGER}).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", metavar="PATH", help="Write debug logs to PATH.")
    return parser


def resolve_quick_search_config(args: argparse.Namespace, data: dict[str, object]) -> QuickSearchConfig:
    """Apply command-line overrides on top of persisted quick-search settings."""
    base = load_quick_search_config(data)
    return QuickSearchConfig(
        case_sensitive=base.case_sensitive if args.case_sensitive is None else True,
        limit=base.limit if args.limit is None else args.limit,
        force_matching_query=False if args.no_force_match else base.force_matching_query,
        clear_query_chars=base.clear_query_chars,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the REPL on stdin/stdout."""
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    data = load_config()
    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    theme = resolve_theme(args.theme or load_theme_name(data), no_color=no_color)
    app = ReplApp(
        load_commands(data),
        trigger=args.trigger or load_trigger(DEFAULT_TRIGGER, data),
        config=resolve_quick_search_config(args, data),
        theme=theme,
    )
    run_repl(app, sys.stdin.fileno(), sys.stdout.fileno())


if __name__ == "__main__":
    main()
