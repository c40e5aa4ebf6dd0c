#!/usr/bin/env python3
"""
evalr.py — Evalr CLI.

Runs the expression engine locally; no API server needed.

Subcommands:
    eval     — evaluate an expression (optionally with --var bindings)
    vars     — list the variables an expression references
    postfix  — print the postfix (RPN) form without evaluating

Usage:
    python evalr.py eval "2 + 3 * 4"
    python evalr.py eval "x^2 + y" --var x=5 --var y=3
    python evalr.py eval "5 > 3 and 2 < 4" --json
    echo "a + b * c" | python evalr.py vars
    python evalr.py postfix "2^3^2"
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.expression_engine import ShuntingYardEngine
from config import Settings
from contracts import EvalrError, EvaluationResult, format_number


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    _console().print(table)


def _parse_binding(raw: str) -> tuple[str, float]:
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"value of {name!r} is not a number: {value!r}"
        ) from None


def _read_expression(args: argparse.Namespace) -> str:
    expression = args.expression or sys.stdin.read().strip()
    if not expression:
        print("Error: pass an expression as an argument or on stdin", file=sys.stderr)
        sys.exit(1)
    return expression


def _engine() -> ShuntingYardEngine:
    return ShuntingYardEngine(epsilon=Settings().epsilon)


def _print_result(result: EvaluationResult) -> None:
    rows: list[tuple[str, Any]] = [
        ("expression", result.original_expression),
        ("postfix", result.postfix_notation),
        ("value", result.display_value),
        ("boolean", result.is_boolean_expression),
    ]
    for name, value in result.variables.items():
        rows.append((f"var {name}", format_number(value)))
    _print_kv_table("Result", rows)


# -- subcommands -----------------------------------------------------------

def _eval(args: argparse.Namespace) -> None:
    expression = _read_expression(args)
    bindings = dict(args.var or [])
    result = _engine().evaluate(expression, bindings)
    if args.json:
        payload = result.model_dump()
        payload["display_value"] = result.display_value
        print(json.dumps(payload, ensure_ascii=False))
    else:
        _print_result(result)


def _vars(args: argparse.Namespace) -> None:
    names = _engine().extract_variables(_read_expression(args))
    if args.json:
        print(json.dumps(names))
    elif names:
        for name in names:
            print(name)
    else:
        print("(no variables)")


def _postfix(args: argparse.Namespace) -> None:
    tokens = _engine().to_postfix(_read_expression(args))
    print(" ".join(t.text for t in tokens))


# -- main ------------------------------------------------------------------

def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="evalr",
        description="Evalr — evaluate arithmetic and boolean expressions",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Evaluate an expression")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")
    p.add_argument("--var", "-v", action="append", type=_parse_binding,
                   metavar="NAME=VALUE", help="Variable binding (repeatable)")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")

    # vars
    p = sub.add_parser("vars", help="List variables referenced by an expression")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")
    p.add_argument("--json", action="store_true", help="Print the names as a JSON list")

    # postfix
    p = sub.add_parser("postfix", help="Print the postfix (RPN) form")
    p.add_argument("expression", nargs="?", help="Expression (or stdin)")

    args = parser.parse_args(argv)

    commands = {
        "eval":    _eval,
        "vars":    _vars,
        "postfix": _postfix,
    }

    try:
        commands[args.command](args)
    except EvalrError as exc:
        print(f"{exc.kind.value}: {exc.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
