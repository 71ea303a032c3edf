"""Ask a single question from the command line and print the answer.

    keyresponder "Delete File" -r y="delete the file" -r n="leave it" --default y
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .errors import ConfigError
from .log import setup_logging
from .responder import RespOpt, new, set_default, set_indents, set_max_reprompts


def _parse_response(value: str) -> tuple[str, str]:
    key, sep, desc = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected CHAR=DESCRIPTION, got {value!r}")
    return key, desc


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="keyresponder", description="Prompt for a single keypress answer.")
    p.add_argument("prompt")
    p.add_argument(
        "-r",
        "--response",
        dest="responses",
        action="append",
        type=_parse_response,
        default=[],
        metavar="CHAR=DESCRIPTION",
    )
    p.add_argument("--default")
    p.add_argument("--max-reprompts", type=int)
    p.add_argument("--indent-first", type=int)
    p.add_argument("--indent", type=int)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    setup_logging(
        level=getattr(logging, args.log_level),
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
    )

    responses: Dict[str, str] = dict(args.responses)

    opts: List[RespOpt] = []
    if args.default is not None:
        opts.append(set_default(args.default))
    if args.max_reprompts is not None:
        opts.append(set_max_reprompts(args.max_reprompts))
    if args.indent_first is not None or args.indent is not None:
        indent = args.indent if args.indent is not None else 0
        indent_first = args.indent_first if args.indent_first is not None else indent
        opts.append(set_indents(indent_first, indent))

    try:
        r = new(args.prompt, responses, *opts)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    resp = r.get_response_or_die()
    print()
    print(resp)
    return 0
