from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

from .config import ConverterCfg, load_config
from .engine import run_convert
from .errors import DocConvUserError, UsageError
from .report import dumps
from .version import tool_version


class _ArgumentParser(argparse.ArgumentParser):
    """argparse reports problems through UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="docconv",
        description="Rewrite {@@ ... } documentation blocks as /// <summary>/<param>/<returns> comments",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("source", type=Path, help="source text file")
    p.add_argument("destination", type=Path, help="destination text file (created or overwritten)")
    p.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="YAML file overriding markers, sentinels, tags and policies",
    )
    p.add_argument(
        "--report",
        action="store_true",
        help="print a JSON report of the run to stdout",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="debug logging to stderr",
    )
    return p


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("docconv")
    level = logging.DEBUG if verbose or os.environ.get("DOCCONV_DEBUG") else logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)
        log.propagate = False


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        ns = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        sys.stderr.write(f"{parser.prog}: error: {e}\n")
        return 1

    _setup_logging(ns.verbose)

    try:
        cfg = load_config(ns.config) if ns.config is not None else ConverterCfg()
        report = run_convert(ns.source, ns.destination, cfg)
    except DocConvUserError as e:
        # Errors go to stdout as "<class>: <message>"
        sys.stdout.write(f"{type(e).__name__}: {str(e).rstrip()}\n")
        return 2

    if ns.report:
        sys.stdout.write(dumps(report.model_dump(by_alias=True)) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
