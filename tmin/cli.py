from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .config import load_job
from .engine import run_job
from .errors import TminUserError
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tmin",
        description="Syntax-tree based test case minimizer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level for diagnostics (written to stderr)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_run = sub.add_parser("run", help="minimize the files of a job")
    sp_run.add_argument("job", type=Path, help="job file (YAML)")
    sp_run.add_argument(
        "--json",
        action="store_true",
        help="print a JSON report to stdout; progress goes to stderr",
    )

    sp_list = sub.add_parser("list", help="list available components (JSON)")
    sp_list.add_argument("what", choices=["languages", "strategies", "invariants"], help="what to list")

    return p


def _setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format="[%(levelname)s] %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.log_level)

    try:
        if ns.cmd == "run":
            job = load_job(ns.job)
            if ns.json:
                report = run_job(job, out=sys.stderr)
                sys.stdout.write(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n")
            else:
                run_job(job, out=sys.stdout)
            return 0

        if ns.cmd == "list":
            data: Dict[str, Any]
            if ns.what == "languages":
                from .lang import list_languages
                data = {"languages": list_languages()}
            elif ns.what == "strategies":
                from .strategies import list_strategies
                data = {"strategies": list_strategies()}
            else:
                from .invariants import list_invariants
                data = {"invariants": list_invariants()}
            sys.stdout.write(json.dumps(data, ensure_ascii=False) + "\n")
            return 0

    except TminUserError as e:
        sys.stderr.write(f"Error: {str(e).rstrip()}\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
