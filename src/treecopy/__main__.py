"""Entry point: python -m treecopy"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from treecopy.engine import copy
from treecopy.infrastructure.config import ConfigError, CopyDefaults
from treecopy.infrastructure.logger import install_exception_hooks
from treecopy.options import parse_options
from treecopy.plan import read_plan, run_plan


def run_copy(argv: list[str], defaults: CopyDefaults) -> int:
    parser = argparse.ArgumentParser(prog="treecopy", description="Copy files and directory trees")
    parser.add_argument("-r", "-R", dest="recursive", action="store_true", help="Copy directories recursively")
    parser.add_argument("-f", dest="force", action="store_true", help="Overwrite existing files (default)")
    parser.add_argument("-n", dest="no_clobber", action="store_true", help="Never overwrite existing files")
    parser.add_argument("-p", dest="preserve", action="store_true", help="Preserve timestamps")
    parser.add_argument("--continue-on-error", action="store_true", default=None, help="Log failures and keep copying")
    parser.add_argument("--retry-count", type=int, default=None, help="Extra attempts per failed operation")
    parser.add_argument("source")
    parser.add_argument("destination")
    args = parser.parse_args(argv)

    selected = {"r": args.recursive, "f": args.force, "n": args.no_clobber, "p": args.preserve}
    flags = [f"-{letter}" for letter, on in selected.items() if on]
    try:
        options = parse_options(flags, args.continue_on_error, args.retry_count, defaults=defaults)
    except ValueError as err:
        parser.error(str(err))

    outcome = copy(args.source, args.destination, options, retry_delay=defaults.retry_delay)
    print(json.dumps(outcome.model_dump(mode="json"), indent=2))
    if not outcome.success:
        if outcome.error is not None:
            print(f"treecopy: {outcome.error.message}", file=sys.stderr)
        return 1
    return 0


def run_plan_command(argv: list[str], defaults: CopyDefaults) -> int:
    parser = argparse.ArgumentParser(prog="treecopy plan", description="Run the copy steps listed in a YAML plan")
    parser.add_argument("plan", type=Path, help="Path to the plan file")
    parser.add_argument("--base-dir", type=Path, default=None, help="Directory relative step paths start from")
    args = parser.parse_args(argv)

    try:
        plan = read_plan(args.plan)
    except (FileNotFoundError, ValueError) as err:
        print(f"treecopy: {err}", file=sys.stderr)
        return 1

    result = run_plan(plan, base_dir=args.base_dir, defaults=defaults)
    print(json.dumps(result.model_dump(mode="json"), indent=2))
    if not result.success:
        print(f"treecopy: {result.error}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        defaults = CopyDefaults.from_env()
    except ConfigError as err:
        print(f"treecopy: {err}", file=sys.stderr)
        return 1
    if argv and argv[0] == "plan":
        return run_plan_command(argv[1:], defaults)
    return run_copy(argv, defaults)


def run() -> None:
    install_exception_hooks()
    sys.exit(main())


if __name__ == "__main__":
    run()
