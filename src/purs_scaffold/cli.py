"""Command-line entry points.

``create-purs-project [--build] [--template=<name>] <target-directory>``
creates a project; ``purs-scaffold-pack`` builds or removes the template
archives served to remote installs.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

from purs_scaffold.archive import clean_archives, pack_all, pack_template
from purs_scaffold.config import ProvisionOptions, ScaffoldConfig
from purs_scaffold.engine import Provisioner
from purs_scaffold.errors import ScaffoldError, UsageError
from purs_scaffold.manifest import list_templates
from purs_scaffold.utils import format_duration, print_error, print_success, print_summary_table

PROG = "create-purs-project"
USAGE = f"{PROG} [--build] [--template=<name>] <target-directory>"


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises ``UsageError`` instead of exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> _Parser:
    parser = _Parser(
        prog=PROG,
        usage=USAGE,
        description="Create a new PureScript project on Deno from a template.",
        allow_abbrev=False,
    )
    parser.add_argument("target", nargs="*", help="Directory to create the project in")
    parser.add_argument(
        "--template",
        default="server",
        help="Template to use (default: server)",
    )
    parser.add_argument(
        "--build",
        action="store_true",
        help="Run 'npm install' and 'npm run build' in the new project",
    )
    return parser


def parse_args(argv: list[str]) -> tuple[str, ProvisionOptions]:
    """Parse CLI arguments into a target and provisioning options.

    Raises:
        UsageError: Unknown flag, missing target, or more than one target.
    """
    parser = _build_parser()
    args, unknown = parser.parse_known_intermixed_args(argv)
    if unknown:
        raise UsageError(f"Unknown argument: {unknown[0]}")
    if not args.target:
        raise UsageError("Target directory is required")
    if len(args.target) > 1:
        raise UsageError("Too many arguments")
    return args.target[0], ProvisionOptions(template=args.template, build=args.build)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-purs-project``."""
    argv = sys.argv[1:] if argv is None else argv

    try:
        target, options = parse_args(argv)
    except UsageError as exc:
        print_error(f"Error: {exc}")
        print_error(f"Usage: {USAGE}")
        sys.exit(1)

    config = ScaffoldConfig.from_env()
    provisioner = Provisioner(config, cwd=Path.cwd())

    try:
        result = asyncio.run(provisioner.provision(target, options))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_summary_table(
        {
            "Template": result.template,
            "Target": str(result.target),
            "Source": result.context.value,
            "Entries": str(len(result.files)),
            "Build": ("ok" if result.build_ok else "failed") if result.built else "skipped",
            "Duration": format_duration(result.duration_s),
        },
        title="Project created",
    )
    print_success(f"Created {result.template} project in {result.target}")


def pack_main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``purs-scaffold-pack``."""
    parser = argparse.ArgumentParser(
        prog="purs-scaffold-pack",
        description="Zip templates for publishing, or remove the zips again.",
    )
    parser.add_argument(
        "templates",
        nargs="*",
        help="Templates to pack (default: all)",
    )
    parser.add_argument(
        "--templates-dir",
        type=Path,
        default=None,
        help="Template store (default: the bundled templates)",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Remove template zips instead of creating them",
    )
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    templates_dir = args.templates_dir or ScaffoldConfig.from_env().templates_dir

    try:
        if args.clean:
            clean_archives(templates_dir)
            return
        if args.templates:
            for name in args.templates:
                pack_template(templates_dir, name)
        else:
            pack_all(templates_dir)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        available = ", ".join(list_templates(templates_dir)) or "none"
        print_error(f"Available templates: {available}")
        sys.exit(1)


if __name__ == "__main__":
    main()
