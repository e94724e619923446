from __future__ import annotations

import argparse
import logging
import os
import subprocess
from pathlib import Path

from envplus.environ import ProcessEnvironment
from envplus.errors import MalformedLineError, ProfileError
from envplus.loader import EnvLoader, load_file
from envplus.logging import configure_logging
from envplus.profile import load_profile

logger = logging.getLogger("envplus.cli")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--profile", type=Path, default=None, help="YAML loader profile; flags below override it.")
    shared.add_argument("--file", type=Path, default=None, help="File to load (default: .env_plus).")
    shared.add_argument("--comment", default=None, help="Comment marker (default: //).")
    shared.add_argument("--delimiter", default=None, help="Key/value delimiter (default: =).")
    shared.add_argument(
        "--overwrite",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Replace variables that are already set.",
    )

    p = argparse.ArgumentParser(prog="envplus", description="Load key/value files into environment variables.")
    p.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for messages on stderr.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("check", parents=[shared], help="Parse the file without touching the environment.")
    sub.add_parser("export", parents=[shared], help="Print the KEY=VALUE pairs a load would set.")
    run = sub.add_parser("run", parents=[shared], help="Load the file, then run a command with the result.")
    run.add_argument("command", nargs=argparse.REMAINDER, help="Command to run, after --.")

    return p.parse_args(argv)


def _build_loader(args: argparse.Namespace) -> EnvLoader:
    loader = load_profile(args.profile) if args.profile else EnvLoader.create()
    if args.file is not None:
        loader = loader.with_file(args.file)
    if args.comment is not None:
        loader = loader.with_comment(args.comment)
    if args.delimiter is not None:
        loader = loader.with_delimiter(args.delimiter)
    if args.overwrite is not None:
        loader = loader.with_overwrite(args.overwrite)
    return loader


def _check(loader: EnvLoader) -> int:
    # Dry runs use a plain dict under the same name rules as os.environ.
    values: dict[str, str] = {}
    if not load_file(loader, ProcessEnvironment(values)):
        return 1
    print(f"{loader.file}: {len(values)} entries OK")
    return 0


def _export(loader: EnvLoader) -> int:
    before = dict(os.environ)
    values = dict(before)
    if not load_file(loader, ProcessEnvironment(values)):
        return 1
    for key, value in values.items():
        if key not in before or before[key] != value:
            print(f"{key}={value}")
    return 0


def _run(loader: EnvLoader, command: list[str]) -> int:
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        logger.error("no command given")
        return 2

    # A missing file is not fatal: the command runs with the environment as is.
    loader.activate(ProcessEnvironment())
    try:
        return subprocess.run(command).returncode
    except FileNotFoundError:
        logger.error("command not found: %s", command[0])
        return 127


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    try:
        loader = _build_loader(args)
    except (ProfileError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    try:
        if args.cmd == "check":
            return _check(loader)
        if args.cmd == "export":
            return _export(loader)
        if args.cmd == "run":
            return _run(loader, args.command)
    except MalformedLineError as exc:
        logger.error("%s: %s", loader.file, exc)
        return 2

    raise RuntimeError(f"unhandled cmd={args.cmd!r}")
