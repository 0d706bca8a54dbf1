"""CLI entrypoints for sigaudit commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .auditor import Auditor
from .config import ConfigError, load_config
from .diagnostics import Reporter
from .fetch import build_fetcher
from .logging import configure_logging, get_logger
from .sigs import SigsError, find_sigs_yaml, load_context

_LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigaudit",
        description="Audit sigs.yaml and the OWNERS files it references.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level log of the run to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    audit_parser = subparsers.add_parser(
        "audit",
        help="ensure OWNERS, OWNERS_ALIASES and sigs.yaml have the correct data structure",
    )
    _add_verbose_option(audit_parser, suppress_default=True)
    audit_parser.add_argument(
        "names",
        nargs="+",
        metavar="name|all",
        help="Group name or directory substrings to audit, or 'all'.",
    )
    audit_parser.add_argument(
        "--kubernetes-directory",
        default=None,
        help="Path to the kubernetes directory (defaults to $GOPATH/src/k8s.io/kubernetes).",
    )
    audit_parser.add_argument(
        "--sigs-file",
        default=None,
        help="Path to sigs.yaml (defaults to the nearest one at or above the current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sigaudit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "audit":
        _run_audit(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_audit(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    print(f"Running script : {datetime.now().strftime('%m-%d-%Y %H:%M:%S')}")
    pwd = Path.cwd()

    try:
        config = load_config(pwd)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.kubernetes_directory:
        config = replace(config, kubernetes_directory=Path(args.kubernetes_directory).expanduser())
    if args.sigs_file:
        config = replace(config, sigs_file=Path(args.sigs_file).expanduser())

    kubernetes_directory = config.kubernetes_directory
    if kubernetes_directory is None or not kubernetes_directory.exists():
        parser.exit(
            1,
            "please use --kubernetes-directory to set the path to the kubernetes directory. "
            f"{kubernetes_directory or ''} does not exist\n",
        )

    try:
        sigs_path = config.sigs_file or find_sigs_yaml(pwd)
    except SigsError as exc:
        parser.exit(1, f"unable to find sigs.yaml file: {exc}\n")
    try:
        context = load_context(sigs_path)
    except SigsError as exc:
        parser.exit(1, f"error parsing file: {sigs_path} - {exc}\n")
    _LOGGER.info("Auditing %s", sigs_path)

    auditor = Auditor(
        context,
        root=pwd,
        reporter=Reporter(),
        fetcher=build_fetcher(config.request_timeout),
        primary_repository=config.primary_repository,
    )
    auditor.audit(args.names)
    print("Done.")


if __name__ == "__main__":
    main(sys.argv[1:])
