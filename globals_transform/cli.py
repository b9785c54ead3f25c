"""Command line interface for rewriting ES modules into namespace scripts."""

import argparse
import logging
from pathlib import Path
from typing import Any

from globals_transform.deep_merge import deep_merge
from globals_transform.errors import ConfigurationError
from globals_transform.load_config import load_config
from globals_transform.run_transform import run_transform
from globals_transform.transform_options import EXPORT_ALL_POLICIES


def parse_external(value: str) -> tuple[str, str]:
    """Parse a ``SOURCE=GLOBAL`` pair."""
    source, sep, global_name = value.partition("=")
    if not sep or not source or not global_name:
        msg = f"expected SOURCE=GLOBAL, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return source, global_name


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    ap = argparse.ArgumentParser(
        prog="globals-transform",
        description=(
            "Rewrite ES module imports/exports into reads and writes on a shared "
            "global namespace."
        ),
    )
    ap.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="Module files or directories to transform",
    )
    ap.add_argument(
        "--out-dir",
        type=Path,
        required=True,
        help="Output directory; files keep their layout relative to --root",
    )
    ap.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Root that module paths are named relative to (default: cwd)",
    )
    ap.add_argument("--config", help="Path to a YAML configuration file")
    ap.add_argument(
        "--namespace-root",
        help="Name of the global namespace root (overrides the config file)",
    )
    ap.add_argument(
        "--external",
        action="append",
        type=parse_external,
        default=[],
        metavar="SOURCE=GLOBAL",
        help="Map an import source to an existing global (repeatable)",
    )
    ap.add_argument(
        "--transform-only-modules",
        action="store_true",
        default=None,
        help="Leave files without imports or exports untouched",
    )
    ap.add_argument(
        "--export-all",
        choices=EXPORT_ALL_POLICIES,
        help="How to handle 'export * from': copy keys at runtime or drop",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Transform without writing any files",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return ap


def config_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Load the config file and apply command line overrides on top."""
    overrides: dict[str, Any] = {}
    if args.namespace_root:
        overrides["namespace_root"] = args.namespace_root
    if args.external:
        overrides["externals"] = dict(args.external)
    if args.transform_only_modules is not None:
        overrides["transform_only_modules"] = args.transform_only_modules
    if args.export_all:
        overrides["export_all"] = args.export_all
    return deep_merge(load_config(args.config), overrides)


def main(argv: list[str] | None = None) -> int:
    """Run the transform from the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = config_from_args(args)
        return run_transform(args, config)
    except ConfigurationError as e:
        logging.getLogger(__name__).error("%s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
