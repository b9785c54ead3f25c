"""Orchestration logic for transforming a set of module files."""

import argparse
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from globals_transform.compute_options_hash import compute_options_hash
from globals_transform.errors import GlobalsTransformError
from globals_transform.transform_context import TransformContext
from globals_transform.transform_options import TransformOptions
from globals_transform.transform_source import transform_source

logger = logging.getLogger(__name__)


def collect_sources(paths: Iterable[Path], extensions: Iterable[str]) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated file list."""
    suffixes = tuple(extensions)
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            found.update(
                p for p in path.rglob("*") if p.is_file() and p.name.endswith(suffixes)
            )
        elif path.is_file():
            found.add(path)
        else:
            logger.warning("Skipping missing source: %s", path)
    return sorted(p.resolve() for p in found)


def output_file_for_source(out_root: Path, root: Path, source: Path) -> Path:
    """Map a source file to its output location, keeping the root-relative layout."""
    try:
        relative = source.relative_to(root)
    except ValueError:
        relative = Path(source.name)
    return out_root / relative


def run_transform(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Transform every source file; return the process exit status."""
    options = TransformOptions.from_config(config)
    root = args.root.resolve()
    logger.info("Options hash: %s", compute_options_hash(options))

    sources = collect_sources(args.sources, config.get("extensions") or [".js"])
    if not sources:
        msg = "No source files found"
        raise SystemExit(msg)

    out_root = args.out_dir.resolve()
    context = TransformContext(options, root=str(root))
    written = 0
    failed = 0
    for source in sources:
        try:
            code = transform_source(
                source.read_text(encoding="utf-8"),
                options,
                filename=str(source),
                root=str(root),
                context=context,
            )
        except GlobalsTransformError as e:
            logger.error("Failed to transform %s: %s", source, e)
            failed += 1
            continue

        if args.dry_run:
            continue
        out_file = output_file_for_source(out_root, root, source)
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(code, encoding="utf-8")
        written += 1

    if args.dry_run:
        print(f"Dry run complete: {len(sources) - failed} file(s) transformed")
    else:
        print(f"Transformed {written} file(s) into: {out_root}")
    if failed:
        print(f"{failed} file(s) failed")
        return 1
    return 0
