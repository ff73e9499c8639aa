"""Command-line entry point."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from typing import TextIO

from fortune_index.config import CliOverrides, FortuneConfig, load_effective_config
from fortune_index.index import EntryReadError, build_index
from fortune_index.logging import DiagnosticWriter, JsonlAuditLogger
from fortune_index.select import (
    EmptyIndexError,
    compile_pattern,
    iter_matches,
    select_random,
    write_matches,
)


def _seed(value: str) -> int:
    try:
        seed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {value!r}") from None
    if seed < 0 or seed >= 2**64:
        raise argparse.ArgumentTypeError("seed must be an unsigned 64-bit integer")
    return seed


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fortune-index",
        description="Print a random adage, or every adage matching a pattern.",
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="Index files or directories.")
    parser.add_argument("-m", "--pattern", default=None, help="Print adages matching PATTERN.")
    parser.add_argument(
        "-i", "--insensitive", action="store_true", help="Case-insensitive pattern matching."
    )
    parser.add_argument("-s", "--seed", type=_seed, default=None, help="Random seed.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a TOML config file.")
    parser.add_argument("--extension", default=None, help="Index file extension (default: .dat).")
    parser.add_argument(
        "--delimiter-width",
        type=int,
        choices=(1, 4),
        default=None,
        help="Bytes occupied by the delimiter field; 4 for padded strfile indices.",
    )
    parser.add_argument("--audit-log", type=Path, default=None, help="Append a JSONL audit event.")
    return parser


def run(
    args: argparse.Namespace,
    config: FortuneConfig,
    out: TextIO,
    err: TextIO,
) -> dict[str, object]:
    """Build the index and run the selected mode; return run metadata."""
    diagnostics = DiagnosticWriter(err)
    index, _ = build_index(args.files, config=config, on_warning=diagnostics)
    metadata: dict[str, object] = {"entries": len(index), "warnings": diagnostics.count}

    if args.pattern is None:
        out.write(select_random(index, args.seed))
        return metadata

    regex = compile_pattern(args.pattern, args.insensitive)
    terminator = config.output.record_terminator
    metadata["matches"] = write_matches(
        iter_matches(index, regex, terminator=terminator), out, err, terminator=terminator
    )
    return metadata


def main(
    argv: list[str] | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Entrypoint for the fortune-index command."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.insensitive and args.pattern is None:
        parser.error("--insensitive requires --pattern")

    try:
        config = load_effective_config(
            config_path=args.config,
            overrides=CliOverrides(
                extension=args.extension,
                delimiter_width=args.delimiter_width,
                audit_log=args.audit_log,
            ),
        )
    except ValueError as exc:
        err.write(f"{exc}\n")
        return 1
    except OSError as exc:
        err.write(f"Cannot read config {exc.filename or args.config}: {exc.strerror or exc}\n")
        return 1

    arguments: dict[str, object] = {
        "files": args.files,
        "pattern": args.pattern,
        "insensitive": args.insensitive,
        "seed": args.seed,
    }
    command = "search" if args.pattern is not None else "random"
    error_code: str | None = None
    metadata: dict[str, object] = {}
    try:
        metadata = run(args, config, out, err)
    except EmptyIndexError as exc:
        error_code = "EMPTY_INDEX"
        err.write(f"{exc}\n")
    except EntryReadError as exc:
        error_code = "READ_FAILED"
        err.write(f"{exc}\n")
    except re.error as exc:
        error_code = "INVALID_PATTERN"
        err.write(f"Invalid --pattern: {exc}\n")

    if config.audit_log is not None:
        try:
            JsonlAuditLogger(config.audit_log).record(command, arguments, error_code, metadata)
        except OSError as exc:
            err.write(f"Cannot write audit log {config.audit_log}: {exc.strerror or exc}\n")
            return 1
    return 0 if error_code is None else 1


if __name__ == "__main__":
    raise SystemExit(main())
