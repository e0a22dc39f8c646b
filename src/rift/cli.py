# src/rift/cli.py
import argparse
import logging
import os
import sys
from pathlib import Path

from rift.config import DEFAULT_IGNORE_FILE, DEFAULT_INCLUDE_REGEX, DEFAULT_MAX_DEPTH
from rift.core.ignore import anchored_pattern, load_ignore_spec, output_ignore_pattern
from rift.core.runner import run
from rift.core.scanner import ProjectScanner, parse_extensions
from rift.errors import PatternError
from rift.models import RunReport
from rift.utils.tokenizer import Tokenizer

logger = logging.getLogger("rift")


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="rift",
        description="Recursively Include Text Files: resolve include directives across a directory tree."
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=os.getcwd(), help="Source root directory (default: current directory)")
    parser.add_argument("-o", "--out_path", type=str, required=True, help="Output directory, relative to the current directory")
    parser.add_argument("-r", "--regex", type=str, default=DEFAULT_INCLUDE_REGEX, help="Include regex; capture group 1 is the included path")
    parser.add_argument("-d", "--max_depth", type=non_negative_int, default=DEFAULT_MAX_DEPTH, help="Max inclusion depth (default: %(default)s)")
    parser.add_argument("-e", "--ext", type=str, default="", help="Comma-separated extensions to process (default: all files)")
    parser.add_argument("-j", "--jobs", type=int, default=1, help="Resolve files on this many threads")
    parser.add_argument("--ignore-file", type=str, default=DEFAULT_IGNORE_FILE, help="Ignore file inside the source root (default: %(default)s)")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors and skip the banner and summary")
    return parser


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    # basicConfig is a no-op once the root logger has handlers
    logger.setLevel(level)


def print_summary(report: RunReport) -> None:
    print(f"\n--- Top 10 Largest Resolved Files (Est. Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'Passes':<6} | {'File Path'}")
    print("-" * 60)
    ranked = sorted(
        ((Tokenizer.count(r.text), r) for r in report.resolutions.values()),
        key=lambda item: item[0],
        reverse=True,
    )
    for i, (tokens, r) in enumerate(ranked[:10]):
        print(f"{i+1:<5} | {tokens:<10} | {r.passes:<6} | {r.path}")
    print("-" * 60)
    print(f"Resolved files:   {len(report.resolutions)}")
    print(f"Written files:    {len(report.written)}")
    print(f"Missing includes: {sum(len(m) for m in report.missing_includes.values())}")
    print(f"Depth exhausted:  {len(report.depth_exhausted)}")
    print(f"Read errors:      {len(report.read_errors)}")
    print(f"Write errors:     {len(report.write_errors)}")
    print("-" * 60)


def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()
        setup_logging(args.verbose, args.quiet)
        echo = (lambda *a, **k: None) if args.quiet else print

        root_dir = Path(args.root_dir).resolve()
        if not root_dir.is_dir():
            logger.error("Invalid directory '%s'", root_dir)
            sys.exit(1)

        # Resolved once against the current directory
        output_root = Path(args.out_path).resolve()
        extensions = parse_extensions(args.ext)

        echo(f"--- rift ---")
        echo(f"Scanning:  {root_dir}")
        echo(f"Output:    {output_root}")
        echo(f"Max depth: {args.max_depth}")
        echo(f"Mode:      {'All files' if not extensions else f'Extensions {sorted(extensions)}'}")

        # 2. Ignore Rules (Using PathSpec)
        ignore_file = root_dir / args.ignore_file
        extra_patterns = [
            p for p in (
                output_ignore_pattern(root_dir, output_root),
                anchored_pattern(root_dir, ignore_file),
            ) if p
        ]
        ignore_spec = load_ignore_spec(ignore_file, extra_patterns=extra_patterns)

        # 3. Load, resolve, write
        scanner = ProjectScanner(root_dir, ignore_spec)
        report = run(
            scanner,
            output_root,
            args.max_depth,
            args.regex,
            extensions,
            jobs=max(1, args.jobs),
        )

        if not report.resolutions:
            echo("No matching files found.")
            return

        # 4. Stats
        if not args.quiet:
            print_summary(report)
        echo(f"\nDone! Output written to: {output_root}")

    except PatternError as e:
        logger.error("%s", e)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        logger.error("An unexpected error occurred: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
