"""
readmes Command-Line Interface

This module provides the CLI entry point for readmes. It resolves the
workspace root, discovers candidate packages and regenerates each README
with the external documentation tool.

Usage:
    readmes
    readmes /path/to/workspace
    readmes --manifest package.json --command "npx readme-gen"
    readmes --check
    readmes --dry-run --verbose

With no arguments the workspace root is the checkout containing this
package, the manifest is Cargo.toml and the tool is `cargo readme`.
"""

import argparse
import shlex
import sys
from pathlib import Path
from typing import Optional

from readmes import __version__
from readmes.discovery import (
    DEFAULT_MANIFEST_NAME,
    DEFAULT_OUTPUT_NAME,
    discover_candidates,
    resolve_root,
)
from readmes.generator import (
    DEFAULT_COMMAND,
    GeneratorOptions,
    OutcomeStatus,
    ReadmeError,
    iter_generate,
)


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="readmes",
        description=(
            "Regenerate README.md for every package directly below a workspace root.\n\n"
            "Each immediate subdirectory containing the manifest file is processed in\n"
            "name order: the documentation tool runs inside it and its standard output\n"
            "becomes the package README. The first failure stops the run."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  readmes                         # Workspace containing this checkout\n"
            "  readmes ~/src/workspace         # Explicit workspace root\n"
            "  readmes --check                 # Fail if any README is out of date\n"
            "  readmes --dry-run               # List packages without running the tool\n"
        ),
    )

    parser.add_argument(
        "root",
        type=str,
        nargs="?",
        default=None,
        help="Workspace root (default: parent of the directory containing readmes)",
    )

    parser.add_argument(
        "--manifest",
        type=str,
        default=DEFAULT_MANIFEST_NAME,
        help="Manifest file marking a package directory (default: %(default)s)",
    )

    parser.add_argument(
        "--command",
        type=str,
        default=shlex.join(DEFAULT_COMMAND),
        help="Documentation tool to run inside each package (default: %(default)s)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=DEFAULT_OUTPUT_NAME,
        help="README file name written in each package (default: %(default)s)",
    )

    # Modes
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="List the packages that would be processed without running the tool",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Run the tool but only report READMEs that differ from its output",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """Print a progress/status message to stderr."""
    if quiet:
        return
    print(f"[readmes] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def run(
    root: Optional[Path],
    options: GeneratorOptions,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """
    Discover packages and regenerate their READMEs.

    Args:
        root: Workspace root (None = default root)
        options: Generator options
        verbose: If True, show detailed progress
        quiet: If True, suppress non-error output

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    try:
        root_path = resolve_root(root)
        discovery = discover_candidates(
            root_path,
            manifest_name=options.manifest_name,
            output_name=options.output_name,
        )
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log_verbose(f"Workspace root: {root_path}", verbose, quiet)
    for name, reason in discovery.skipped:
        log_verbose(f"Skipping {name}: {reason}", verbose, quiet)

    if discovery.is_empty:
        log(f"No packages with {options.manifest_name} found in {root_path}", quiet=quiet)
        return 0

    log(f"Found {len(discovery.candidates)} package(s)", quiet=quiet)

    stale: list[str] = []
    written = 0

    try:
        for outcome in iter_generate(root_path, options, discovery=discovery):
            name = outcome.candidate.name

            if outcome.status is OutcomeStatus.SKIPPED:
                # Dry-run listing goes to stdout so it can be piped
                print(outcome.candidate.path)
            elif outcome.status is OutcomeStatus.STALE:
                stale.append(name)
                log(f"{name}: {options.output_name} is out of date", quiet=quiet)
            elif outcome.status is OutcomeStatus.WRITTEN:
                written += 1
                log(f"{name}: wrote {options.output_name} ({outcome.size_bytes} bytes)", quiet=quiet)
            else:
                log_verbose(f"{name}: up to date", verbose, quiet)

    except ReadmeError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.candidate is not None:
            print(f"Stopped at package: {e.candidate.name}", file=sys.stderr)
        return e.exit_code

    if options.dry_run:
        log("(Dry run - tool not invoked, no files written)", quiet=quiet)
        return 0

    if options.check:
        if stale:
            print(
                f"Error: {len(stale)} README(s) out of date: {', '.join(stale)}",
                file=sys.stderr,
            )
            return 1
        log("All READMEs are up to date.", quiet=quiet)
        return 0

    log(f"Done. {written} README(s) updated.", quiet=quiet)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        command = shlex.split(args.command)
    except ValueError as e:
        parser.error(f"invalid --command: {e}")
    if not command:
        parser.error("--command must not be empty")

    options = GeneratorOptions(
        manifest_name=args.manifest,
        command=command,
        output_name=args.output,
        dry_run=args.dry_run,
        check=args.check,
    )

    root = Path(args.root) if args.root is not None else None

    return run(
        root=root,
        options=options,
        verbose=args.verbose,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
