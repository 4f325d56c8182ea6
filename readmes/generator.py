"""
readmes README Generator

This module runs the external documentation tool once per candidate package
and stores its standard output as the package README.

Processing is strictly sequential and fail-fast: the first failure (tool
missing, tool exiting non-zero, README not writable) stops the run. READMEs
already written by earlier iterations stay on disk.

Usage:
    options = GeneratorOptions(command=["cargo", "readme"])
    for outcome in iter_generate("/path/to/workspace", options):
        print(outcome)
"""

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from readmes.discovery import (
    DEFAULT_MANIFEST_NAME,
    DEFAULT_OUTPUT_NAME,
    Candidate,
    DiscoveryResult,
    discover_candidates,
)

DEFAULT_COMMAND: tuple[str, ...] = ("cargo", "readme")

# Exit status a POSIX shell reports when a command cannot be found
COMMAND_NOT_FOUND_EXIT = 127


class ReadmeError(Exception):
    """Base class for failures that abort a run."""

    exit_code = 1

    def __init__(self, message: str, candidate: Optional[Candidate] = None):
        super().__init__(message)
        self.candidate = candidate


class ToolNotFoundError(ReadmeError):
    """The documentation tool could not be started."""

    exit_code = COMMAND_NOT_FOUND_EXIT


class ToolFailedError(ReadmeError):
    """The documentation tool exited with a non-zero status."""

    def __init__(self, message: str, returncode: int, candidate: Optional[Candidate] = None):
        super().__init__(message, candidate)
        self.returncode = returncode
        # Killed by a signal: report it the way a shell would
        self.exit_code = returncode if returncode > 0 else 128 - returncode


class ReadmeWriteError(ReadmeError):
    """The generated README could not be written."""


class OutcomeStatus(Enum):
    """What happened to a single candidate."""
    WRITTEN = "written"        # README created or replaced
    UNCHANGED = "unchanged"    # Tool output matched the existing README
    STALE = "stale"            # Check mode: README differs from tool output
    SKIPPED = "skipped"        # Dry run: tool not invoked


@dataclass
class GeneratorOptions:
    """
    Configuration for a generation run.

    Attributes:
        manifest_name: File that marks a directory as a package
        command: Documentation tool argv, run inside each package
        output_name: README file name written inside each package
        dry_run: List candidates without running the tool
        check: Run the tool and compare, but never write
    """
    manifest_name: str = DEFAULT_MANIFEST_NAME
    command: list[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    output_name: str = DEFAULT_OUTPUT_NAME
    dry_run: bool = False
    check: bool = False


@dataclass
class GenerationOutcome:
    """Result for one processed candidate."""
    candidate: Candidate
    status: OutcomeStatus
    size_bytes: int = 0

    def __str__(self) -> str:
        return f"{self.candidate.name}: {self.status.value}"


def run_tool(command: list[str], cwd: Path) -> bytes:
    """
    Run the documentation tool inside a package directory.

    The tool's standard error is not captured, so its diagnostics reach the
    user unchanged.

    Args:
        command: Tool argv
        cwd: Directory the tool runs in

    Returns:
        The tool's complete standard output, undecoded

    Raises:
        ToolNotFoundError: If the executable cannot be started
        ToolFailedError: If the tool exits non-zero
    """
    if not command:
        raise ToolNotFoundError("No documentation command configured")

    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            check=False,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(f"Command not found: {command[0]}")
    except PermissionError:
        raise ToolNotFoundError(f"Command not executable: {command[0]}")
    except OSError as e:
        raise ReadmeError(f"Could not run '{' '.join(command)}' in {cwd}: {e}")

    if result.returncode != 0:
        raise ToolFailedError(
            f"'{' '.join(command)}' failed in {cwd} with exit status {result.returncode}",
            returncode=result.returncode,
        )

    return result.stdout


def write_if_changed(path: Path, content: bytes) -> bool:
    """
    Write content to path unless the file already holds exactly that content.

    Returns:
        True if the file was written
    """
    if _readme_matches(path, content):
        return False
    path.write_bytes(content)
    return True


def _readme_matches(path: Path, content: bytes) -> bool:
    return path.is_file() and path.read_bytes() == content


def generate_one(candidate: Candidate, options: GeneratorOptions) -> GenerationOutcome:
    """
    Regenerate the README of a single candidate.

    Args:
        candidate: Package directory to process
        options: Run configuration

    Returns:
        GenerationOutcome describing what happened

    Raises:
        ReadmeError: On any failure; the error carries the candidate
    """
    if options.dry_run:
        return GenerationOutcome(candidate=candidate, status=OutcomeStatus.SKIPPED)

    try:
        content = run_tool(options.command, candidate.path)
    except ReadmeError as e:
        e.candidate = candidate
        raise

    if options.check:
        try:
            matches = _readme_matches(candidate.readme_path, content)
        except OSError as e:
            raise ReadmeError(f"Could not read {candidate.readme_path}: {e}", candidate)
        status = OutcomeStatus.UNCHANGED if matches else OutcomeStatus.STALE
        return GenerationOutcome(candidate=candidate, status=status, size_bytes=len(content))

    try:
        written = write_if_changed(candidate.readme_path, content)
    except OSError as e:
        raise ReadmeWriteError(f"Error writing file {candidate.readme_path}: {e}", candidate)

    status = OutcomeStatus.WRITTEN if written else OutcomeStatus.UNCHANGED
    return GenerationOutcome(candidate=candidate, status=status, size_bytes=len(content))


def iter_generate(
    root: str | Path,
    options: Optional[GeneratorOptions] = None,
    discovery: Optional[DiscoveryResult] = None,
) -> Iterator[GenerationOutcome]:
    """
    Regenerate READMEs for every candidate under root, one at a time.

    Outcomes are yielded as each candidate finishes. The first error
    propagates out of the iterator and no further candidates are processed.

    Args:
        root: Workspace root
        options: Run configuration (defaults to GeneratorOptions())
        discovery: Pre-computed discovery result for root, if the caller
            already has one

    Yields:
        One GenerationOutcome per candidate, in discovery order
    """
    if options is None:
        options = GeneratorOptions()

    if discovery is None:
        discovery = discover_candidates(
            root,
            manifest_name=options.manifest_name,
            output_name=options.output_name,
        )

    for candidate in discovery.candidates:
        yield generate_one(candidate, options)


def generate_readmes(
    root: str | Path,
    options: Optional[GeneratorOptions] = None,
) -> list[GenerationOutcome]:
    """
    Convenience function: regenerate all READMEs under root.

    This is the main library entry point.

    Example:
        outcomes = generate_readmes("/path/to/workspace")
        written = [o for o in outcomes if o.status is OutcomeStatus.WRITTEN]
    """
    return list(iter_generate(root, options))
