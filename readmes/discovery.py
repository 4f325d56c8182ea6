"""
readmes Candidate Discovery Module

This module locates the workspace root and the packages inside it whose
README should be regenerated.

Key Responsibilities:
    1. Resolve the workspace root (explicit path or the default location)
    2. Enumerate immediate child directories of the root
    3. Select children that directly contain the package manifest
    4. Return candidates in a stable, lexicographic order

Design Notes:
    - Only one level is examined. A manifest nested deeper does not make
      its ancestor a candidate.
    - Hidden children (names starting with ".") are never candidates, the
      same way a shell glob such as "*/Cargo.toml" never matches them.
    - Symlinked directories are followed, again like a shell glob.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_MANIFEST_NAME = "Cargo.toml"
DEFAULT_OUTPUT_NAME = "README.md"


@dataclass
class Candidate:
    """
    A package directory whose README will be regenerated.

    Attributes:
        path: Absolute path to the package directory
        manifest_path: Absolute path to the manifest inside it
        readme_path: Absolute path of the README to produce
    """
    path: Path
    manifest_path: Path
    readme_path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def __str__(self) -> str:
        return self.name


@dataclass
class DiscoveryResult:
    """
    Result of scanning a workspace root for candidates.

    Attributes:
        root_path: The workspace root that was scanned
        candidates: Matching package directories, sorted by name
        skipped: Child directories that were examined and rejected (name, reason)
    """
    root_path: Path
    candidates: list[Candidate] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def names(self) -> list[str]:
        """Return the candidate directory names in processing order."""
        return [c.name for c in self.candidates]


def default_root() -> Path:
    """
    Return the default workspace root.

    This is the parent of the directory holding the running program, i.e.
    the checkout that contains the readmes package.
    """
    return Path(__file__).resolve().parent.parent


def resolve_root(path: Optional[str | Path] = None) -> Path:
    """
    Canonicalize the workspace root.

    Args:
        path: Explicit root, or None to use default_root()

    Returns:
        Absolute, symlink-free path to the root

    Raises:
        ValueError: If the root does not exist or is not a directory
    """
    root = default_root() if path is None else Path(path).resolve()

    if not root.exists():
        raise ValueError(f"Path does not exist: {root}")
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    return root


def discover_candidates(
    root: str | Path,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
    output_name: str = DEFAULT_OUTPUT_NAME,
) -> DiscoveryResult:
    """
    Find the immediate subdirectories of root that contain the manifest.

    Args:
        root: Workspace root to scan
        manifest_name: File name that marks a package directory
        output_name: README file name to produce in each package

    Returns:
        DiscoveryResult with candidates sorted lexicographically by name.
        An empty result is not an error.

    Raises:
        ValueError: If root is missing or not a directory
        OSError: If root cannot be listed
    """
    root_path = resolve_root(root)
    result = DiscoveryResult(root_path=root_path)

    # Sorting by name gives the same order as a shell glob in the C locale,
    # independent of the filesystem's own listing order
    for child in sorted(root_path.iterdir(), key=lambda p: p.name):
        if child.name.startswith("."):
            continue

        # is_dir() follows symlinks
        if not child.is_dir():
            continue

        manifest = child / manifest_name
        if not manifest.is_file():
            result.skipped.append((child.name, f"No {manifest_name}"))
            continue

        result.candidates.append(
            Candidate(
                path=child,
                manifest_path=manifest,
                readme_path=child / output_name,
            )
        )

    return result
