"""
Shared fixtures for readmes tests.

The external documentation tool is simulated by a small Python program run
through sys.executable. It records the directory it was run in, emits a
deterministic README built from the manifest, and fails with the exit status
stored in a FAIL file when one is present in its working directory.
"""

import sys
import tempfile
from pathlib import Path

import pytest

FAKE_TOOL_SOURCE = '''\
import sys
from pathlib import Path

cwd = Path.cwd()
with open(sys.argv[1], "a", encoding="utf-8") as log:
    log.write(cwd.name + "\\n")

fail = cwd / "FAIL"
if fail.exists():
    sys.stderr.write("fake tool failed\\n")
    sys.exit(int(fail.read_text().strip() or "1"))

manifest = (cwd / "Cargo.toml").read_bytes()
sys.stdout.buffer.write(b"# " + cwd.name.encode("utf-8") + b"\\n\\n" + manifest)
'''


class FakeTool:
    """Handle on the simulated documentation tool."""

    def __init__(self, directory: Path):
        self.script = directory / "fake_tool.py"
        self.log_path = directory / "invocations.log"
        self.script.write_text(FAKE_TOOL_SOURCE, encoding="utf-8")

    @property
    def command(self) -> list[str]:
        return [sys.executable, str(self.script), str(self.log_path)]

    def invocations(self) -> list[str]:
        """Names of the directories the tool ran in, in order."""
        if not self.log_path.exists():
            return []
        return self.log_path.read_text(encoding="utf-8").splitlines()

    @staticmethod
    def expected_output(package: Path) -> bytes:
        manifest = (package / "Cargo.toml").read_bytes()
        return b"# " + package.name.encode("utf-8") + b"\n\n" + manifest


def make_package(root: Path, name: str, manifest: str = "") -> Path:
    """Create a package directory containing a Cargo.toml."""
    package = root / name
    package.mkdir()
    (package / "Cargo.toml").write_text(
        manifest or f'[package]\nname = "{name}"\nversion = "0.1.0"\n',
        encoding="utf-8",
    )
    return package


@pytest.fixture
def workspace():
    """An empty workspace root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def fake_tool():
    """A simulated documentation tool living outside the workspace."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield FakeTool(Path(tmpdir))
