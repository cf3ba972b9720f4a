from __future__ import annotations

import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeSystemctl:
    """Stands in for subprocess.run and records systemctl invocations."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.fail_on: set[str] = set()
        self.missing = False

    def __call__(self, cmd, check=False, **kwargs):
        self.calls.append(list(cmd))
        if self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])

        if self.action_of(cmd) in self.fail_on:
            if check:
                raise subprocess.CalledProcessError(1, cmd)
            return subprocess.CompletedProcess(cmd, 1)
        return subprocess.CompletedProcess(cmd, 0)

    @staticmethod
    def action_of(cmd) -> str:
        return next(arg for arg in cmd[1:] if arg != "--user")

    @property
    def actions(self) -> list[str]:
        return [self.action_of(cmd) for cmd in self.calls]


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bin_dir(temp_dir: Path) -> Path:
    """Directory holding a fake 'myapp' executable."""
    path = temp_dir / "bin"
    path.mkdir()
    executable = path / "myapp"
    executable.write_text("#!/bin/sh\nexit 0\n")
    executable.chmod(0o755)
    return path


@pytest.fixture
def unit_dir(temp_dir: Path) -> Path:
    path = temp_dir / "units"
    path.mkdir()
    return path


@pytest.fixture
def config_file(temp_dir: Path, unit_dir: Path) -> Path:
    """YAML config pointing servicify at the temporary unit directory."""
    path = temp_dir / "config.yaml"
    path.write_text(
        "version: '1.0'\n"
        "settings:\n"
        f"  unit_dir: {unit_dir}\n"
        f"  user_unit_dir: {unit_dir / 'user'}\n"
    )
    return path


@pytest.fixture
def fake_systemctl(monkeypatch) -> FakeSystemctl:
    fake = FakeSystemctl()
    monkeypatch.setattr("servicify.core.service_manager.subprocess.run", fake)
    return fake
