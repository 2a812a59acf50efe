from __future__ import annotations

from pathlib import Path
from shutil import which

import pytest

from coderunner.services.toolchains import PYTHON_CMD


TEST_SECRET = "test-secret-key"


def require_binaries(*names: str) -> None:
    missing = [name for name in names if which(name) is None]
    if missing:
        pytest.skip(f"Skipping toolchain test: {', '.join(missing)} not on PATH")


def require_python() -> None:
    require_binaries(PYTHON_CMD)


def leftover_jobs(jobs_dir: Path) -> list[Path]:
    if not jobs_dir.exists():
        return []
    return sorted(jobs_dir.iterdir())
