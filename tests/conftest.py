from __future__ import annotations

from pathlib import Path

import pytest

from coderunner.core.config import Settings
from coderunner.services.executor import CodeRunner

from tests.helpers import TEST_SECRET


@pytest.fixture()
def jobs_dir(tmp_path: Path) -> Path:
    return tmp_path / "jobs"


@pytest.fixture()
def settings(jobs_dir: Path) -> Settings:
    return Settings(
        secret_key=TEST_SECRET,
        jobs_dir=jobs_dir,
        exec_timeout_ms=3_000,
        compile_timeout_ms=3_000,
        max_code_size=10_000,
        max_inputs=20,
        max_output_bytes=64_000,
        log_level="WARNING",
    )


@pytest.fixture()
def runner(settings: Settings) -> CodeRunner:
    return CodeRunner(settings)
