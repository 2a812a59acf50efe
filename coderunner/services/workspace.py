from __future__ import annotations

import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from coderunner.core.errors import WorkspaceError
from coderunner.core.logging import get_logger


log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Job:
    id: str
    path: Path

    def file(self, name: str) -> Path:
        return self.path / name


def create_job(base_dir: Path) -> Job:
    job_id = str(uuid.uuid4())
    path = (base_dir / job_id).resolve()
    try:
        path.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise WorkspaceError(f"cannot create job workspace: {exc}") from exc
    log.debug("job_created", job_id=job_id, path=str(path))
    return Job(id=job_id, path=path)


def destroy_job(job: Job) -> None:
    """Remove the job directory. Failures are logged, never raised."""
    try:
        shutil.rmtree(job.path)
    except OSError as exc:
        log.warning("job_cleanup_failed", job_id=job.id, path=str(job.path), error=str(exc))
        return
    log.debug("job_destroyed", job_id=job.id)


@contextmanager
def job_workspace(base_dir: Path) -> Iterator[Job]:
    """Yield a fresh job directory that is removed on every exit path."""
    job = create_job(base_dir)
    try:
        yield job
    finally:
        destroy_job(job)
