from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from coderunner.core.errors import WorkspaceError
from coderunner.core.logging import get_logger
from coderunner.services.process import TIMEOUT_DIAGNOSTIC, encode_text, join_output, run_process
from coderunner.services.toolchains import Toolchain
from coderunner.services.workspace import Job


log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BuildResult:
    source_path: Path
    diagnostic: str | None = None  # compile failure or compile timeout

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


def write_source(job: Job, source_name: str, code: str) -> Path:
    source_path = job.file(source_name)
    try:
        with open(source_path, "wb") as fh:
            fh.write(encode_text(code))
    except OSError as exc:
        raise WorkspaceError(f"cannot write source file: {exc}") from exc
    return source_path


def stage(
    job: Job,
    toolchain: Toolchain,
    code: str,
    source_name: str,
    *,
    timeout_s: float,
    max_output_bytes: int,
) -> BuildResult:
    """Write the source into the job and compile it when the toolchain needs to.

    A failing or timed-out compiler is not an exception: its text comes back as
    ``BuildResult.diagnostic`` and the caller returns it as the only output.
    """
    source_path = write_source(job, source_name, code)
    if not toolchain.compiled:
        return BuildResult(source_path=source_path)

    argv = toolchain.compile(job.path, source_path)
    outcome = run_process(
        argv,
        cwd=job.path,
        stdin=None,
        timeout_s=timeout_s,
        max_output_bytes=max_output_bytes,
    )

    if outcome.timed_out:
        log.info("compile_timed_out", job_id=job.id, language=toolchain.language.value)
        return BuildResult(source_path=source_path, diagnostic=TIMEOUT_DIAGNOSTIC)

    if outcome.error is not None:
        log.info(
            "compile_failed",
            job_id=job.id,
            language=toolchain.language.value,
            exit_code=outcome.exit_code,
            duration_ms=outcome.duration_ms,
        )
        return BuildResult(
            source_path=source_path,
            diagnostic=join_output(outcome.output.strip(), outcome.error),
        )

    log.debug("compile_succeeded", job_id=job.id, duration_ms=outcome.duration_ms)
    return BuildResult(source_path=source_path)
