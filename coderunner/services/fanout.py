from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from coderunner.core.logging import get_logger
from coderunner.services.process import TIMEOUT_DIAGNOSTIC, join_output, run_process
from coderunner.services.toolchains import Toolchain
from coderunner.services.workspace import Job


log = get_logger(__name__)


def run_one(
    toolchain: Toolchain,
    job: Job,
    source_path: Path,
    index: int,
    payload: str,
    *,
    timeout_s: float,
    max_output_bytes: int,
) -> str:
    outcome = run_process(
        toolchain.run(job.path, source_path),
        cwd=job.path,
        stdin=payload,
        timeout_s=timeout_s,
        max_output_bytes=max_output_bytes,
    )
    log.debug(
        "input_finished",
        job_id=job.id,
        index=index,
        exit_code=outcome.exit_code,
        timed_out=outcome.timed_out,
        duration_ms=outcome.duration_ms,
    )
    if outcome.timed_out:
        return TIMEOUT_DIAGNOSTIC
    return join_output(outcome.output, outcome.error)


def run_all(
    toolchain: Toolchain,
    job: Job,
    source_path: Path,
    inputs: list[str],
    *,
    timeout_s: float,
    max_output_bytes: int,
) -> list[str]:
    """Run the staged program once per input, all at the same time.

    ``result[i]`` always belongs to ``inputs[i]``. Each run has its own
    deadline, so a slow input never delays or kills its siblings.
    """
    if not inputs:
        return []

    with ThreadPoolExecutor(max_workers=len(inputs), thread_name_prefix=f"job-{job.id[:8]}") as pool:
        futures = [
            pool.submit(
                run_one,
                toolchain,
                job,
                source_path,
                index,
                payload,
                timeout_s=timeout_s,
                max_output_bytes=max_output_bytes,
            )
            for index, payload in enumerate(inputs)
        ]
        return [future.result() for future in futures]
