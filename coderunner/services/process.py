from __future__ import annotations

import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path


TIMEOUT_DIAGNOSTIC = "Error: Code execution timed out"


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    output: str  # combined stdout+stderr
    exit_code: int | None
    timed_out: bool
    error: str | None  # set for spawn failures and abnormal exits
    duration_ms: int


def _truncate(s: bytes, max_bytes: int) -> str:
    if len(s) <= max_bytes:
        return s.decode("utf-8", errors="replace")
    head = s[: max(0, max_bytes - 32)]
    suffix = b"\n...[truncated]"
    return (head + suffix).decode("utf-8", errors="replace")


def encode_text(text: str) -> bytes:
    """UTF-8 bytes for ``text``; lone surrogates become U+FFFD."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        repaired = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
        return repaired.encode("utf-8")


def describe_exit(returncode: int) -> str:
    if returncode < 0:
        try:
            description = signal.strsignal(-returncode)
        except ValueError:
            description = None
        return f"signal: {(description or str(-returncode)).lower()}"
    return f"exit status {returncode}"


def _kill_group(proc: subprocess.Popen[bytes]) -> None:
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    proc.kill()


def run_process(
    argv: list[str],
    *,
    cwd: Path,
    stdin: str | None,
    timeout_s: float,
    max_output_bytes: int,
) -> ProcessOutcome:
    """Run ``argv`` to completion or until ``timeout_s`` elapses.

    The child gets its own session so that a deadline kills the whole process
    group, not just the direct child. An empty or missing ``stdin`` leaves the
    child reading from the null device.
    """
    start = time.perf_counter()
    feed = encode_text(stdin) if stdin else None

    try:
        proc = subprocess.Popen(  # nosec: B603 (argv comes from the toolchain table)
            argv,
            stdin=subprocess.PIPE if feed is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            cwd=cwd,
            start_new_session=os.name == "posix",
        )
    except OSError as exc:
        return ProcessOutcome(
            output="",
            exit_code=None,
            timed_out=False,
            error=str(exc),
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

    try:
        out, _ = proc.communicate(input=feed, timeout=timeout_s)
        timed_out = False
    except subprocess.TimeoutExpired:
        timed_out = True
        _kill_group(proc)
        out, _ = proc.communicate()

    duration_ms = int((time.perf_counter() - start) * 1000)
    exit_code = None if timed_out else proc.returncode
    error = describe_exit(proc.returncode) if exit_code not in (None, 0) else None

    return ProcessOutcome(
        output=_truncate(out or b"", max_output_bytes),
        exit_code=exit_code,
        timed_out=timed_out,
        error=error,
        duration_ms=duration_ms,
    )


def join_output(output: str, error: str | None) -> str:
    """Combined stream, then the process error on its own line, trimmed."""
    if error is None:
        return output.strip()
    if output:
        return f"{output}\n{error}".strip()
    return error.strip()
