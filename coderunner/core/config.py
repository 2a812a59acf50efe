from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    secret_key: str = ""
    jobs_dir: Path = Path("jobs")
    exec_timeout_ms: int = 10_000
    compile_timeout_ms: int = 10_000
    max_code_size: int = 10_000
    max_inputs: int = 20
    max_output_bytes: int = 1_000_000  # per child, combined stdout+stderr
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            secret_key=os.environ.get("KEY", ""),
            jobs_dir=Path(os.environ.get("JOBS_DIR", "jobs")),
            exec_timeout_ms=_int_from_env("EXEC_TIMEOUT_MS", 10_000),
            compile_timeout_ms=_int_from_env("COMPILE_TIMEOUT_MS", 10_000),
            max_code_size=_int_from_env("MAX_CODE_SIZE", 10_000),
            max_inputs=_int_from_env("MAX_INPUTS", 20),
            max_output_bytes=_int_from_env("MAX_OUTPUT_BYTES", 1_000_000),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
