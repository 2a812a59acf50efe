from __future__ import annotations

from coderunner.core.config import Settings
from coderunner.core.logging import get_logger
from coderunner.services.build import stage
from coderunner.services.fanout import run_all
from coderunner.services.toolchains import Language, get_toolchain
from coderunner.services.workspace import job_workspace


log = get_logger(__name__)


class CodeRunner:
    """Stage, build and run one submission against a list of stdin payloads.

    The content gate is not applied here; callers check it before calling
    :meth:`execute`.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def execute(self, language: str | Language, code: str, inputs: list[str]) -> list[str]:
        """Return one output per input, in input order.

        When compilation fails or times out nothing is run and the result is a
        single-element list holding the compiler diagnostic, whatever the
        number of inputs. Callers must not read that list positionally.

        Raises :class:`~coderunner.core.errors.CodeRunnerError` subclasses for
        request-level failures (unsupported language, missing Java public
        class, workspace I/O).
        """
        toolchain = get_toolchain(language)
        # Resolved before the workspace exists: a Java submission without a
        # public class never touches the disk.
        source_name = toolchain.source_name(code)
        s = self.settings

        with job_workspace(s.jobs_dir) as job:
            log.info(
                "job_started",
                job_id=job.id,
                language=toolchain.language.value,
                inputs=len(inputs),
            )
            build = stage(
                job,
                toolchain,
                code,
                source_name,
                timeout_s=s.compile_timeout_ms / 1000.0,
                max_output_bytes=s.max_output_bytes,
            )
            if not build.ok:
                return [build.diagnostic or ""]

            outputs = run_all(
                toolchain,
                job,
                build.source_path,
                inputs,
                timeout_s=s.exec_timeout_ms / 1000.0,
                max_output_bytes=s.max_output_bytes,
            )
            log.info("job_finished", job_id=job.id)
            return outputs
