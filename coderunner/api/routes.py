from __future__ import annotations

import hmac

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from coderunner.core.config import Settings, get_settings
from coderunner.core.errors import CodeRunnerError
from coderunner.core.logging import get_logger
from coderunner.models.schemas import ErrorResponse, ExecuteRequest, ExecuteResponse
from coderunner.services.content_gate import check_content
from coderunner.services.executor import CodeRunner
from coderunner.services.toolchains import resolve_language


router = APIRouter()
log = get_logger(__name__)


def get_runner(settings: Settings = Depends(get_settings)) -> CodeRunner:
    return CodeRunner(settings)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@router.post(
    "/execute",
    response_model=ExecuteResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def execute(
    req: ExecuteRequest,
    settings: Settings = Depends(get_settings),
    runner: CodeRunner = Depends(get_runner),
) -> ExecuteResponse | JSONResponse:
    """Run the submitted program once per input and return the outputs.

    Note: the content gate is a textual denylist and the programs run as plain
    host processes. This is not a security boundary. Do not expose publicly
    without a proper sandbox and isolation strategy.
    """
    given = req.key.encode("utf-8", "surrogatepass")
    expected = settings.secret_key.encode("utf-8", "surrogatepass")
    if not hmac.compare_digest(given, expected):
        return error_response(status.HTTP_403_FORBIDDEN, "Invalid secret key")
    if len(req.code.encode("utf-8", "surrogatepass")) > settings.max_code_size:
        return error_response(status.HTTP_400_BAD_REQUEST, "Code too large")
    if len(req.inputs) > settings.max_inputs:
        return error_response(status.HTTP_400_BAD_REQUEST, "Too many inputs")

    try:
        language = resolve_language(req.language)
        check_content(language, req.code)
        outputs = runner.execute(language, req.code, req.inputs)
    except CodeRunnerError as exc:
        if exc.status_code >= 500:
            log.error("request_failed", language=req.language, reason=str(exc))
        else:
            log.info("request_rejected", language=req.language, reason=str(exc))
        return error_response(exc.status_code, str(exc))

    return ExecuteResponse(outputs=outputs)
