from __future__ import annotations


class CodeRunnerError(Exception):
    """Request-level failure: the pipeline could not run the submission.

    Compile errors, crashing programs and timeouts are *not* raised; they come
    back as ordinary output strings.
    """

    status_code: int = 400


class UnsupportedLanguageError(CodeRunnerError):
    def __init__(self, language: str) -> None:
        super().__init__("Unsupported language")
        self.language = language


class ContentRejectedError(CodeRunnerError):
    def __init__(self, token: str) -> None:
        super().__init__(f"import of '{token}' is not allowed")
        self.token = token


class MissingClassDeclarationError(CodeRunnerError):
    def __init__(self) -> None:
        super().__init__("no public class found in Java code")


class WorkspaceError(CodeRunnerError):
    status_code = 500
