from typing import Any


class NextVersionError(Exception):
    """Base error with a stable code and a suggested fix."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"error_code": self.code, "message": self.message}
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class ConfigurationError(NextVersionError):
    def __init__(self, message: str, suggestion: str = ""):
        super().__init__(
            code="CONFIG_INVALID",
            message=message,
            suggestion=suggestion or "Check the action inputs in the workflow file.",
        )


class VcsInvocationError(NextVersionError):
    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        super().__init__(
            code="GIT_FAILED",
            message=f"Failed running git {' '.join(command)} (exit {returncode})"
            + (f": {stderr.strip()}" if stderr and stderr.strip() else ""),
            suggestion="Ensure the repository is checked out with fetch-depth: 0.",
        )


class RefAlreadyExistsError(NextVersionError):
    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(
            code="REF_EXISTS",
            message=f"Reference tag already exists: {ref}",
            suggestion="Delete the tag or push a new commit before re-running.",
        )


class RemoteApiError(NextVersionError):
    def __init__(self, operation: str, message: str, status: int | None = None, body: str = ""):
        self.operation = operation
        self.status = status
        super().__init__(
            code="GITHUB_API_ERROR",
            message=f"GitHub {operation} failed"
            + (f" with HTTP {status}" if status is not None else "")
            + f": {message}",
            suggestion="Check that github-token is set and has contents: write permission.",
            detail=body[:500] if body else None,
        )
