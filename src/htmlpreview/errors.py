from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    MISSING_URL = "MISSING_URL"
    INVALID_URL = "INVALID_URL"
    FORGE_REWRITE_FAILED = "FORGE_REWRITE_FAILED"
    FETCH_FAILED = "FETCH_FAILED"


class PreviewError(Exception):
    """Raised for every expected failure while building a preview.

    The orchestrator turns it into an ``ErrorState``; the HTTP layer renders
    that state inline. None of these are retried.
    """

    code: ErrorCode = ErrorCode.FETCH_FAILED
    http_status: int = 500

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
            }
        }


class MissingUrlError(PreviewError):
    code = ErrorCode.MISSING_URL
    http_status = 400

    def __init__(self) -> None:
        super().__init__(
            'Missing required parameter "url"',
            suggestion='Pass the file to preview as "?url=<file URL>".',
        )


class InvalidUrlError(PreviewError):
    code = ErrorCode.INVALID_URL
    http_status = 400

    def __init__(self, url: str) -> None:
        super().__init__(
            'Invalid URL provided in parameter "url"',
            suggestion=(
                "Use an absolute http(s) URL, "
                "e.g. https://github.com/owner/repo/blob/main/index.html."
            ),
        )
        self.url = url


class ForgeRewriteError(PreviewError):
    """A forge was identified but has no raw-path rewrite rule.

    Only reachable if the forge catalog and the rewrite table drift apart.
    """

    code = ErrorCode.FORGE_REWRITE_FAILED
    http_status = 500

    def __init__(self, software: str) -> None:
        super().__init__(f"Unsupported git-forge software: {software}")
        self.software = software


class FetchError(PreviewError):
    code = ErrorCode.FETCH_FAILED
    http_status = 502

    def __init__(
        self,
        url: str,
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        if status is not None:
            message = f"Error fetching content: HTTP error! status: {status}"
        else:
            message = f"Error fetching content: {cause}"
        super().__init__(
            message,
            suggestion="Check that the file is public and that the CORS relay is reachable.",
        )
        self.url = url
        self.status = status
        self.cause = cause
