"""Exception types raised by the repository API client."""
from __future__ import annotations

from typing import Any

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class RepoApiError(Exception):
    """Base class for every error raised by this package."""


class InvalidRepositoryUrl(RepoApiError, ValueError):
    """The repository URL does not carry an ``owner/name`` path."""


class IssueNotBound(RepoApiError, ValueError):
    """An issue-scoped operation was called before an issue number was set."""

    def __init__(self, message: str = "Issue number must be set.") -> None:
        super().__init__(message)


class FileNotFound(RepoApiError, FileNotFoundError):
    """The local file selected for upload does not exist."""


class FileReadError(RepoApiError, OSError):
    """The local file exists but could not be read."""


class ConfigurationError(RepoApiError, RuntimeError):
    """Required configuration is missing or invalid."""


class UnexpectedApiResponse(RepoApiError):
    """The remote call completed with a status outside the accepted set."""

    def __init__(self, status_code: int, message: str, action: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.action = action
        prefix = f"Failed to {action}: " if action else ""
        super().__init__(f"{prefix}HTTP {status_code}. Details: {message}")

    @staticmethod
    def extract_message(body: Any) -> str:
        """Best-effort ``message`` lookup on a decoded response body."""

        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message:
                return message
        return UNKNOWN_ERROR_MESSAGE


class MalformedApiResponse(RepoApiError):
    """A successful response lacked a field the client depends on."""


class BranchBootstrapFailed(RepoApiError):
    """No source commit could be resolved to create a missing branch from."""
