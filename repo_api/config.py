"""Environment-derived settings for applications that build a client from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass

from .clients.github import DEFAULT_BASE_URL
from .errors import ConfigurationError
from .utils.logging_utils import setup_logging

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Connection settings read from ``GITHUB_*`` variables and ``LOG_LEVEL``."""

    token: str
    repo_url: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        return (
            f"Settings(token='***', repo_url={self.repo_url!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, log_level={self.log_level!r})"
        )

    def configure_logging(self, *, use_json: bool = True) -> None:
        """Install root logging at ``log_level``. The library never does this on its own."""
        setup_logging(level=self.log_level, use_json=use_json)

    @classmethod
    def from_env(cls) -> "Settings":
        token = (os.getenv("GITHUB_TOKEN") or "").strip()
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is required")
        repo_url = (os.getenv("GITHUB_REPOSITORY_URL") or "").strip()
        if not repo_url:
            raise ConfigurationError("GITHUB_REPOSITORY_URL is required")

        raw_timeout = os.getenv("GITHUB_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"GITHUB_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from exc

        return cls(
            token=token,
            repo_url=repo_url,
            base_url=os.getenv("GITHUB_API_URL", DEFAULT_BASE_URL),
            timeout_seconds=timeout_seconds,
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
