"""Entry point tying a repository URL and token to the issue and content services."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import httpx

from .clients.github import DEFAULT_BASE_URL, ApiClient, HttpxTransport, Transport
from .config import Settings
from .identity import RepositoryIdentity
from .services.branches import BranchResolver
from .services.content import ContentPublisher
from .services.issues import IssueService
from .utils.logging_utils import get_logger, logging_context

logger = get_logger("repo_api.github")


class GitHub:
    """Client for one repository.

    >>> gh = GitHub("https://github.com/octo/hello.git", token)
    >>> gh.issues(42).comment("Fixed in main")
    """

    def __init__(
            self,
            repo_url: str,
            token: str,
            *,
            base_url: str = DEFAULT_BASE_URL,
            transport: Transport | None = None,
    ) -> None:
        self._repo_url = repo_url
        self._identity = RepositoryIdentity.parse(repo_url)
        self._client = ApiClient(self._identity, token, base_url=base_url, transport=transport)
        with logging_context(repo=self._identity.full_name):
            logger.debug("Initialized GitHub client", extra={"context": {"base_url": self._client.base_url}})

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHub":
        transport = HttpxTransport(timeout=httpx.Timeout(settings.timeout_seconds))
        return cls(settings.repo_url, settings.token, base_url=settings.base_url, transport=transport)

    def __enter__(self) -> "GitHub":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def api(self) -> ApiClient:
        return self._client

    @property
    def identity(self) -> RepositoryIdentity:
        return self._identity

    @property
    def repo_url(self) -> str:
        return self._repo_url

    @property
    def owner(self) -> str:
        return self._identity.owner

    @property
    def repo(self) -> str:
        return self._identity.name

    @property
    def full_name(self) -> str:
        return self._identity.full_name

    @property
    def base_url(self) -> str:
        return self._client.base_url

    def issues(self, issue_number: Optional[int] = None) -> IssueService:
        """Return an issue service, bound to ``issue_number`` when one is given."""
        return IssueService(self._client, issue_number)

    def content(self) -> ContentPublisher:
        return ContentPublisher(self._client, self.branches())

    def branches(self) -> BranchResolver:
        return BranchResolver(self._client)


@contextmanager
def with_client(repo_url: str, token: str, **kwargs) -> Iterator[GitHub]:
    client = GitHub(repo_url, token, **kwargs)
    try:
        yield client
    finally:
        client.close()
