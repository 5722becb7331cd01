"""Repository identity parsed from a clone or browser URL."""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .errors import InvalidRepositoryUrl

_GIT_SUFFIX = ".git"


@dataclass(frozen=True)
class RepositoryIdentity:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, url: str) -> "RepositoryIdentity":
        """Extract ``owner`` and ``name`` from e.g. ``https://github.com/octo/hello.git``.

        Only the first two non-empty path segments are used, so browser URLs such as
        ``https://github.com/octo/hello/issues/3`` resolve to the same repository.
        """

        path = urlsplit(url).path
        if not path:
            raise InvalidRepositoryUrl(f"Invalid repository URL: {url}")

        segments = [segment for segment in path.split("/") if segment]
        if len(segments) < 2:
            raise InvalidRepositoryUrl(f"Could not extract owner/repo from: {url}")

        owner, name = segments[0], segments[1]
        if name.endswith(_GIT_SUFFIX):
            name = name[: -len(_GIT_SUFFIX)]
        if not name:
            raise InvalidRepositoryUrl(f"Could not extract owner/repo from: {url}")
        return cls(owner=owner, name=name)
