"""GitHub REST transport and the authenticated, repository-scoped request client."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Collection, Mapping, Optional, Protocol
from urllib.parse import quote

import httpx

from ..errors import UnexpectedApiResponse
from ..identity import RepositoryIdentity
from ..utils.logging_utils import get_logger, logging_context

logger = get_logger("repo_api.clients.github")

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = httpx.Timeout(10.0, read=30.0)
ACCEPT_HEADER = "application/vnd.github.v3+json"


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    headers: Mapping[str, str]
    json: Any = None
    params: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    body: Any = field(default=None)


class Transport(Protocol):
    """Capability to send one authenticated JSON request and decode the reply."""

    def send(self, request: ApiRequest) -> ApiResponse:
        ...

    def close(self) -> None:
        ...


class HttpxTransport:
    """Transport backed by a reusable :class:`httpx.Client`."""

    def __init__(self, client: httpx.Client | None = None, timeout: httpx.Timeout = DEFAULT_TIMEOUT) -> None:
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, request: ApiRequest) -> ApiResponse:
        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        if request.json is not None:
            kwargs["json"] = request.json
        if request.params:
            kwargs["params"] = dict(request.params)
        resp = self._client.request(request.method, request.url, **kwargs)
        return ApiResponse(status_code=resp.status_code, body=_decode_body(resp))

    def close(self) -> None:
        self._client.close()


def _decode_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        logger.debug(
            "Response body is not JSON",
            extra={"context": {"status_code": resp.status_code, "url": str(resp.url)}},
        )
        return None


def expect_status(response: ApiResponse, accepted: Collection[int], action: str) -> ApiResponse:
    """Return ``response`` when its status is accepted, otherwise raise."""

    if response.status_code in accepted:
        return response
    message = UnexpectedApiResponse.extract_message(response.body)
    with logging_context(action=action, status_code=response.status_code):
        logger.warning("GitHub returned an unexpected status", extra={"context": {"details": message}})
    raise UnexpectedApiResponse(response.status_code, message, action=action)


class ApiClient:
    """Sends authenticated requests for one repository.

    The client is immutable after construction and shared by every service built
    from the same :class:`~repo_api.github.GitHub` instance. It never retries and
    never interprets status codes; callers decide what counts as success.
    """

    def __init__(
            self,
            identity: RepositoryIdentity,
            token: str,
            *,
            base_url: str = DEFAULT_BASE_URL,
            transport: Transport | None = None,
    ) -> None:
        self._identity = identity
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._transport: Transport = transport or HttpxTransport()

    @property
    def identity(self) -> RepositoryIdentity:
        return self._identity

    @property
    def owner(self) -> str:
        return self._identity.owner

    @property
    def full_name(self) -> str:
        return self._identity.full_name

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        self._transport.close()

    def repo_path(self, *segments: str) -> str:
        """Build ``/repos/{owner}/{name}/...``; slashes inside a segment are kept."""

        path = f"/repos/{quote(self._identity.owner)}/{quote(self._identity.name)}"
        for segment in segments:
            path += "/" + quote(str(segment).strip("/"), safe="/")
        return path

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "User-Agent": self._identity.owner,
            "Accept": ACCEPT_HEADER,
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
            self,
            method: str,
            path: str,
            json_body: Any = None,
            params: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        has_body = json_body is not None
        query = {key: str(value) for key, value in (params or {}).items() if value is not None}
        request = ApiRequest(
            method=method.upper(),
            url=f"{self._base_url}{path}",
            headers=self._headers(has_body),
            json=json_body if has_body else None,
            params=query or None,
        )
        response = self._transport.send(request)
        with logging_context(repo=self.full_name, method=request.method, path=path):
            logger.debug("GitHub request completed", extra={"context": {"status_code": response.status_code}})
        return response
