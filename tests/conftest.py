from collections import deque

import pytest

from repo_api.clients.github import ApiClient, ApiResponse
from repo_api.identity import RepositoryIdentity


class FakeTransport:
    """Records every request and replays queued responses in order."""

    def __init__(self):
        self.requests = []
        self._responses = deque()
        self.closed = False

    def queue(self, status_code, body=None):
        self._responses.append(ApiResponse(status_code=status_code, body=body))
        return self

    def send(self, request):
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self._responses.popleft()

    def close(self):
        self.closed = True

    @property
    def calls(self):
        return [(req.method, req.url.replace(BASE_URL, "")) for req in self.requests]


BASE_URL = "https://api.github.test"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def api_client(transport):
    identity = RepositoryIdentity(owner="octo", name="hello")
    return ApiClient(identity, "secret-token", base_url=BASE_URL, transport=transport)


def issue_payload(number=42, title="Bug", body="repro steps", labels=(), assignees=()):
    return {
        "number": number,
        "title": title,
        "body": body,
        "state": "open",
        "labels": [{"id": idx, "name": name} for idx, name in enumerate(labels)],
        "assignees": [{"login": login} for login in assignees],
    }


@pytest.fixture
def make_issue():
    return issue_payload
