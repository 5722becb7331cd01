import pytest

from repo_api.errors import MalformedApiResponse, UnexpectedApiResponse
from repo_api.services.branches import BranchResolver


def test_latest_commit_sha_returns_head_sha(api_client, transport):
    transport.queue(200, {"name": "main", "commit": {"sha": "abc123"}})

    assert BranchResolver(api_client).latest_commit_sha("main") == "abc123"
    assert transport.calls == [("GET", "/repos/octo/hello/branches/main")]


def test_latest_commit_sha_treats_404_as_absent(api_client, transport):
    transport.queue(404, {"message": "Branch not found"})

    assert BranchResolver(api_client).latest_commit_sha("images") is None


def test_latest_commit_sha_raises_on_other_status(api_client, transport):
    transport.queue(403, {"message": "Bad credentials"})

    with pytest.raises(UnexpectedApiResponse) as excinfo:
        BranchResolver(api_client).latest_commit_sha("main")

    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Bad credentials"


def test_latest_commit_sha_requires_commit_sha(api_client, transport):
    transport.queue(200, {"name": "main", "commit": {}})

    with pytest.raises(MalformedApiResponse):
        BranchResolver(api_client).latest_commit_sha("main")


def test_default_branch_name(api_client, transport):
    transport.queue(200, {"full_name": "octo/hello", "default_branch": "trunk"})

    assert BranchResolver(api_client).default_branch_name() == "trunk"
    assert transport.calls == [("GET", "/repos/octo/hello")]


def test_default_branch_name_raises_on_error_status(api_client, transport):
    transport.queue(404)

    with pytest.raises(UnexpectedApiResponse) as excinfo:
        BranchResolver(api_client).default_branch_name()

    assert excinfo.value.message == "Unknown error"


def test_default_branch_name_requires_field(api_client, transport):
    transport.queue(200, {"full_name": "octo/hello"})

    with pytest.raises(MalformedApiResponse):
        BranchResolver(api_client).default_branch_name()


def test_create_branch_posts_ref(api_client, transport):
    transport.queue(201, {"ref": "refs/heads/images"})

    BranchResolver(api_client).create_branch("images", "abc123")

    request = transport.requests[0]
    assert transport.calls == [("POST", "/repos/octo/hello/git/refs")]
    assert request.json == {"ref": "refs/heads/images", "sha": "abc123"}


@pytest.mark.parametrize("status", [200, 422])
def test_create_branch_requires_created_status(api_client, transport, status):
    transport.queue(status, {"message": "Reference already exists"})

    with pytest.raises(UnexpectedApiResponse):
        BranchResolver(api_client).create_branch("images", "abc123")
