import pytest

from repo_api.errors import InvalidRepositoryUrl
from repo_api.identity import RepositoryIdentity


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/octo/hello",
        "https://github.com/octo/hello.git",
        "https://github.com/octo/hello/",
        "https://github.com/octo/hello/issues/3",
        "ssh://git@github.com/octo/hello.git",
    ],
)
def test_parse_extracts_owner_and_name(url):
    identity = RepositoryIdentity.parse(url)

    assert identity == RepositoryIdentity(owner="octo", name="hello")
    assert identity.full_name == "octo/hello"


def test_parse_strips_git_suffix_from_name_only():
    identity = RepositoryIdentity.parse("https://github.com/team.git/tools.git")

    assert identity.owner == "team.git"
    assert identity.name == "tools"


def test_parse_keeps_inner_git_text():
    assert RepositoryIdentity.parse("https://github.com/octo/git.github.io").name == "git.github.io"


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com",
        "https://github.com/",
        "https://github.com/octo",
        "https://github.com/octo/.git",
    ],
)
def test_parse_rejects_urls_without_owner_and_name(url):
    with pytest.raises(InvalidRepositoryUrl):
        RepositoryIdentity.parse(url)


def test_invalid_url_is_a_value_error():
    with pytest.raises(ValueError):
        RepositoryIdentity.parse("not a url")


def test_identity_is_immutable():
    identity = RepositoryIdentity(owner="octo", name="hello")

    with pytest.raises(AttributeError):
        identity.name = "other"
