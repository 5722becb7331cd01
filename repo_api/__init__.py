"""Client for GitHub repository content uploads and issue management."""
from .clients.github import ApiClient, ApiRequest, ApiResponse, HttpxTransport, Transport
from .config import Settings
from .errors import (
    BranchBootstrapFailed,
    ConfigurationError,
    FileNotFound,
    FileReadError,
    InvalidRepositoryUrl,
    IssueNotBound,
    MalformedApiResponse,
    RepoApiError,
    UnexpectedApiResponse,
)
from .github import GitHub, with_client
from .identity import RepositoryIdentity
from .schemas import Issue, IssueListFilters, UploadOptions
from .services.branches import BranchResolver
from .services.content import ContentPublisher
from .services.issues import Bound, IssueService, Unbound

__all__ = [
    "ApiClient",
    "ApiRequest",
    "ApiResponse",
    "Bound",
    "BranchBootstrapFailed",
    "BranchResolver",
    "ConfigurationError",
    "ContentPublisher",
    "FileNotFound",
    "FileReadError",
    "GitHub",
    "HttpxTransport",
    "InvalidRepositoryUrl",
    "Issue",
    "IssueListFilters",
    "IssueNotBound",
    "IssueService",
    "MalformedApiResponse",
    "RepoApiError",
    "RepositoryIdentity",
    "Settings",
    "Transport",
    "Unbound",
    "UploadOptions",
    "UnexpectedApiResponse",
    "with_client",
]
