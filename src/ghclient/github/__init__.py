"""GitHub client - REST API operations for issues, pull requests and statuses."""

from ghclient.github.client import GitHubClient
from ghclient.github.exceptions import GitHubError, TransportError, UnexpectedStatusError
from ghclient.github.models import (
    IssueComment,
    Label,
    PullRequest,
    PullRequestBranch,
    Status,
    StatusState,
    User,
)
from ghclient.github.pagination import fetch_all_pages, next_page_url

__all__ = [
    "GitHubClient",
    "GitHubError",
    "IssueComment",
    "Label",
    "PullRequest",
    "PullRequestBranch",
    "Status",
    "StatusState",
    "TransportError",
    "UnexpectedStatusError",
    "User",
    "fetch_all_pages",
    "next_page_url",
]
