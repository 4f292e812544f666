"""GitHubClient - Synchronous client for the GitHub REST API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx

from ghclient import __version__
from ghclient.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ghclient.github.exceptions import GitHubError, TransportError, UnexpectedStatusError
from ghclient.github.models import IssueComment, Label, PullRequest, Status
from ghclient.github.pagination import fetch_all_pages
from ghclient.logging import sanitize_for_log, truncate_output

if TYPE_CHECKING:
    from ghclient.config import ClientConfig

logger = logging.getLogger("ghclient.github")

API_VERSION = "2022-11-28"

T = TypeVar("T")


class GitHubClient:
    """Client for the GitHub REST API.

    Every operation is a plain request/response round trip. A response whose
    status code differs from the one the operation expects raises
    UnexpectedStatusError; network failures raise TransportError. Nothing is
    retried.

    The client keeps no per-call state, so one instance can be shared
    between threads.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        dry_run: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            base_url: GitHub API base URL (for testing/enterprise)
            token: Token sent as a bearer credential, anonymous if None
            timeout: Request timeout in seconds
            dry_run: Log write operations instead of sending them
            transport: Custom httpx transport (for testing)
        """
        self.base_url = base_url.rstrip("/")
        self._base = httpx.URL(self.base_url)
        self.dry_run = dry_run

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"ghclient/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: httpx.BaseTransport | None = None
    ) -> GitHubClient:
        """Create a client from a ClientConfig."""
        return cls(
            base_url=config.base_url,
            token=config.token,
            timeout=config.timeout,
            dry_run=config.dry_run,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        expected: int,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request and check its status code.

        Args:
            method: HTTP method
            url: API path, or an absolute URL such as a pagination link
            expected: Status code that means success
            json: JSON body, if any

        Returns:
            The response

        Raises:
            TransportError: If no response was received
            UnexpectedStatusError: If the status code is not `expected`
        """
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, json=json)
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

        if response.status_code != expected:
            logger.error(
                "%s %s returned %d (expected %d): %s",
                method,
                url,
                response.status_code,
                expected,
                truncate_output(sanitize_for_log(response.text), max_length=500),
            )
            raise UnexpectedStatusError(
                method=method,
                url=str(response.request.url),
                status_code=response.status_code,
                expected=expected,
                body=response.text,
            )
        return response

    def _write(self, method: str, path: str, expected: int, json: Any = None) -> None:
        """Send a request that changes state, unless in dry-run mode."""
        if self.dry_run:
            logger.info("[dry-run] Would %s %s with %r", method, path, json)
            return
        self._request(method, path, expected, json=json)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        """Decode a JSON response body.

        Raises:
            GitHubError: If the body isn't valid JSON
        """
        try:
            return response.json()
        except ValueError as e:
            raise GitHubError(
                f"Invalid JSON from {response.request.url}: "
                f"{truncate_output(response.text, max_length=200)}"
            ) from e

    def _json_list(self, response: httpx.Response) -> list[dict[str, Any]]:
        data = self._json(response)
        if not isinstance(data, list):
            raise GitHubError(
                f"Expected a JSON array from {response.request.url}, got {type(data).__name__}"
            )
        return data

    def _get_page(self, url: str) -> httpx.Response:
        target = httpx.URL(url)
        if target.is_absolute_url and (target.host, target.port) != (
            self._base.host,
            self._base.port,
        ):
            # Never send the token to a host other than the API's
            raise GitHubError(f"Refusing to follow pagination link to another host: {url}")
        return self._request("GET", url, 200)

    def _decode_items(
        self, response: httpx.Response, from_dict: Callable[[dict[str, Any]], T]
    ) -> list[T]:
        """Decode every object of a JSON array page.

        Raises:
            GitHubError: If an item isn't an object or lacks required fields
        """
        items = []
        for item in self._json_list(response):
            if not isinstance(item, dict):
                raise GitHubError(
                    f"Expected JSON objects from {response.request.url}, "
                    f"got {type(item).__name__}"
                )
            try:
                items.append(from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise GitHubError(f"Malformed item from {response.request.url}: {e!r}") from e
        return items

    # -------------------------------------------------------------------------
    # Organizations
    # -------------------------------------------------------------------------

    def is_member(self, org: str, user: str) -> bool:
        """Check whether a user is a member of an organization.

        Args:
            org: Organization login
            user: User login

        Returns:
            True when GitHub answers 204 No Content

        Raises:
            UnexpectedStatusError: For any other status, including 404 for
                non-members and 302 for unauthenticated requests
        """
        self._request("GET", f"/orgs/{org}/members/{user}", 204)
        logger.debug("%s is a member of %s", user, org)
        return True

    # -------------------------------------------------------------------------
    # Issue comments
    # -------------------------------------------------------------------------

    def create_comment(self, org: str, repo: str, number: int, body: str) -> None:
        """Comment on an issue or pull request.

        Args:
            org: Repository owner
            repo: Repository name
            number: Issue or pull request number
            body: Comment text (markdown)
        """
        logger.info("Commenting on %s/%s#%d", org, repo, number)
        self._write(
            "POST",
            f"/repos/{org}/{repo}/issues/{number}/comments",
            201,
            json={"body": body},
        )

    def delete_comment(self, org: str, repo: str, comment_id: int) -> None:
        """Delete an issue comment by ID."""
        logger.info("Deleting comment %d in %s/%s", comment_id, org, repo)
        self._write("DELETE", f"/repos/{org}/{repo}/issues/comments/{comment_id}", 204)

    def list_issue_comments(self, org: str, repo: str, number: int) -> list[IssueComment]:
        """Get all comments on an issue, following pagination.

        Args:
            org: Repository owner
            repo: Repository name
            number: Issue or pull request number

        Returns:
            Comments in the order GitHub returns them, across all pages
        """
        comments = fetch_all_pages(
            self._get_page,
            f"/repos/{org}/{repo}/issues/{number}/comments",
            lambda response: self._decode_items(response, IssueComment.from_dict),
        )
        logger.debug("Found %d comment(s) on %s/%s#%d", len(comments), org, repo, number)
        return comments

    # -------------------------------------------------------------------------
    # Pull requests and statuses
    # -------------------------------------------------------------------------

    def get_pull_request(self, org: str, repo: str, number: int) -> PullRequest:
        """Get a pull request.

        Args:
            org: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            PullRequest with its author and branch information
        """
        response = self._request("GET", f"/repos/{org}/{repo}/pulls/{number}", 200)
        data = self._json(response)
        if not isinstance(data, dict):
            raise GitHubError(f"Expected a JSON object for PR {org}/{repo}#{number}")
        try:
            return PullRequest.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise GitHubError(f"Malformed PR {org}/{repo}#{number}: {e!r}") from e

    def create_status(self, org: str, repo: str, sha: str, status: Status) -> None:
        """Set a commit status.

        Args:
            org: Repository owner
            repo: Repository name
            sha: Commit SHA
            status: Status to create
        """
        logger.info(
            "Setting status %s=%s on %s/%s@%s",
            status.context,
            status.to_dict()["state"],
            org,
            repo,
            sha,
        )
        self._write("POST", f"/repos/{org}/{repo}/statuses/{sha}", 201, json=status.to_dict())

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def add_label(self, org: str, repo: str, number: int, label: str) -> None:
        """Add a label to an issue or pull request."""
        logger.info("Adding label %r to %s/%s#%d", label, org, repo, number)
        self._write("POST", f"/repos/{org}/{repo}/issues/{number}/labels", 200, json=[label])

    def remove_label(self, org: str, repo: str, number: int, label: str) -> None:
        """Remove a label from an issue or pull request."""
        logger.info("Removing label %r from %s/%s#%d", label, org, repo, number)
        # Labels like "kind/bug" or "what?" must stay a single path segment
        path = f"/repos/{org}/{repo}/issues/{number}/labels/{quote(label, safe='')}"
        self._write("DELETE", path, 204)

    def list_issue_labels(self, org: str, repo: str, number: int) -> list[Label]:
        """Get all labels on an issue, following pagination."""
        return fetch_all_pages(
            self._get_page,
            f"/repos/{org}/{repo}/issues/{number}/labels",
            lambda response: self._decode_items(response, Label.from_dict),
        )
