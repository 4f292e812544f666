"""Custom exceptions for the GitHub client."""

from __future__ import annotations

from ghclient.logging import sanitize_for_log, truncate_output


class GitHubError(Exception):
    """Base exception for GitHub client errors."""


class TransportError(GitHubError):
    """Request never got a response (network, TLS or timeout failure)."""


class UnexpectedStatusError(GitHubError):
    """Response status code differs from the one the operation expects.

    Attributes:
        method: HTTP method of the failed request.
        url: Full request URL.
        status_code: Status code returned by the server.
        expected: Status code the operation expected.
        body: Raw response text.
    """

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        expected: int,
        body: str = "",
    ) -> None:
        """Initialize the exception.

        Args:
            method: HTTP method of the failed request.
            url: Full request URL.
            status_code: Status code returned by the server.
            expected: Status code the operation expected.
            body: Raw response text.
        """
        detail = truncate_output(sanitize_for_log(body), max_length=500)
        super().__init__(
            f"{method} {url} returned {status_code} (expected {expected})"
            + (f": {detail}" if detail else "")
        )
        self.method = method
        self.url = url
        self.status_code = status_code
        self.expected = expected
        self.body = body
