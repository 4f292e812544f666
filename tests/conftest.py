"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from ghclient.github import GitHubClient

TEST_BASE_URL = "https://github.test"

Handler = Callable[[httpx.Request], httpx.Response]


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the real GitHub API (local only)")


class RecordingServer:
    """In-process stand-in for the GitHub API built on httpx.MockTransport.

    Records every request it receives and answers with the handler's response.
    """

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def make_client() -> Iterator[Callable[..., tuple[GitHubClient, RecordingServer]]]:
    """Build a GitHubClient wired to a RecordingServer."""
    clients: list[GitHubClient] = []

    def factory(handler: Handler, **kwargs: Any) -> tuple[GitHubClient, RecordingServer]:
        server = RecordingServer(handler)
        client = GitHubClient(
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(server),
            **kwargs,
        )
        clients.append(client)
        return client, server

    yield factory

    for client in clients:
        client.close()
