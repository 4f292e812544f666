"""Data models for the GitHub client.

Each model mirrors the JSON shape of a GitHub resource. ``from_dict`` ignores
keys the model does not know about and fills in defaults for missing ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StatusState(str, Enum):
    """Commit status state."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


@dataclass
class User:
    """GitHub account reference."""

    login: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> User:
        if not data:
            return cls()
        return cls(login=data.get("login") or "")


@dataclass
class IssueComment:
    """Comment on an issue or pull request."""

    id: int
    body: str = ""
    user: User = field(default_factory=User)
    html_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IssueComment:
        return cls(
            id=int(data["id"]),
            body=data.get("body") or "",
            user=User.from_dict(data.get("user")),
            html_url=data.get("html_url") or "",
        )


@dataclass
class PullRequestBranch:
    """Head or base side of a pull request."""

    ref: str = ""
    sha: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> PullRequestBranch | None:
        if not data:
            return None
        return cls(ref=data.get("ref") or "", sha=data.get("sha") or "")


@dataclass
class PullRequest:
    """Pull request data."""

    number: int
    user: User = field(default_factory=User)
    title: str = ""
    state: str = ""
    html_url: str = ""
    head: PullRequestBranch | None = None
    base: PullRequestBranch | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PullRequest:
        return cls(
            number=int(data.get("number") or 0),
            user=User.from_dict(data.get("user")),
            title=data.get("title") or "",
            state=data.get("state") or "",
            html_url=data.get("html_url") or "",
            head=PullRequestBranch.from_dict(data.get("head")),
            base=PullRequestBranch.from_dict(data.get("base")),
        )


@dataclass
class Status:
    """Commit status as sent to the statuses endpoint.

    Attributes:
        context: Label that tells this status apart from others on the commit.
        state: One of the StatusState values.
        description: Short human readable description.
        target_url: Link shown next to the status.
    """

    context: str = ""
    state: str = ""
    description: str = ""
    target_url: str = ""

    def to_dict(self) -> dict[str, str]:
        state = self.state.value if isinstance(self.state, StatusState) else self.state
        return {
            "state": state,
            "target_url": self.target_url,
            "description": self.description,
            "context": self.context,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Status:
        return cls(
            context=data.get("context") or "",
            state=data.get("state") or "",
            description=data.get("description") or "",
            target_url=data.get("target_url") or "",
        )


@dataclass
class Label:
    """Issue label."""

    name: str
    color: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Label:
        return cls(name=data["name"], color=data.get("color") or "")
