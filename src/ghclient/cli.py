"""CLI entry point for ghclient.

Thin command line front end over GitHubClient: one command per API
operation, JSON on stdout, errors on stderr with exit status 1.
"""

from __future__ import annotations

import functools
import json
import sys
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path
from typing import Any, NoReturn, TypeVar

import click

from ghclient import __version__
from ghclient.config import ClientConfig, ConfigError, config_from_env, load_config
from ghclient.github import (
    GitHubClient,
    GitHubError,
    Status,
    StatusState,
    UnexpectedStatusError,
)
from ghclient.logging import get_logger, setup_logging

logger = get_logger("cli")

F = TypeVar("F", bound=Callable[..., Any])


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _reports_errors(func: F) -> F:
    """Turn GitHubError into an error message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except GitHubError as e:
            _fail(str(e))

    return wrapper  # type: ignore[return-value]


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2))


def build_config(
    config_path: Path | None,
    base_url: str | None,
    token: str | None,
    timeout: float | None,
    dry_run: bool,
) -> ClientConfig:
    """Resolve client settings from options, config file and environment.

    Options win over the config file. Without a config file the
    environment is used instead.
    """
    config = load_config(config_path) if config_path else config_from_env()
    return config.merge(
        base_url=base_url,
        token=token,
        timeout=timeout,
        dry_run=True if dry_run else None,
    )


@click.group()
@click.version_option(version=__version__, prog_name="ghclient")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with base_url, token, timeout and dry_run",
)
@click.option("--base-url", help="API base URL (default: https://api.github.com)")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    show_envvar=True,
    help="Token sent as a bearer credential",
)
@click.option("--timeout", type=float, help="Request timeout in seconds")
@click.option("--dry-run", is_flag=True, help="Log write operations instead of sending them")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Also write a rotating log file to this directory",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    base_url: str | None,
    token: str | None,
    timeout: float | None,
    dry_run: bool,
    verbose: bool,
    log_dir: Path | None,
) -> None:
    """Command line client for the GitHub REST API."""
    setup_logging(log_dir=log_dir, level="DEBUG" if verbose else None)

    try:
        config = build_config(config_path, base_url, token, timeout, dry_run)
    except ConfigError as e:
        _fail(str(e))

    logger.debug("Using API at %s (dry_run=%s)", config.base_url, config.dry_run)
    ctx.obj = ctx.with_resource(GitHubClient.from_config(config))


@main.command("is-member")
@click.argument("org")
@click.argument("user")
@click.pass_obj
@_reports_errors
def is_member(client: GitHubClient, org: str, user: str) -> None:
    """Check whether USER is a member of ORG."""
    try:
        member = client.is_member(org, user)
    except UnexpectedStatusError as e:
        if e.status_code != 404:
            raise
        member = False
    click.echo("true" if member else "false")


@main.command()
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.argument("body")
@click.pass_obj
@_reports_errors
def comment(client: GitHubClient, org: str, repo: str, number: int, body: str) -> None:
    """Comment on issue or pull request NUMBER."""
    client.create_comment(org, repo, number, body)


@main.command("delete-comment")
@click.argument("org")
@click.argument("repo")
@click.argument("comment_id", type=int)
@click.pass_obj
@_reports_errors
def delete_comment(client: GitHubClient, org: str, repo: str, comment_id: int) -> None:
    """Delete issue comment COMMENT_ID."""
    client.delete_comment(org, repo, comment_id)


@main.command()
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.pass_obj
@_reports_errors
def comments(client: GitHubClient, org: str, repo: str, number: int) -> None:
    """List all comments on issue or pull request NUMBER."""
    _echo_json([asdict(c) for c in client.list_issue_comments(org, repo, number)])


@main.command()
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.pass_obj
@_reports_errors
def pr(client: GitHubClient, org: str, repo: str, number: int) -> None:
    """Show pull request NUMBER."""
    _echo_json(asdict(client.get_pull_request(org, repo, number)))


@main.command()
@click.argument("org")
@click.argument("repo")
@click.argument("sha")
@click.option(
    "--state",
    required=True,
    type=click.Choice([s.value for s in StatusState]),
    help="Status state",
)
@click.option("--context", "status_context", default="", help="Status context name")
@click.option("--description", default="", help="Short description")
@click.option("--target-url", default="", help="Link shown with the status")
@click.pass_obj
@_reports_errors
def status(
    client: GitHubClient,
    org: str,
    repo: str,
    sha: str,
    state: str,
    status_context: str,
    description: str,
    target_url: str,
) -> None:
    """Set a commit status on SHA."""
    client.create_status(
        org,
        repo,
        sha,
        Status(
            context=status_context,
            state=state,
            description=description,
            target_url=target_url,
        ),
    )


@main.command()
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.pass_obj
@_reports_errors
def labels(client: GitHubClient, org: str, repo: str, number: int) -> None:
    """List labels on issue or pull request NUMBER."""
    _echo_json([asdict(label) for label in client.list_issue_labels(org, repo, number)])


@main.command("add-label")
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.argument("label")
@click.pass_obj
@_reports_errors
def add_label(client: GitHubClient, org: str, repo: str, number: int, label: str) -> None:
    """Add LABEL to issue or pull request NUMBER."""
    client.add_label(org, repo, number, label)


@main.command("remove-label")
@click.argument("org")
@click.argument("repo")
@click.argument("number", type=int)
@click.argument("label")
@click.pass_obj
@_reports_errors
def remove_label(client: GitHubClient, org: str, repo: str, number: int, label: str) -> None:
    """Remove LABEL from issue or pull request NUMBER."""
    client.remove_label(org, repo, number, label)


if __name__ == "__main__":
    main()
