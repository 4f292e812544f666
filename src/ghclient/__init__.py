"""ghclient - Synchronous client for the GitHub REST API."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed ghclient version."""
    return __version__
