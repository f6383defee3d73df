"""Exception types raised by the GitHub toolkit."""

from github.GithubException import GithubException
from requests.exceptions import RequestException

# What a PyGitHub call can raise: API errors and transport failures
REQUEST_ERRORS = (GithubException, RequestException)


class GitHubToolkitError(Exception):
    """Base class for all toolkit errors."""


class ConfigurationError(GitHubToolkitError, ValueError):
    """Missing credentials or a malformed repository reference."""


class InputFormatError(GitHubToolkitError, ValueError):
    """A tool payload could not be parsed. Raised before any remote call."""


class InvalidModeError(InputFormatError):
    """The requested dispatcher mode is not one of the known modes."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"invalid mode: {mode}")


class GitHubAPIError(GitHubToolkitError):
    """A GitHub request failed (non-2xx status or transport failure)."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class GitHubToolError(GitHubToolkitError):
    """An agent tool call failed."""
