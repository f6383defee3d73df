"""Shared client and base class for the standalone GitHub tools."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Protocol

from github import Auth, Github
from github.ContentFile import ContentFile
from github.Repository import Repository

from ..config import ToolsConfig
from ..errors import REQUEST_ERRORS, GitHubToolError, InputFormatError
from ..github_client.queries import normalize_path

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_time(value: datetime | None) -> str:
    """Format a timestamp for tool output, or "" if it is missing."""
    return value.strftime(TIME_FORMAT) if value else ""


class GitHubToolClient:
    """PyGitHub client bound to the repository named in a :class:`ToolsConfig`."""

    def __init__(self, config: ToolsConfig):
        """Initialize the client.

        Raises:
            ConfigurationError: If the token or repository is missing or
                the repository is not in owner/repo format
        """
        self.owner, self.repo_name = config.validate_required()
        self.config = config
        self.github = Github(
            auth=Auth.Token(config.token),
            base_url=config.api_url,
            timeout=int(config.timeout),
        )
        self._repo: Repository | None = None

    @classmethod
    def from_env(cls) -> "GitHubToolClient":
        return cls(ToolsConfig.from_env())

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo_name}"

    @property
    def branch(self) -> str | None:
        return self.config.branch

    @property
    def repo(self) -> Repository:
        """Repository object, fetched on first use."""
        if self._repo is None:
            self._repo = self.github.get_repo(self.full_name)
        return self._repo

    def get_file(self, path: str) -> ContentFile:
        """Fetch a single file on the working branch (or the default branch).

        Raises:
            GitHubToolError: If the path is a directory
            GithubException: If GitHub rejects the request
            RequestException: If the request cannot be sent
        """
        if self.branch:
            contents = self.repo.get_contents(path, ref=self.branch)
        else:
            contents = self.repo.get_contents(path)
        if isinstance(contents, list):
            raise GitHubToolError(f"file {path} not found or is a directory")
        return contents

    def branch_kwargs(self) -> dict[str, str]:
        """Keyword arguments that target the working branch, if one is set."""
        return {"branch": self.branch} if self.branch else {}


class ToolCallbacks(Protocol):
    """Receives notifications around each tool call."""

    def handle_tool_start(self, tool_input: str) -> None: ...

    def handle_tool_end(self, output: str) -> None: ...

    def handle_tool_error(self, error: Exception) -> None: ...


class BaseTool(ABC):
    """A named tool that takes one text input and returns text.

    Subclasses implement :meth:`_run`. Failures always surface as
    :class:`GitHubToolError`.
    """

    name: str = ""
    description: str = ""

    def __init__(
        self, client: GitHubToolClient, callbacks: ToolCallbacks | None = None
    ):
        self.client = client
        self.callbacks = callbacks

    def set_callbacks(self, callbacks: ToolCallbacks | None) -> None:
        self.callbacks = callbacks

    @abstractmethod
    def _run(self, tool_input: str) -> str:
        """Perform the operation and return its text output."""

    def call(self, tool_input: str = "") -> str:
        """Run the tool, notifying callbacks on start, end and error.

        Raises:
            GitHubToolError: If the input is invalid or the request fails
        """
        if self.callbacks is not None:
            self.callbacks.handle_tool_start(tool_input)

        try:
            output = self._run(tool_input)
        except GitHubToolError as e:
            self._handle_error(e)
            raise
        except InputFormatError as e:
            error = GitHubToolError(str(e))
            self._handle_error(error)
            raise error from e
        except REQUEST_ERRORS as e:
            error = GitHubToolError(f"{self.name} failed: {e}")
            self._handle_error(error)
            raise error from e

        if self.callbacks is not None:
            self.callbacks.handle_tool_end(output)
        return output

    def _handle_error(self, error: Exception) -> None:
        logger.warning("Tool %r failed: %s", self.name, error)
        if self.callbacks is not None:
            self.callbacks.handle_tool_error(error)


def require_text(value: str, what: str) -> str:
    """Strip ``value`` and reject it if nothing is left."""
    value = value.strip()
    if not value:
        raise GitHubToolError(f"{what} cannot be empty")
    return value


def parse_tool_number(value: str, label: str) -> int:
    """Parse an issue or PR number for a tool, raising GitHubToolError."""
    try:
        return int(value.strip())
    except ValueError:
        raise GitHubToolError(f"invalid {label}: {value}") from None


def tool_path(value: str) -> str:
    return require_text(normalize_path(value), "file path")
