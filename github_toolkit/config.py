"""Configuration models for the GitHub wrapper, tools and loaders.

Environment variables are only read here, through the ``from_env`` helpers.
Everything else receives an explicit config object.
"""

import os

from pydantic import BaseModel, Field

from .errors import ConfigurationError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


def parse_repository(repository: str) -> tuple[str, str]:
    """Split an ``owner/repo`` string into its two parts.

    Args:
        repository: Repository in "owner/repo" format

    Returns:
        Tuple of (owner, repo)

    Raises:
        ConfigurationError: If the string is not exactly two non-empty parts
    """
    parts = repository.split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"invalid repository format: {repository} (expected owner/repo)"
        )
    return parts[0], parts[1]


class WrapperConfig(BaseModel):
    """Settings for :class:`~github_toolkit.github_client.GitHubAPIWrapper`."""

    repository: str = Field("", description="Repository in owner/repo format")
    app_id: str = Field("", description="GitHub App ID")
    private_key: str = Field(
        "", description="GitHub App private key (used as the bearer token)"
    )
    active_branch: str = Field(
        "", description="Working branch; defaults to the repository default branch"
    )
    base_branch: str = Field(
        "", description="Base branch; defaults to the repository default branch"
    )
    api_url: str = Field(DEFAULT_API_URL, description="GitHub API base URL")
    timeout: float = Field(DEFAULT_TIMEOUT, description="Per-request timeout (s)")

    @classmethod
    def from_env(cls, **overrides: str) -> "WrapperConfig":
        """Build a config, filling empty values from the environment.

        Explicit non-empty overrides win over GITHUB_REPOSITORY,
        GITHUB_APP_ID and GITHUB_APP_PRIVATE_KEY.
        """
        values = {key: value for key, value in overrides.items() if value}
        values.setdefault("repository", os.getenv("GITHUB_REPOSITORY", ""))
        values.setdefault("app_id", os.getenv("GITHUB_APP_ID", ""))
        values.setdefault("private_key", os.getenv("GITHUB_APP_PRIVATE_KEY", ""))
        return cls(**values)

    def validate_required(self) -> tuple[str, str]:
        """Check required fields and return the parsed (owner, repo)."""
        if not self.repository:
            raise ConfigurationError("GITHUB_REPOSITORY is required")
        if not self.app_id:
            raise ConfigurationError("GITHUB_APP_ID is required")
        if not self.private_key:
            raise ConfigurationError("GITHUB_APP_PRIVATE_KEY is required")
        return parse_repository(self.repository)


class ToolsConfig(BaseModel):
    """Settings for the standalone tool family in :mod:`github_toolkit.tools`."""

    token: str = Field("", description="GitHub personal access token")
    repository: str = Field("", description="Repository in owner/repo format")
    branch: str | None = Field(
        None, description="Working branch used for reads, writes and PR heads"
    )
    api_url: str = Field(DEFAULT_API_URL, description="GitHub API base URL")
    timeout: float = Field(DEFAULT_TIMEOUT, description="Per-request timeout (s)")

    @classmethod
    def from_env(cls, **overrides: str) -> "ToolsConfig":
        """Build a config from GITHUB_TOKEN, GITHUB_REPOSITORY and GITHUB_BRANCH."""
        values = {key: value for key, value in overrides.items() if value}
        values.setdefault("token", os.getenv("GITHUB_TOKEN", ""))
        values.setdefault("repository", os.getenv("GITHUB_REPOSITORY", ""))
        branch = os.getenv("GITHUB_BRANCH")
        if branch:
            values.setdefault("branch", branch)
        return cls(**values)

    def validate_required(self) -> tuple[str, str]:
        """Check required fields and return the parsed (owner, repo)."""
        if not self.token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is required")
        if not self.repository:
            raise ConfigurationError(
                "GITHUB_REPOSITORY environment variable is required "
                "(format: owner/repo)"
            )
        try:
            return parse_repository(self.repository)
        except ConfigurationError:
            raise ConfigurationError(
                "GITHUB_REPOSITORY must be in format 'owner/repo', "
                f"got: {self.repository}"
            ) from None


def loader_token(access_token: str | None = None) -> str:
    """Resolve the access token used by the document loaders.

    Args:
        access_token: Explicit token. If None, reads from
            GITHUB_PERSONAL_ACCESS_TOKEN env var.

    Raises:
        ConfigurationError: If no token is available
    """
    token = access_token or os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN")
    if not token:
        raise ConfigurationError(
            "GITHUB_PERSONAL_ACCESS_TOKEN environment variable is required"
        )
    return token
