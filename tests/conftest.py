"""Test configuration and fixtures."""

from collections.abc import Iterator
from unittest.mock import Mock, patch

import pytest

from github_toolkit.config import ToolsConfig, WrapperConfig
from github_toolkit.github_client.client import GitHubAPIWrapper


@pytest.fixture
def wrapper_config() -> WrapperConfig:
    """Wrapper settings for a fake repository with a working branch."""
    return WrapperConfig(
        repository="octo/demo",
        app_id="12345",
        private_key="test-key",
        active_branch="feature",
    )


@pytest.fixture
def mock_repo() -> Mock:
    """PyGitHub repository double whose default branch is main."""
    repo = Mock()
    repo.default_branch = "main"
    repo.full_name = "octo/demo"
    return repo


@pytest.fixture
def mock_github(mock_repo: Mock) -> Iterator[Mock]:
    """Patch the wrapper's Github class and return the client double."""
    with patch("github_toolkit.github_client.client.Github") as mock_github_class:
        github = Mock()
        github.get_repo.return_value = mock_repo
        mock_github_class.return_value = github
        yield github


@pytest.fixture
def wrapper(wrapper_config: WrapperConfig, mock_github: Mock) -> GitHubAPIWrapper:
    """Wrapper with active branch "feature" and base branch "main"."""
    return GitHubAPIWrapper(wrapper_config)


@pytest.fixture
def tools_config() -> ToolsConfig:
    """Standalone tool settings with a working branch."""
    return ToolsConfig(token="test-token", repository="octo/demo", branch="feature")


@pytest.fixture
def tools_github(mock_repo: Mock) -> Iterator[Mock]:
    """Patch the standalone tools' Github class and return the client double."""
    with patch("github_toolkit.tools.base.Github") as mock_github_class:
        github = Mock()
        github.get_repo.return_value = mock_repo
        mock_github_class.return_value = github
        yield github
