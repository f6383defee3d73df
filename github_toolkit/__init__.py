"""GitHub REST API wrappers, agent tools and document loaders."""

__version__ = "0.1.0"

from .agents import GitHubAgentTool, GitHubAgentToolkit, preprocess_input
from .config import ToolsConfig, WrapperConfig
from .document_loaders import Document, GitHubFileLoader, GitHubIssuesLoader
from .errors import (
    ConfigurationError,
    GitHubAPIError,
    GitHubToolError,
    GitHubToolkitError,
    InputFormatError,
    InvalidModeError,
)
from .github_client import GitHubAPIWrapper, Mode
from .tools import Toolkit

__all__ = [
    "ConfigurationError",
    "Document",
    "GitHubAPIError",
    "GitHubAPIWrapper",
    "GitHubAgentTool",
    "GitHubAgentToolkit",
    "GitHubFileLoader",
    "GitHubIssuesLoader",
    "GitHubToolError",
    "GitHubToolkitError",
    "InputFormatError",
    "InvalidModeError",
    "Mode",
    "Toolkit",
    "ToolsConfig",
    "WrapperConfig",
    "__version__",
    "preprocess_input",
]
