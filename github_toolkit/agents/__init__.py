"""Agent toolkit exposing the GitHub wrapper modes as tools."""

from .toolkit import GitHubAgentTool, GitHubAgentToolkit, preprocess_input

__all__ = ["GitHubAgentTool", "GitHubAgentToolkit", "preprocess_input"]
