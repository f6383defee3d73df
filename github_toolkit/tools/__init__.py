"""Standalone GitHub tools configured from GITHUB_TOKEN and GITHUB_REPOSITORY."""

from .base import BaseTool, GitHubToolClient, ToolCallbacks
from .toolkit import Toolkit

__all__ = ["BaseTool", "GitHubToolClient", "ToolCallbacks", "Toolkit"]
