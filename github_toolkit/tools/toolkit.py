"""Collection of the standalone GitHub tools sharing one client."""

from ..config import ToolsConfig
from .base import BaseTool, GitHubToolClient, ToolCallbacks
from .files import CreateFileTool, DeleteFileTool, ReadFileTool, UpdateFileTool
from .issues import CommentOnIssueTool, GetIssuesTool, GetIssueTool
from .pull_requests import (
    CreatePullRequestTool,
    GetPullRequestTool,
    ListPullRequestFilesTool,
    ListPullRequestsTool,
)
from .releases import GetLatestReleaseTool, GetReleasesTool, GetReleaseTool
from .repository import (
    GetDirectoryFilesTool,
    ListBranchesTool,
    SearchCodeTool,
    SearchIssuesAndPRsTool,
)

CORE_TOOL_CLASSES: tuple[type[BaseTool], ...] = (
    GetIssuesTool,
    GetIssueTool,
    CommentOnIssueTool,
    ListPullRequestsTool,
    GetPullRequestTool,
    CreatePullRequestTool,
    ListPullRequestFilesTool,
    ReadFileTool,
    CreateFileTool,
    UpdateFileTool,
    DeleteFileTool,
    ListBranchesTool,
    GetDirectoryFilesTool,
    SearchCodeTool,
    SearchIssuesAndPRsTool,
)

RELEASE_TOOL_CLASSES: tuple[type[BaseTool], ...] = (
    GetReleasesTool,
    GetLatestReleaseTool,
    GetReleaseTool,
)


class Toolkit:
    """All standalone tools for one repository.

    Example:
        >>> toolkit = Toolkit(ToolsConfig.from_env(), include_release_tools=True)
        >>> toolkit.get_tool_by_name("Read File").call("README.md")
    """

    def __init__(
        self,
        config: ToolsConfig,
        include_release_tools: bool = False,
        callbacks: ToolCallbacks | None = None,
    ):
        """Create the tools.

        Raises:
            ConfigurationError: If the token or repository is missing
        """
        self.client = GitHubToolClient(config)
        classes = CORE_TOOL_CLASSES
        if include_release_tools:
            classes = classes + RELEASE_TOOL_CLASSES
        self._tools = [cls(self.client, callbacks) for cls in classes]

    @classmethod
    def from_env(cls, include_release_tools: bool = False) -> "Toolkit":
        return cls(ToolsConfig.from_env(), include_release_tools=include_release_tools)

    def get_tools(self) -> list[BaseTool]:
        return list(self._tools)

    def get_tool_by_name(self, name: str) -> BaseTool | None:
        for tool in self._tools:
            if tool.name == name:
                return tool
        return None

    def get_tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]
