"""Agent-facing tools backed by :class:`GitHubAPIWrapper`.

Each tool maps to one dispatcher mode. Inputs are normalized with
:func:`preprocess_input` before being handed to ``wrapper.run``.
"""

import logging
from typing import NamedTuple

from ..errors import REQUEST_ERRORS, GitHubToolError, GitHubToolkitError
from ..github_client.client import GitHubAPIWrapper
from ..github_client.modes import NUMERIC_MODES, Mode
from ..github_client.queries import parse_integer

logger = logging.getLogger(__name__)


class ToolSpec(NamedTuple):
    name: str
    description: str
    mode: Mode


CORE_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "Get Issues",
        "This tool will fetch a list of the repository's issues. It will return "
        "the title, and issue number of 5 issues. It takes no input.",
        Mode.GET_ISSUES,
    ),
    ToolSpec(
        "Get Issue",
        "This tool will fetch the title, body, and comment thread of a specific "
        "issue. **VERY IMPORTANT**: You must specify the issue number as an "
        "integer.",
        Mode.GET_ISSUE,
    ),
    ToolSpec(
        "Comment on Issue",
        "This tool is useful when you need to comment on a GitHub issue. Simply "
        "pass in the issue number and the comment you would like to make. Please "
        "use this sparingly as we don't want to clutter the comment threads. "
        "**VERY IMPORTANT**: Your input to this tool MUST strictly follow these "
        "rules: - First you must specify the issue number as an integer - Then "
        "you must place two newlines - Then you must specify your comment",
        Mode.COMMENT_ON_ISSUE,
    ),
    ToolSpec(
        "List open pull requests (PRs)",
        "This tool will fetch a list of the repository's Pull Requests (PRs). It "
        "will return the title, and PR number of 5 PRs. It takes no input.",
        Mode.LIST_OPEN_PULL_REQUESTS,
    ),
    ToolSpec(
        "Get Pull Request",
        "This tool will fetch the title, body, comment thread and commit history "
        "of a specific Pull Request (by PR number). **VERY IMPORTANT**: You must "
        "specify the PR number as an integer.",
        Mode.GET_PULL_REQUEST,
    ),
    ToolSpec(
        "Create Pull Request",
        "This tool is useful when you need to create a new pull request in a "
        "GitHub repository. **VERY IMPORTANT**: Your input to this tool MUST "
        "strictly follow these rules: - First you must specify the title of the "
        "pull request - Then you must place two newlines - Then you must write "
        "the body or description of the pull request When appropriate, always "
        "reference relevant issues in the body by using the syntax "
        "`closes #<issue_number` like `closes #3, closes #6`. For example, if "
        'you would like to create a pull request called "README updates" with '
        "contents \"added contributors' names, closes #3\", you would pass in "
        "the following string: README updates\n\nadded contributors' names, "
        "closes #3",
        Mode.CREATE_PULL_REQUEST,
    ),
    ToolSpec(
        "Create File",
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "create a file in a GitHub repository. **VERY IMPORTANT**: Your input to "
        "this tool MUST strictly follow these rules: - First you must specify "
        "which file to create by passing a full file path (**IMPORTANT**: the "
        "path must not start with a slash) - Then you must specify the contents "
        "of the file For example, if you would like to create a file called "
        '/test/test.txt with contents "test contents", you would pass in the '
        "following string: test/test.txt\n\ntest contents",
        Mode.CREATE_FILE,
    ),
    ToolSpec(
        "Read File",
        "This tool is a wrapper for the GitHub API, useful when you need to read "
        "the contents of a file. Simply pass in the full file path of the file "
        "you would like to read. **IMPORTANT**: the path must not start with a "
        "slash",
        Mode.READ_FILE,
    ),
    ToolSpec(
        "Update File",
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "update the contents of a file in a GitHub repository. **VERY "
        "IMPORTANT**: Your input to this tool MUST strictly follow these rules: "
        "- First you must specify which file to modify by passing a full file "
        "path (**IMPORTANT**: the path must not start with a slash) - Then you "
        "must specify the old contents which you would like to replace wrapped "
        "in OLD <<<< and >>>> OLD - Then you must specify the new contents which "
        "you would like to replace the old contents with wrapped in NEW <<<< and "
        ">>>> NEW For example, if you would like to replace the contents of the "
        'file /test/test.txt from "old contents" to "new contents", you would '
        "pass in the following string: test/test.txt\nThis is text that will "
        "not be changed\nOLD <<<<\nold contents\n>>>> OLD\nNEW <<<<\nnew "
        "contents\n>>>> NEW",
        Mode.UPDATE_FILE,
    ),
    ToolSpec(
        "Delete File",
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "delete a file in a GitHub repository. Simply pass in the full file path "
        "of the file you would like to delete. **IMPORTANT**: the path must not "
        "start with a slash",
        Mode.DELETE_FILE,
    ),
    ToolSpec(
        "Overview of existing files in Main branch",
        "This tool will provide an overview of all existing files in the main "
        "branch of the repository. It will list the file names, their respective "
        "paths, and a brief summary of their contents. This can be useful for "
        "understanding the structure and content of the repository, especially "
        "when navigating through large codebases. No input parameters are "
        "required.",
        Mode.LIST_FILES_IN_MAIN_BRANCH,
    ),
    ToolSpec(
        "Overview of files in current working branch",
        "This tool will provide an overview of all files in your current working "
        "branch where you should implement changes. This is great for getting a "
        "high level overview of the structure of your code. No input parameters "
        "are required.",
        Mode.LIST_FILES_IN_BOT_BRANCH,
    ),
    ToolSpec(
        "List branches in this repository",
        "This tool will fetch a list of all branches in the repository. It will "
        "return the name of each branch. No input parameters are required.",
        Mode.LIST_BRANCHES_IN_REPO,
    ),
    ToolSpec(
        "Set active branch",
        "This tool will set the active branch in the repository, similar to "
        "`git checkout <branch_name>` and `git switch -c <branch_name>`. **VERY "
        "IMPORTANT**: You must specify the name of the branch as a string input "
        "parameter.",
        Mode.SET_ACTIVE_BRANCH,
    ),
    ToolSpec(
        "Create a new branch",
        "This tool will create a new branch in the repository. **VERY "
        "IMPORTANT**: You must specify the name of the new branch as a string "
        "input parameter.",
        Mode.CREATE_BRANCH,
    ),
    ToolSpec(
        "Get files from a directory",
        "This tool will fetch a list of all files in a specified directory. "
        "**VERY IMPORTANT**: You must specify the path of the directory as a "
        "string input parameter.",
        Mode.GET_FILES_FROM_DIRECTORY,
    ),
    ToolSpec(
        "Search issues and pull requests",
        "Searches issues and pull requests in the repository. **VERY "
        "IMPORTANT**: You must specify the search query as a string input "
        "parameter.",
        Mode.SEARCH_ISSUES_AND_PRS,
    ),
    ToolSpec(
        "Search code",
        "This tool will search for code in the repository. **VERY IMPORTANT**: "
        "You must specify the search query as a string input parameter.",
        Mode.SEARCH_CODE,
    ),
)

RELEASE_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "Get latest release",
        "This tool will fetch the latest release of the repository. No input "
        "parameters are required.",
        Mode.GET_LATEST_RELEASE,
    ),
    ToolSpec(
        "Get releases",
        "This tool will fetch the latest 5 releases of the repository. No input "
        "parameters are required.",
        Mode.GET_RELEASES,
    ),
    ToolSpec(
        "Get release",
        "This tool will fetch a specific release of the repository. **VERY "
        "IMPORTANT**: You must specify the tag name of the release as a string "
        "input parameter.",
        Mode.GET_RELEASE,
    ),
)


def _rejoin_first_line(text: str) -> str:
    head, separator, rest = text.partition("\n")
    if not separator:
        return text
    return f"{head.strip()}\n\n{rest.strip()}"


def preprocess_input(mode: Mode | str, text: str) -> str:
    """Normalize free-form agent input for a dispatcher mode.

    Example:
        >>> preprocess_input("get_issue", "Issue number 123")
        '123'
        >>> preprocess_input("comment_on_issue", "42\\nThis is a comment")
        '42\\n\\nThis is a comment'
    """
    text = text.strip()
    mode = Mode.parse(mode)

    if mode in NUMERIC_MODES:
        number = parse_integer(text)
        if number is not None:
            return str(number)
        for token in text.split():
            number = parse_integer(token)
            if number is not None:
                return str(number)
        return text

    if mode in (Mode.COMMENT_ON_ISSUE, Mode.CREATE_PULL_REQUEST):
        return _rejoin_first_line(text)

    return text


class GitHubAgentTool:
    """A named, described tool that runs one wrapper mode."""

    def __init__(
        self, name: str, description: str, wrapper: GitHubAPIWrapper, mode: Mode
    ):
        self.name = name
        self.description = description
        self.wrapper = wrapper
        self.mode = mode

    def call(self, tool_input: str = "") -> str:
        """Preprocess the input and run the tool's mode.

        Raises:
            GitHubToolError: If the wrapper raises or a request fails
        """
        processed = preprocess_input(self.mode, tool_input)
        try:
            return self.wrapper.run(self.mode, processed)
        except (GitHubToolkitError, *REQUEST_ERRORS) as e:
            logger.warning("Tool %r failed: %s", self.name, e)
            raise GitHubToolError(f"GitHub operation failed: {e}") from e

    def __repr__(self) -> str:
        return f"GitHubAgentTool(name={self.name!r}, mode={self.mode.value!r})"


class GitHubAgentToolkit:
    """The set of agent tools for one wrapped repository."""

    def __init__(self, wrapper: GitHubAPIWrapper, include_release_tools: bool = False):
        self.wrapper = wrapper
        self.include_release_tools = include_release_tools

        specs = CORE_TOOLS + RELEASE_TOOLS if include_release_tools else CORE_TOOLS
        self._tools = [
            GitHubAgentTool(spec.name, spec.description, wrapper, spec.mode)
            for spec in specs
        ]

    @classmethod
    def from_github_api_wrapper(
        cls, wrapper: GitHubAPIWrapper, include_release_tools: bool = False
    ) -> "GitHubAgentToolkit":
        return cls(wrapper, include_release_tools=include_release_tools)

    def get_tools(self) -> list[GitHubAgentTool]:
        return list(self._tools)

    def get_tool_by_name(self, name: str) -> GitHubAgentTool | None:
        """Return the tool with the given name, or None if there is none."""
        for tool in self._tools:
            if tool.name == name:
                return tool
        return None

    def get_tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]
