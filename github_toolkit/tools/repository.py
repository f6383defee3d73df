"""Repository tools: branches, directory listing and search."""

from itertools import islice

from ..errors import REQUEST_ERRORS, GitHubToolError
from ..github_client.queries import normalize_path
from .base import BaseTool, format_time, require_text

SEARCH_LIMIT = 10


class ListBranchesTool(BaseTool):
    name = "List Branches"
    description = (
        "This tool will fetch a list of all branches in the repository. It will "
        "return the name of each branch. No input parameters are required."
    )

    def _run(self, tool_input: str) -> str:
        try:
            branches = list(self.client.repo.get_branches())
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch branches: {e}") from e

        lines = ["Repository Branches:"]
        lines.extend(f"- {branch.name}" for branch in branches)
        return "\n".join(lines) + "\n"


class GetDirectoryFilesTool(BaseTool):
    name = "Get Directory Files"
    description = (
        "This tool will fetch a list of all files in a specified directory. "
        "**VERY IMPORTANT**: You must specify the path of the directory as a "
        "string input parameter."
    )

    def _run(self, tool_input: str) -> str:
        path = normalize_path(tool_input)
        try:
            if self.client.branch:
                contents = self.client.repo.get_contents(path, ref=self.client.branch)
            else:
                contents = self.client.repo.get_contents(path)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(
                f"failed to fetch directory contents for {path}: {e}"
            ) from e
        if not isinstance(contents, list):
            contents = [contents]

        header = f"Files in directory {path}:" if path else "Files in root directory:"
        lines = [header]
        for item in contents:
            if item.type == "file":
                lines.append(f"📄 {item.name}")
            elif item.type == "dir":
                lines.append(f"📁 {item.name}/")
        return "\n".join(lines) + "\n"


class SearchCodeTool(BaseTool):
    name = "Search Code"
    description = (
        "This tool will search for code in the repository. **VERY IMPORTANT**: "
        "You must specify the search query as a string input parameter."
    )

    def _run(self, tool_input: str) -> str:
        query = require_text(tool_input, "search query")
        search_query = f"{query} repo:{self.client.full_name}"
        try:
            results = self.client.github.search_code(search_query, highlight=True)
            total = results.totalCount
            hits = list(islice(results, SEARCH_LIMIT))
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to search code: {e}") from e

        parts = [f"Code search results for '{query}':\n\n"]
        if total == 0:
            parts.append("No results found.\n")
            return "".join(parts)

        parts.append(f"Found {total} results:\n\n")
        for hit in hits:
            parts.append(f"File: {hit.path}\n")
            parts.append(f"Repository: {hit.repository.full_name}\n")
            for match in hit.text_matches or []:
                parts.append(f"Match: {match.get('fragment', '')}\n")
            parts.append("\n---\n\n")
        return "".join(parts)


class SearchIssuesAndPRsTool(BaseTool):
    name = "Search Issues and PRs"
    description = (
        "This tool will search for issues and pull requests in the repository. "
        "**VERY IMPORTANT**: You must specify the search query as a string input "
        "parameter."
    )

    def _run(self, tool_input: str) -> str:
        query = require_text(tool_input, "search query")
        search_query = f"{query} repo:{self.client.full_name}"
        try:
            results = self.client.github.search_issues(search_query)
            total = results.totalCount
            hits = list(islice(results, SEARCH_LIMIT))
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to search issues and PRs: {e}") from e

        parts = [f"Search results for '{query}':\n\n"]
        if total == 0:
            parts.append("No results found.\n")
            return "".join(parts)

        parts.append(f"Found {total} results:\n\n")
        for issue in hits:
            kind = "PR" if issue.pull_request is not None else "Issue"
            parts.append(f"{kind} #{issue.number}: {issue.title}\n")
            parts.append(f"State: {issue.state}\n")
            parts.append(f"Author: {issue.user.login if issue.user else ''}\n")
            parts.append(f"Created: {format_time(issue.created_at)}\n")
            parts.append("\n---\n\n")
        return "".join(parts)
