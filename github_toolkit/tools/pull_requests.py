"""Pull request tools: list, inspect, create and list changed files."""

from itertools import islice

from ..errors import REQUEST_ERRORS, GitHubToolError
from .base import BaseTool, format_time, parse_tool_number, require_text

LIST_LIMIT = 5


class ListPullRequestsTool(BaseTool):
    name = "List Pull Requests"
    description = (
        "This tool will fetch a list of the repository's Pull Requests (PRs). It "
        "will return the title, and PR number of 5 PRs. It takes no input."
    )

    def _run(self, tool_input: str) -> str:
        try:
            pulls = list(islice(self.client.repo.get_pulls(state="open"), LIST_LIMIT))
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch pull requests: {e}") from e

        lines = ["Repository Pull Requests:"]
        lines.extend(f"PR #{pr.number}: {pr.title}" for pr in pulls)
        return "\n".join(lines) + "\n"


class GetPullRequestTool(BaseTool):
    name = "Get Pull Request"
    description = (
        "This tool will fetch the title, body, comment thread and commit history "
        "of a specific Pull Request (by PR number). **VERY IMPORTANT**: You must "
        "specify the PR number as an integer."
    )

    def _run(self, tool_input: str) -> str:
        number = parse_tool_number(tool_input, "PR number")
        repo = self.client.repo
        try:
            pr = repo.get_pull(number)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch PR #{number}: {e}") from e
        try:
            comments = list(repo.get_issue(number).get_comments())
        except REQUEST_ERRORS as e:
            raise GitHubToolError(
                f"failed to fetch comments for PR #{number}: {e}"
            ) from e
        try:
            commits = list(pr.get_commits())
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch commits for PR #{number}: {e}") from e

        parts = [
            f"Pull Request #{pr.number}: {pr.title}\n\n",
            f"State: {pr.state}\n",
            f"Author: {pr.user.login if pr.user else ''}\n",
            f"Created: {format_time(pr.created_at)}\n",
            f"Base: {pr.base.ref} <- Head: {pr.head.ref}\n\n",
        ]
        if pr.body:
            parts.append(f"Body:\n{pr.body}\n\n")
        if commits:
            parts.append("Commits:\n")
            for commit in commits:
                parts.append(f"- {commit.sha[:8]}: {commit.commit.message}\n")
            parts.append("\n")
        if comments:
            parts.append("Comments:\n")
            for index, comment in enumerate(comments, start=1):
                author = comment.user.login if comment.user else ""
                parts.append(
                    f"Comment #{index} by {author} "
                    f"({format_time(comment.created_at)}):\n{comment.body}\n\n"
                )
        return "".join(parts)


class CreatePullRequestTool(BaseTool):
    name = "Create Pull Request"
    description = (
        "This tool is useful when you need to create a new pull request in a "
        "GitHub repository. **VERY IMPORTANT**: Your input to this tool MUST "
        "strictly follow these rules:\n\n"
        "- First you must specify the title of the pull request\n"
        "- Then you must place two newlines\n"
        "- Then you must write the body or description of the pull request\n\n"
        "When appropriate, always reference relevant issues in the body by using "
        "the syntax `closes #<issue_number>` like `closes #3, closes #6`.\n"
        'For example, if you would like to create a pull request called "README '
        "updates\" with contents \"added contributors' names, closes #3\", you "
        "would pass in the following string:\n\n"
        "README updates\n\n"
        "added contributors' names, closes #3"
    )

    def _run(self, tool_input: str) -> str:
        title, separator, body = tool_input.partition("\n\n")
        if not separator:
            raise GitHubToolError(
                f"invalid input format: expected 'title\\n\\nbody', got: {tool_input}"
            )
        title = require_text(title, "pull request title")

        head = self.client.branch
        if not head:
            raise GitHubToolError(
                "no working branch configured: set GITHUB_BRANCH to the PR head branch"
            )

        repo = self.client.repo
        try:
            pr = repo.create_pull(
                title=title, body=body.strip(), head=head, base=repo.default_branch
            )
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to create pull request: {e}") from e
        return f"Successfully created pull request #{pr.number}: {pr.title}"


class ListPullRequestFilesTool(BaseTool):
    name = "List Pull Request Files"
    description = (
        "This tool will fetch the full text of all files in a pull request (PR) "
        "given the PR number as an input. This is useful for understanding the "
        "code changes in a PR or contributing to it. **VERY IMPORTANT**: You must "
        "specify the PR number as an integer input parameter."
    )

    def _run(self, tool_input: str) -> str:
        number = parse_tool_number(tool_input, "PR number")
        try:
            files = list(self.client.repo.get_pull(number).get_files())
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch files for PR #{number}: {e}") from e

        parts = [f"Files in Pull Request #{number}:\n\n"]
        for changed in files:
            parts.append(f"File: {changed.filename}\n")
            parts.append(f"Status: {changed.status}\n")
            parts.append(
                f"Additions: {changed.additions}, Deletions: {changed.deletions}, "
                f"Changes: {changed.changes}\n"
            )
            if changed.patch:
                parts.append(f"Patch:\n{changed.patch}")
            parts.append("\n---\n\n")
        return "".join(parts)
