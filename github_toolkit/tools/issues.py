"""Issue tools: list open issues, read one issue, comment on an issue."""

from itertools import islice

from ..errors import REQUEST_ERRORS, GitHubToolError
from .base import BaseTool, format_time, parse_tool_number, require_text

LIST_LIMIT = 5


class GetIssuesTool(BaseTool):
    name = "Get Issues"
    description = (
        "This tool will fetch a list of the repository's issues. It will return "
        "the title, and issue number of 5 issues. It takes no input."
    )

    def _run(self, tool_input: str) -> str:
        try:
            issues = list(
                islice(self.client.repo.get_issues(state="open"), LIST_LIMIT)
            )
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch issues: {e}") from e

        lines = ["Repository Issues:"]
        lines.extend(f"Issue #{issue.number}: {issue.title}" for issue in issues)
        return "\n".join(lines) + "\n"


class GetIssueTool(BaseTool):
    name = "Get Issue"
    description = (
        "This tool will fetch the title, body, and comment thread of a specific "
        "issue. **VERY IMPORTANT**: You must specify the issue number as an "
        "integer."
    )

    def _run(self, tool_input: str) -> str:
        number = parse_tool_number(tool_input, "issue number")
        try:
            issue = self.client.repo.get_issue(number)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch issue #{number}: {e}") from e
        try:
            comments = list(issue.get_comments())
        except REQUEST_ERRORS as e:
            raise GitHubToolError(
                f"failed to fetch comments for issue #{number}: {e}"
            ) from e

        parts = [
            f"Issue #{issue.number}: {issue.title}\n\n",
            f"State: {issue.state}\n",
            f"Author: {issue.user.login if issue.user else ''}\n",
            f"Created: {format_time(issue.created_at)}\n\n",
        ]
        if issue.body:
            parts.append(f"Body:\n{issue.body}\n\n")
        if comments:
            parts.append("Comments:\n")
            for index, comment in enumerate(comments, start=1):
                author = comment.user.login if comment.user else ""
                parts.append(
                    f"Comment #{index} by {author} "
                    f"({format_time(comment.created_at)}):\n{comment.body}\n\n"
                )
        return "".join(parts)


class CommentOnIssueTool(BaseTool):
    name = "Comment on Issue"
    description = (
        "This tool is useful when you need to comment on a GitHub issue. Simply "
        "pass in the issue number and the comment you would like to make. Please "
        "use this sparingly as we don't want to clutter the comment threads. "
        "**VERY IMPORTANT**: Your input to this tool MUST strictly follow these "
        "rules:\n\n"
        "- First you must specify the issue number as an integer\n"
        "- Then you must place two newlines\n"
        "- Then you must specify your comment"
    )

    def _run(self, tool_input: str) -> str:
        number_text, separator, body = tool_input.partition("\n\n")
        if not separator:
            raise GitHubToolError(
                "invalid input format: expected 'issue_number\\n\\ncomment', "
                f"got: {tool_input}"
            )
        number = parse_tool_number(number_text, "issue number")
        body = require_text(body, "comment body")

        try:
            comment = self.client.repo.get_issue(number).create_comment(body)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(
                f"failed to create comment on issue #{number}: {e}"
            ) from e
        return f"Successfully created comment #{comment.id} on issue #{number}"
