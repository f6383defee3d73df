"""Pydantic models for the summaries the wrapper returns.

These mirror the fields the dispatcher exposes to agents, not the full
GitHub REST objects.
API Reference: https://docs.github.com/en/rest/issues
"""

from pydantic import BaseModel, Field


class IssueSummary(BaseModel):
    """Short form of an issue as listed by ``get_issues``."""

    title: str = Field(..., description="Short description/title of the issue")
    number: int = Field(..., description="Issue number within the repository")
    opened_by: str = Field("", description="Login of the issue author")


class PullRequestSummary(BaseModel):
    """Short form of a pull request as listed by ``list_open_pull_requests``."""

    title: str = Field(..., description="Title of the pull request")
    number: int = Field(..., description="Pull request number within the repository")
    commits: str = Field("0", description="Number of commits, as text")
    comments: str = Field("0", description="Number of comments, as text")


class CommentSummary(BaseModel):
    """A single comment on an issue or pull request."""

    body: str = Field("", description="Markdown text of the comment")
    user: str = Field("", description="Login of the comment author")


class ReleaseSummary(BaseModel):
    """Name, tag and notes of a release."""

    name: str = Field("", description="Release title")
    tag_name: str = Field(..., description="Git tag the release points at")
    body: str = Field("", description="Release notes in markdown")
