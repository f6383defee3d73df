"""GitHub client package for repository operations."""

from .client import BranchState, GitHubAPIWrapper
from .models import CommentSummary, IssueSummary, PullRequestSummary, ReleaseSummary
from .modes import Mode
from .queries import parse_update_query, split_comment_query, split_file_query

__all__ = [
    "GitHubAPIWrapper",
    "BranchState",
    "Mode",
    "IssueSummary",
    "PullRequestSummary",
    "CommentSummary",
    "ReleaseSummary",
    "parse_update_query",
    "split_comment_query",
    "split_file_query",
]
