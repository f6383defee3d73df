"""Document loaders for GitHub issues and repository files."""

from .base import BaseLoader, Document, TextSplitter, split_documents
from .github import GitHubFileLoader, GitHubIssuesLoader, issue_to_document
from .pagination import get_next_url, iter_pages

__all__ = [
    "BaseLoader",
    "Document",
    "TextSplitter",
    "split_documents",
    "GitHubIssuesLoader",
    "GitHubFileLoader",
    "issue_to_document",
    "get_next_url",
    "iter_pages",
]
