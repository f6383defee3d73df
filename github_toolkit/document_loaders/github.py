"""Loaders that turn GitHub issues and repository files into documents."""

import base64
import binascii
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlencode

import httpx

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT, loader_token
from ..errors import ConfigurationError, GitHubAPIError
from .base import BaseLoader, Document
from .pagination import iter_pages

logger = logging.getLogger(__name__)


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _nested_string(data: dict[str, Any], parent: str, key: str) -> str:
    value = data.get(parent)
    return _string(value, key) if isinstance(value, dict) else ""


def _integer(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return int(value)


def _label_names(issue: dict[str, Any]) -> list[str]:
    labels = issue.get("labels")
    if not isinstance(labels, list):
        return []
    return [
        label["name"]
        for label in labels
        if isinstance(label, dict) and _string(label, "name")
    ]


def issue_to_document(issue: dict[str, Any]) -> Document:
    """Convert a raw issue payload from the REST API into a document.

    The body becomes the page content, falling back to the title when the
    body is empty. Absent fields default to "", False or 0.
    """
    metadata = {
        "url": _string(issue, "html_url"),
        "title": _string(issue, "title"),
        "creator": _nested_string(issue, "user", "login"),
        "created_at": _string(issue, "created_at"),
        "comments": _integer(issue, "comments"),
        "state": _string(issue, "state"),
        "labels": _label_names(issue),
        "assignee": _nested_string(issue, "assignee", "login"),
        "milestone": _nested_string(issue, "milestone", "title"),
        "locked": issue.get("locked") is True,
        "number": _integer(issue, "number"),
        "is_pull_request": issue.get("pull_request") is not None,
    }

    content = _string(issue, "body") or metadata["title"]
    return Document(page_content=content, metadata=metadata)


class _GitHubLoader(BaseLoader):
    """Shared credential and HTTP handling for the GitHub loaders."""

    def __init__(
        self,
        repo: str,
        access_token: str | None,
        api_url: str,
        timeout: float,
        client: httpx.Client | None,
    ):
        if not repo:
            raise ConfigurationError("repository cannot be empty")
        self.repo = repo
        self.access_token = loader_token(access_token)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.access_token}",
        }

    @contextmanager
    def _http(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(timeout=self.timeout) as client:
            yield client


class GitHubIssuesLoader(_GitHubLoader):
    """Load issues (and optionally pull requests) from a repository.

    Example:
        >>> loader = GitHubIssuesLoader("owner/repo", state="all", labels=["bug"])
        >>> docs = loader.load()
    """

    def __init__(
        self,
        repo: str,
        access_token: str | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        include_prs: bool = True,
        milestone: str | None = None,
        state: str = "open",
        assignee: str = "",
        creator: str = "",
        mentioned: str = "",
        labels: list[str] | None = None,
        sort: str = "",
        direction: str = "",
        since: str = "",
        page: int | None = None,
        per_page: int | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        """Initialize the issues loader.

        Args:
            repo: Repository in "owner/repo" format
            access_token: Token; falls back to GITHUB_PERSONAL_ACCESS_TOKEN
            include_prs: Keep pull requests in the results
            milestone: Milestone number, "*" for any or "none" for no milestone
            state: "open", "closed" or "all"
            labels: Only issues carrying all of these labels
            page: Fetch only this page
            per_page: Page size; setting it also disables auto-pagination
            client: Optional pre-configured HTTP client

        Raises:
            ConfigurationError: If the repo is empty or no token is available
        """
        super().__init__(repo, access_token, api_url, timeout, client)
        self.include_prs = include_prs
        self.milestone = milestone
        self.state = state
        self.assignee = assignee
        self.creator = creator
        self.mentioned = mentioned
        self.labels = labels or []
        self.sort = sort
        self.direction = direction
        self.since = since
        self.page = page
        self.per_page = per_page

    def build_url(self) -> str:
        """Build the first-page URL with all active filters."""
        base_url = f"{self.api_url}/repos/{self.repo}/issues"
        params: dict[str, str] = {}

        if self.milestone is not None:
            params["milestone"] = self.milestone
        if self.state:
            params["state"] = self.state
        if self.assignee:
            params["assignee"] = self.assignee
        if self.creator:
            params["creator"] = self.creator
        if self.mentioned:
            params["mentioned"] = self.mentioned
        if self.labels:
            params["labels"] = ",".join(self.labels)
        if self.sort:
            params["sort"] = self.sort
        if self.direction:
            params["direction"] = self.direction
        if self.since:
            params["since"] = self.since
        if self.page is not None:
            params["page"] = str(self.page)
        if self.per_page is not None:
            params["per_page"] = str(self.per_page)

        if not params:
            return base_url
        return f"{base_url}?{urlencode(sorted(params.items()))}"

    def load(self) -> list[Document]:
        """Fetch issues as documents.

        Follows Link headers unless ``page`` or ``per_page`` is set, in which
        case exactly one page is fetched.

        Raises:
            GitHubAPIError: On a non-200 response, transport failure or an
                undecodable body
        """
        follow = self.page is None and self.per_page is None
        documents: list[Document] = []

        try:
            with self._http() as client:
                for response in iter_pages(
                    client, self.build_url(), self.headers, follow=follow
                ):
                    documents.extend(self._parse_page(response))
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"failed to fetch issues: {e}") from e

        logger.info("Loaded %d issue documents from %s", len(documents), self.repo)
        return documents

    def _parse_page(self, response: httpx.Response) -> list[Document]:
        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )
        try:
            issues = response.json()
        except ValueError as e:
            raise GitHubAPIError(f"failed to decode response: {e}") from e
        if not isinstance(issues, list):
            raise GitHubAPIError("invalid issues response format")

        documents = []
        for issue in issues:
            if not isinstance(issue, dict):
                continue
            document = issue_to_document(issue)
            if not self.include_prs and document.metadata["is_pull_request"]:
                continue
            documents.append(document)
        return documents


class GitHubFileLoader(_GitHubLoader):
    """Load the text files of one branch as documents."""

    def __init__(
        self,
        repo: str,
        access_token: str | None = None,
        *,
        api_url: str = DEFAULT_API_URL,
        branch: str = "main",
        file_filter: Callable[[str], bool] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        super().__init__(repo, access_token, api_url, timeout, client)
        self.branch = branch
        self.file_filter = file_filter

    def load(self) -> list[Document]:
        """Fetch every blob in the branch tree that passes ``file_filter``.

        Files that cannot be fetched or decoded, and empty files, are
        skipped.

        Raises:
            GitHubAPIError: If the tree itself cannot be listed
        """
        documents: list[Document] = []
        with self._http() as client:
            for entry in self._get_tree(client):
                if entry.get("type") != "blob":
                    continue
                path = entry.get("path", "")
                if self.file_filter is not None and not self.file_filter(path):
                    continue

                try:
                    content = self._get_file_content(client, path)
                except (httpx.HTTPError, GitHubAPIError) as e:
                    logger.warning("Skipping %s: %s", path, e)
                    continue
                if not content:
                    logger.debug("Skipping empty file %s", path)
                    continue

                documents.append(
                    Document(
                        page_content=content,
                        metadata={
                            "path": path,
                            "sha": entry.get("sha", ""),
                            "source": (
                                f"{self.api_url}/{self.repo}/{entry['type']}/"
                                f"{self.branch}/{path}"
                            ),
                        },
                    )
                )

        logger.info("Loaded %d file documents from %s", len(documents), self.repo)
        return documents

    def _get_tree(self, client: httpx.Client) -> list[dict[str, Any]]:
        url = f"{self.api_url}/repos/{self.repo}/git/trees/{self.branch}"
        try:
            response = client.get(
                url, headers=self.headers, params={"recursive": "1"}
            )
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"failed to fetch file tree: {e}") from e

        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )
        try:
            tree = response.json().get("tree")
        except (ValueError, AttributeError) as e:
            raise GitHubAPIError(f"failed to decode response: {e}") from e

        if not isinstance(tree, list):
            raise GitHubAPIError("invalid tree response format")
        return [item for item in tree if isinstance(item, dict)]

    def _get_file_content(self, client: httpx.Client, path: str) -> str:
        url = f"{self.api_url}/repos/{self.repo}/contents/{path}"
        params = {"ref": self.branch} if self.branch else None
        response = client.get(url, headers=self.headers, params=params)

        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub API error for file {path}: "
                f"{response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )
        try:
            encoded = response.json()["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise GitHubAPIError(f"no content field in response for {path}") from e

        try:
            return base64.b64decode(
                encoded.replace("\n", ""), validate=True
            ).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise GitHubAPIError(f"failed to decode content of {path}: {e}") from e
