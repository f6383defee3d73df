"""GitHub API wrapper using PyGitHub.

The wrapper is bound to one repository. It keeps an active branch, which
file-mutating operations write to, and a base branch, which PRs target and
which is write-protected.
"""

import json
import logging
import threading
from collections.abc import Callable
from itertools import islice
from typing import Any

from github import Auth, Github
from github.ContentFile import ContentFile
from github.GithubException import GithubException, UnknownObjectException
from github.Issue import Issue
from github.PullRequest import PullRequest
from github.Repository import Repository
from requests.exceptions import RequestException

from ..config import WrapperConfig
from ..errors import REQUEST_ERRORS, GitHubAPIError, InputFormatError
from .models import CommentSummary, IssueSummary, PullRequestSummary, ReleaseSummary
from .modes import Mode
from .queries import (
    apply_update,
    normalize_path,
    parse_number,
    parse_update_query,
    split_comment_query,
    split_file_query,
    split_pull_request_query,
)

logger = logging.getLogger(__name__)

MAX_BRANCH_ATTEMPTS = 1000
COMMENT_LIMIT = 10
COMMIT_LIMIT = 10
SEARCH_LIMIT = 5
RELEASE_LIMIT = 5


def _api_error(
    action: str, error: GithubException | RequestException
) -> GitHubAPIError:
    """Wrap a PyGitHub or transport exception with the failing operation."""
    status = error.status if isinstance(error, GithubException) else None
    return GitHubAPIError(f"{action}: {error}", status=status)


def _is_reference_conflict(error: GithubException) -> bool:
    """Check whether a ref creation failed because the ref already exists."""
    data = error.data
    if isinstance(data, dict):
        message = str(data.get("message", ""))
    else:
        message = str(data)
    return "Reference already exists" in message or "Reference already exists" in str(
        error
    )


class BranchState:
    """Lock-protected active/base branch pair.

    Reads and writes of the active branch are atomic; callers running
    multi-step workflows still need to serialize them.
    """

    def __init__(self, active: str, base: str):
        self._lock = threading.Lock()
        self._active = active
        self._base = base

    @property
    def active(self) -> str:
        with self._lock:
            return self._active

    @property
    def base(self) -> str:
        return self._base

    def set_active(self, branch: str) -> None:
        with self._lock:
            self._active = branch

    def is_protected(self) -> bool:
        """True when writes would land directly on the base branch."""
        with self._lock:
            return self._active == self._base


class GitHubAPIWrapper:
    """High-level GitHub operations for a single repository."""

    def __init__(self, config: WrapperConfig):
        """Initialize the wrapper and fetch repository details.

        Args:
            config: Wrapper settings. Use ``WrapperConfig.from_env()`` to
                fill them from GITHUB_REPOSITORY, GITHUB_APP_ID and
                GITHUB_APP_PRIVATE_KEY.

        Raises:
            ConfigurationError: If a required setting is missing or malformed
            GitHubAPIError: If the repository cannot be fetched
        """
        self.owner, self.repo_name = config.validate_required()
        self.config = config

        # App authentication is simplified: the private key is used as a token
        self.github = Github(
            auth=Auth.Token(config.private_key),
            base_url=config.api_url,
            timeout=int(config.timeout),
        )
        self.repo = self._get_repository()

        default_branch = self.repo.default_branch
        self.branches = BranchState(
            active=config.active_branch or default_branch,
            base=config.base_branch or default_branch,
        )

    @classmethod
    def from_env(cls, **overrides: str) -> "GitHubAPIWrapper":
        """Create a wrapper from environment variables plus explicit overrides."""
        return cls(WrapperConfig.from_env(**overrides))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo_name}"

    @property
    def active_branch(self) -> str:
        return self.branches.active

    @property
    def base_branch(self) -> str:
        return self.branches.base

    def _get_repository(self) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(self.full_name)
        except UnknownObjectException as e:
            raise GitHubAPIError(
                f"Repository {self.full_name} not found", status=404
            ) from e
        except REQUEST_ERRORS as e:
            raise _api_error("failed to get repository", e) from e

    def _protected_branch_message(self) -> str | None:
        if self.branches.is_protected():
            return (
                "You're attempting to commit directly to the "
                f"{self.base_branch} branch, which is protected. "
                "Please create a new branch and try again."
            )
        return None

    # ------------------------------------------------------------------
    # Parsing helpers
    # ------------------------------------------------------------------

    def parse_issues(self, issues: list[Issue]) -> list[IssueSummary]:
        """Extract title, number, and opener from GitHub issues."""
        return [
            IssueSummary(
                title=issue.title,
                number=issue.number,
                opened_by=issue.user.login if issue.user else "",
            )
            for issue in issues
        ]

    def parse_pull_requests(
        self, pull_requests: list[PullRequest]
    ) -> list[PullRequestSummary]:
        """Extract title, number, commit and comment counts from PRs."""
        return [
            PullRequestSummary(
                title=pr.title,
                number=pr.number,
                commits=str(pr.commits),
                comments=str(pr.comments),
            )
            for pr in pull_requests
        ]

    def _comment_summaries(self, number: int) -> list[dict[str, str]]:
        comments = islice(self.repo.get_issue(number).get_comments(), COMMENT_LIMIT)
        return [
            CommentSummary(
                body=comment.body or "",
                user=comment.user.login if comment.user else "",
            ).model_dump()
            for comment in comments
        ]

    # ------------------------------------------------------------------
    # Issues and pull requests
    # ------------------------------------------------------------------

    def get_issues(self) -> str:
        """Fetch all open issues from the repository, excluding pull requests."""
        try:
            issues = [
                issue
                for issue in self.repo.get_issues(state="open")
                if issue.pull_request is None
            ]
        except REQUEST_ERRORS as e:
            raise _api_error("failed to fetch issues", e) from e

        if not issues:
            return "No open issues available"

        parsed = [summary.model_dump() for summary in self.parse_issues(issues)]
        return f"Found {len(parsed)} issues:\n{parsed}"

    def get_issue(self, issue_number: int) -> dict[str, Any]:
        """Fetch a specific issue and its first 10 comments.

        Returns:
            Dictionary with number, title, body, comments (JSON text) and
            opened_by
        """
        try:
            issue = self.repo.get_issue(issue_number)
        except REQUEST_ERRORS as e:
            raise _api_error("failed to get issue", e) from e

        try:
            comments = [
                CommentSummary(
                    body=comment.body or "",
                    user=comment.user.login if comment.user else "",
                ).model_dump()
                for comment in islice(issue.get_comments(), COMMENT_LIMIT)
            ]
        except REQUEST_ERRORS as e:
            raise _api_error("failed to get comments", e) from e

        return {
            "number": issue_number,
            "title": issue.title,
            "body": issue.body or "",
            "comments": json.dumps(comments),
            "opened_by": issue.user.login if issue.user else "",
        }

    def get_pull_request(self, pr_number: int) -> dict[str, Any]:
        """Fetch a pull request with its first 10 comments and commits.

        Comments and commits are best-effort: if either listing fails the
        key is left out of the result.
        """
        try:
            pr = self.repo.get_pull(pr_number)
        except REQUEST_ERRORS as e:
            raise _api_error("failed to get pull request", e) from e

        result: dict[str, Any] = {
            "title": pr.title,
            "number": str(pr_number),
            "body": pr.body or "",
        }

        try:
            result["comments"] = json.dumps(self._comment_summaries(pr_number))
        except REQUEST_ERRORS as e:
            logger.warning("Could not fetch comments for PR #%d: %s", pr_number, e)

        try:
            commits = [
                {"message": commit.commit.message}
                for commit in islice(pr.get_commits(), COMMIT_LIMIT)
            ]
            result["commits"] = json.dumps(commits)
        except REQUEST_ERRORS as e:
            logger.warning("Could not fetch commits for PR #%d: %s", pr_number, e)

        return result

    def list_open_pull_requests(self) -> str:
        """Fetch all open PRs from the repository."""
        try:
            pull_requests = list(self.repo.get_pulls(state="open"))
            parsed = [
                summary.model_dump()
                for summary in self.parse_pull_requests(pull_requests)
            ]
        except REQUEST_ERRORS as e:
            raise _api_error("failed to fetch pull requests", e) from e

        if not parsed:
            return "No open pull requests available"
        return f"Found {len(parsed)} pull requests:\n{parsed}"

    def create_pull_request(self, pr_query: str) -> str:
        """Open a PR from the active branch into the base branch.

        Args:
            pr_query: Title on the first line, then a blank line, then the body
        """
        if self.branches.is_protected():
            return (
                "Cannot make a pull request because commits are already "
                "in the main or master branch."
            )

        title, body = split_pull_request_query(pr_query)
        try:
            pr = self.repo.create_pull(
                title=title,
                body=body,
                head=self.active_branch,
                base=self.base_branch,
            )
        except REQUEST_ERRORS as e:
            logger.warning("Pull request creation failed: %s", e)
            return f"Unable to make pull request due to error:\n{e}"

        logger.info("Created PR #%d in %s", pr.number, self.full_name)
        return f"Successfully created PR number {pr.number}"

    def comment_on_issue(self, comment_query: str) -> str:
        """Add a comment to an issue.

        Args:
            comment_query: Issue number, two newlines, then the comment text
        """
        try:
            issue_number, comment = split_comment_query(comment_query)
        except InputFormatError as e:
            return str(e)

        try:
            self.repo.get_issue(issue_number).create_comment(comment)
        except REQUEST_ERRORS as e:
            logger.warning("Comment on issue #%d failed: %s", issue_number, e)
            return f"Unable to make comment due to error:\n{e}"

        logger.info("Commented on issue #%d in %s", issue_number, self.full_name)
        return f"Commented on issue {issue_number}"

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _get_file(self, file_path: str, branch: str) -> ContentFile:
        contents = self.repo.get_contents(file_path, ref=branch)
        if isinstance(contents, list):
            raise GitHubAPIError(f"`{file_path}` is a directory, not a file")
        return contents

    def _list_files(self, path: str, branch: str) -> list[str]:
        """Recursively list file paths below ``path`` on ``branch``."""
        contents = self.repo.get_contents(path, ref=branch)
        if not isinstance(contents, list):
            contents = [contents]

        files: list[str] = []
        for item in contents:
            if item.type == "dir":
                try:
                    files.extend(self._list_files(item.path, branch))
                except REQUEST_ERRORS as e:
                    logger.warning("Skipping unreadable directory %s: %s", item.path, e)
                    continue
            else:
                files.append(item.path)
        return files

    def list_files_in_main_branch(self) -> str:
        """List every file in the base branch."""
        try:
            files = self._list_files("", self.base_branch)
        except REQUEST_ERRORS as e:
            raise _api_error("failed to list files in main branch", e) from e

        if not files:
            return "No files found in the main branch"
        joined = "\n".join(files)
        return f"Found {len(files)} files in the main branch:\n{joined}"

    def list_files_in_bot_branch(self) -> str:
        """List every file in the active branch."""
        branch = self.active_branch
        try:
            files = self._list_files("", branch)
        except REQUEST_ERRORS as e:
            return f"Error: {e}"

        if not files:
            return f"No files found in branch: `{branch}`"
        joined = "\n".join(files)
        return f"Found {len(files)} files in branch `{branch}`:\n{joined}"

    def get_files_from_directory(self, directory_path: str) -> str:
        """Recursively list files in a directory of the active branch."""
        try:
            files = self._list_files(normalize_path(directory_path), self.active_branch)
        except REQUEST_ERRORS as e:
            return f"Error: {e}"
        return "\n".join(files)

    def read_file(self, file_path: str) -> str:
        """Read a file from the active branch.

        Returns:
            The decoded file text, or a message describing why it could not
            be read
        """
        file_path = normalize_path(file_path)
        branch = self.active_branch
        try:
            content_file = self._get_file(file_path, branch)
        except (GithubException, RequestException, GitHubAPIError) as e:
            return f"File not found `{file_path}` on branch `{branch}`. Error: {e}"

        try:
            return content_file.decoded_content.decode("utf-8")
        except (UnicodeDecodeError, AssertionError) as e:
            return f"Failed to decode file content: {e}"

    def create_file(self, file_query: str) -> str:
        """Create a new file on the active branch.

        Args:
            file_query: File path on the first line, contents after it
        """
        protected = self._protected_branch_message()
        if protected:
            return protected

        try:
            file_path, file_contents = split_file_query(file_query)
        except InputFormatError as e:
            return str(e)

        branch = self.active_branch
        try:
            self.repo.get_contents(file_path, ref=branch)
        except GithubException:
            pass
        except RequestException as e:
            logger.warning("Checking %s failed: %s", file_path, e)
            return f"Unable to make file due to error:\n{e}"
        else:
            return (
                f"File already exists at `{file_path}` on branch `{branch}`. "
                "You must use `update_file` to modify it."
            )

        try:
            self.repo.create_file(
                file_path, f"Create {file_path}", file_contents, branch=branch
            )
        except REQUEST_ERRORS as e:
            logger.warning("Creating %s failed: %s", file_path, e)
            return f"Unable to make file due to error:\n{e}"

        logger.info("Created %s on %s", file_path, branch)
        return f"Created file {file_path}"

    def update_file(self, file_query: str) -> str:
        """Replace an exact block of text in a file on the active branch.

        The write carries the blob SHA read just before, so GitHub rejects
        it if the file changed in between. When the old block is not found
        nothing is written.
        """
        protected = self._protected_branch_message()
        if protected:
            return protected

        try:
            request = parse_update_query(file_query)
        except InputFormatError as e:
            return str(e)

        branch = self.active_branch
        try:
            content_file = self._get_file(request.path, branch)
            current = content_file.decoded_content.decode("utf-8")
        except (GithubException, RequestException, GitHubAPIError) as e:
            return f"File not found `{request.path}` on branch `{branch}`. Error: {e}"
        except (UnicodeDecodeError, AssertionError) as e:
            return f"Failed to decode file content: {e}"

        updated = apply_update(current, request.old_content, request.new_content)
        if updated is None:
            return (
                "File content was not updated because old content was not found. "
                "It may be helpful to use the read_file action to get the current "
                "file contents."
            )
        if updated == current:
            return (
                f"File {request.path} was not updated because the new content "
                "is identical to the old content."
            )

        try:
            self.repo.update_file(
                request.path,
                f"Update {request.path}",
                updated,
                content_file.sha,
                branch=branch,
            )
        except REQUEST_ERRORS as e:
            logger.warning("Updating %s failed: %s", request.path, e)
            return f"Unable to update file due to error:\n{e}"

        logger.info("Updated %s on %s", request.path, branch)
        return f"Updated file {request.path}"

    def delete_file(self, file_path: str) -> str:
        """Delete a file from the active branch."""
        protected = self._protected_branch_message()
        if protected:
            return protected

        file_path = normalize_path(file_path)
        branch = self.active_branch
        try:
            content_file = self._get_file(file_path, branch)
            self.repo.delete_file(
                file_path, f"Delete {file_path}", content_file.sha, branch=branch
            )
        except (GithubException, RequestException, GitHubAPIError) as e:
            logger.warning("Deleting %s failed: %s", file_path, e)
            return f"Unable to delete file due to error:\n{e}"

        logger.info("Deleted %s on %s", file_path, branch)
        return f"Deleted file {file_path}"

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _branch_names(self) -> list[str]:
        try:
            return [branch.name for branch in self.repo.get_branches()]
        except REQUEST_ERRORS as e:
            raise _api_error("failed to list branches", e) from e

    def list_branches_in_repo(self) -> str:
        """List all branch names in the repository."""
        names = self._branch_names()
        if not names:
            return "No branches found in the repository"
        joined = "\n".join(names)
        return f"Found {len(names)} branches in the repository:\n{joined}"

    def set_active_branch(self, branch_name: str) -> str:
        """Switch the active branch if it exists in the repository."""
        branch_name = branch_name.strip()
        names = self._branch_names()
        if branch_name not in names:
            return (
                f"Error {branch_name} does not exist, "
                f"in repo with current branches: {names}"
            )

        self.branches.set_active(branch_name)
        return f"Switched to branch `{branch_name}`"

    def create_branch(self, proposed_branch_name: str) -> str:
        """Create a branch from the base branch head and make it active.

        If the name is taken, ``_v1``, ``_v2``, ... suffixes are tried, up to
        1000 attempts in total. Any error other than a name collision is
        raised immediately.
        """
        proposed_branch_name = proposed_branch_name.strip()
        try:
            base_ref = self.repo.get_git_ref(f"heads/{self.base_branch}")
        except REQUEST_ERRORS as e:
            raise _api_error("failed to get base branch", e) from e

        new_branch_name = proposed_branch_name
        for attempt in range(MAX_BRANCH_ATTEMPTS):
            try:
                self.repo.create_git_ref(
                    ref=f"refs/heads/{new_branch_name}", sha=base_ref.object.sha
                )
            except GithubException as e:
                if _is_reference_conflict(e):
                    new_branch_name = f"{proposed_branch_name}_v{attempt + 1}"
                    continue
                raise _api_error("failed to create branch", e) from e
            except RequestException as e:
                raise _api_error("failed to create branch", e) from e

            self.branches.set_active(new_branch_name)
            logger.info("Created branch %s in %s", new_branch_name, self.full_name)
            return (
                f"Branch '{new_branch_name}' created successfully, "
                "and set as current active branch."
            )

        return (
            f"Unable to create branch. At least {MAX_BRANCH_ATTEMPTS} branches "
            "exist with names derived from proposed_branch_name: "
            f"`{proposed_branch_name}`"
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_issues_and_prs(self, query: str) -> str:
        """Search issues and pull requests in this repository (top 5)."""
        search_query = f"{query} repo:{self.full_name}"
        try:
            results = self.github.search_issues(search_query)
            total = results.totalCount
            if total == 0:
                return "0 results found."
            max_results = min(SEARCH_LIMIT, total)
            lines = [f"Top {max_results} results:"]
            for issue in islice(results, max_results):
                lines.append(
                    f"Title: {issue.title}, Number: {issue.number}, "
                    f"State: {issue.state}"
                )
        except REQUEST_ERRORS as e:
            return f"Search failed: {e}"
        return "\n".join(lines)

    def search_code(self, query: str) -> str:
        """Search code in this repository and include the top files' contents."""
        search_query = f"{query} repo:{self.full_name}"
        try:
            results = self.github.search_code(search_query)
            total = results.totalCount
            if total == 0:
                return "0 results found."
            max_results = min(SEARCH_LIMIT, total)
            hits = list(islice(results, max_results))
        except REQUEST_ERRORS as e:
            return f"Search failed: {e}"

        lines = [f"Showing top {len(hits)} of {total} results:"]
        for hit in hits:
            content = self.read_file(hit.path)
            lines.append(
                f"Filepath: `{hit.path}`\nFile contents: {content}\n<END OF FILE>"
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Releases
    # ------------------------------------------------------------------

    def get_latest_release(self) -> str:
        """Describe the latest release."""
        try:
            release = self.repo.get_latest_release()
        except REQUEST_ERRORS as e:
            return f"Failed to get latest release: {e}"
        summary = ReleaseSummary(
            name=release.title or "", tag_name=release.tag_name, body=release.body or ""
        )
        return (
            f"Latest title: {summary.name} tag: {summary.tag_name} "
            f"body: {summary.body}"
        )

    def get_releases(self) -> str:
        """Describe the 5 most recent releases."""
        try:
            releases = [
                ReleaseSummary(
                    name=release.title or "",
                    tag_name=release.tag_name,
                    body=release.body or "",
                )
                for release in islice(self.repo.get_releases(), RELEASE_LIMIT)
            ]
        except REQUEST_ERRORS as e:
            return f"Failed to get releases: {e}"

        if not releases:
            return "No releases found."
        lines = [f"Top {len(releases)} results:"]
        lines.extend(
            f"Title: {r.name}, Tag: {r.tag_name}, Body: {r.body}" for r in releases
        )
        return "\n".join(lines)

    def get_release(self, tag_name: str) -> str:
        """Describe the release with the given tag."""
        try:
            release = self.repo.get_release(tag_name.strip())
        except REQUEST_ERRORS as e:
            return f"Failed to get release: {e}"
        return (
            f"Release: {release.title or ''} tag: {release.tag_name} "
            f"body: {release.body or ''}"
        )

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------

    def _run_get_issue(self, query: str) -> str:
        issue_number = parse_number(query, "issue number")
        return json.dumps(self.get_issue(issue_number))

    def _run_get_pull_request(self, query: str) -> str:
        pr_number = parse_number(query, "PR number")
        return json.dumps(self.get_pull_request(pr_number))

    def _dispatch_table(self) -> dict[Mode, Callable[[str], str]]:
        return {
            Mode.GET_ISSUE: self._run_get_issue,
            Mode.GET_PULL_REQUEST: self._run_get_pull_request,
            Mode.GET_ISSUES: lambda _query: self.get_issues(),
            Mode.COMMENT_ON_ISSUE: self.comment_on_issue,
            Mode.CREATE_FILE: self.create_file,
            Mode.CREATE_PULL_REQUEST: self.create_pull_request,
            Mode.READ_FILE: self.read_file,
            Mode.UPDATE_FILE: self.update_file,
            Mode.DELETE_FILE: self.delete_file,
            Mode.LIST_OPEN_PULL_REQUESTS: lambda _query: self.list_open_pull_requests(),
            Mode.LIST_FILES_IN_MAIN_BRANCH: lambda _query: (
                self.list_files_in_main_branch()
            ),
            Mode.LIST_FILES_IN_BOT_BRANCH: lambda _query: self.list_files_in_bot_branch(),
            Mode.LIST_BRANCHES_IN_REPO: lambda _query: self.list_branches_in_repo(),
            Mode.SET_ACTIVE_BRANCH: self.set_active_branch,
            Mode.CREATE_BRANCH: self.create_branch,
            Mode.GET_FILES_FROM_DIRECTORY: self.get_files_from_directory,
            Mode.SEARCH_ISSUES_AND_PRS: self.search_issues_and_prs,
            Mode.SEARCH_CODE: self.search_code,
            Mode.GET_LATEST_RELEASE: lambda _query: self.get_latest_release(),
            Mode.GET_RELEASES: lambda _query: self.get_releases(),
            Mode.GET_RELEASE: self.get_release,
        }

    def run(self, mode: Mode | str, query: str = "") -> str:
        """Execute one GitHub operation.

        Args:
            mode: A :class:`Mode` or its string value, e.g. "get_issue"
            query: Mode-specific payload

        Returns:
            Human-readable result text

        Raises:
            InvalidModeError: If ``mode`` is not a known mode
            InputFormatError: If a numeric payload cannot be parsed
            GitHubAPIError: If a hard-failing operation's request fails
        """
        resolved = Mode.parse(mode)
        logger.debug("Running %s on %s", resolved.value, self.full_name)
        return self._dispatch_table()[resolved](query)
