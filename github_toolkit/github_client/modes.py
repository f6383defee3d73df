"""Dispatch modes understood by :meth:`GitHubAPIWrapper.run`."""

from enum import Enum

from ..errors import InvalidModeError


class Mode(str, Enum):
    """Closed set of operations the wrapper can dispatch to."""

    GET_ISSUE = "get_issue"
    GET_PULL_REQUEST = "get_pull_request"
    GET_ISSUES = "get_issues"
    COMMENT_ON_ISSUE = "comment_on_issue"
    CREATE_FILE = "create_file"
    CREATE_PULL_REQUEST = "create_pull_request"
    READ_FILE = "read_file"
    UPDATE_FILE = "update_file"
    DELETE_FILE = "delete_file"
    LIST_OPEN_PULL_REQUESTS = "list_open_pull_requests"
    LIST_FILES_IN_MAIN_BRANCH = "list_files_in_main_branch"
    LIST_FILES_IN_BOT_BRANCH = "list_files_in_bot_branch"
    LIST_BRANCHES_IN_REPO = "list_branches_in_repo"
    SET_ACTIVE_BRANCH = "set_active_branch"
    CREATE_BRANCH = "create_branch"
    GET_FILES_FROM_DIRECTORY = "get_files_from_directory"
    SEARCH_ISSUES_AND_PRS = "search_issues_and_prs"
    SEARCH_CODE = "search_code"
    GET_LATEST_RELEASE = "get_latest_release"
    GET_RELEASES = "get_releases"
    GET_RELEASE = "get_release"

    @classmethod
    def parse(cls, value: "Mode | str") -> "Mode":
        """Return the matching mode or raise :class:`InvalidModeError`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(str(value)) from None


# Modes whose payload must be a single integer
NUMERIC_MODES = frozenset({Mode.GET_ISSUE, Mode.GET_PULL_REQUEST})

# Modes that only query GitHub for release information
RELEASE_MODES = frozenset({Mode.GET_LATEST_RELEASE, Mode.GET_RELEASES, Mode.GET_RELEASE})
