"""File tools: read, create, update and delete repository files."""

from ..errors import REQUEST_ERRORS, GitHubToolError
from ..github_client.queries import apply_update, parse_update_query
from .base import BaseTool, tool_path


class ReadFileTool(BaseTool):
    name = "Read File"
    description = (
        "This tool is a wrapper for the GitHub API, useful when you need to read "
        "the contents of a file. Simply pass in the full file path of the file "
        "you would like to read. **IMPORTANT**: the path must not start with a "
        "slash"
    )

    def _run(self, tool_input: str) -> str:
        path = tool_path(tool_input)
        try:
            content_file = self.client.get_file(path)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to read file {path}: {e}") from e
        try:
            content = content_file.decoded_content.decode("utf-8")
        except (UnicodeDecodeError, AssertionError) as e:
            raise GitHubToolError(f"failed to decode file content: {e}") from e
        return f"Contents of {path}:\n\n{content}"


class CreateFileTool(BaseTool):
    name = "Create File"
    description = (
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "create a file in a GitHub repository. **VERY IMPORTANT**: Your input to "
        "this tool MUST strictly follow these rules:\n\n"
        "- First you must specify which file to create by passing a full file "
        "path (**IMPORTANT**: the path must not start with a slash)\n"
        "- Then you must place two newlines\n"
        "- Then you must specify the contents of the file\n\n"
        'For example, if you would like to create a file called /test/test.txt '
        'with contents "test contents", you would pass in the following string:'
        "\n\ntest/test.txt\n\ntest contents"
    )

    def _run(self, tool_input: str) -> str:
        path, separator, contents = tool_input.partition("\n\n")
        if not separator:
            raise GitHubToolError(
                "invalid input format: expected 'filepath\\n\\ncontents', "
                f"got: {tool_input}"
            )
        path = tool_path(path)

        try:
            self.client.repo.create_file(
                path, f"Create {path}", contents, **self.client.branch_kwargs()
            )
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to create file {path}: {e}") from e
        return f"Successfully created file: {path}"


class UpdateFileTool(BaseTool):
    name = "Update File"
    description = (
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "update the contents of a file in a GitHub repository. **VERY "
        "IMPORTANT**: Your input to this tool MUST strictly follow these rules:"
        "\n\n"
        "- First you must specify which file to modify by passing a full file "
        "path (**IMPORTANT**: the path must not start with a slash)\n"
        "- Then you must specify the old contents which you would like to "
        "replace wrapped in OLD <<<< and >>>> OLD\n"
        "- Then you must specify the new contents which you would like to "
        "replace the old contents with wrapped in NEW <<<< and >>>> NEW\n\n"
        "For example, if you would like to replace the contents of the file "
        '/test/test.txt from "old contents" to "new contents", you would pass '
        "in the following string:\n\n"
        "test/test.txt\n"
        "This is text that will not be changed\n"
        "OLD <<<<\nold contents\n>>>> OLD\n"
        "NEW <<<<\nnew contents\n>>>> NEW"
    )

    def _run(self, tool_input: str) -> str:
        request = parse_update_query(tool_input)
        try:
            content_file = self.client.get_file(request.path)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(
                f"failed to get current file content for {request.path}: {e}"
            ) from e
        try:
            current = content_file.decoded_content.decode("utf-8")
        except (UnicodeDecodeError, AssertionError) as e:
            raise GitHubToolError(f"failed to decode current file content: {e}") from e

        updated = apply_update(current, request.old_content, request.new_content)
        if updated is None:
            raise GitHubToolError(
                f"old content not found in {request.path}; file was not updated"
            )
        if updated == current:
            return f"No changes to {request.path}; new content matches old content"

        try:
            self.client.repo.update_file(
                request.path,
                f"Update {request.path}",
                updated,
                content_file.sha,
                **self.client.branch_kwargs(),
            )
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to update file {request.path}: {e}") from e
        return f"Successfully updated file: {request.path}"


class DeleteFileTool(BaseTool):
    name = "Delete File"
    description = (
        "This tool is a wrapper for the GitHub API, useful when you need to "
        "delete a file in a GitHub repository. Simply pass in the full file path "
        "of the file you would like to delete. **IMPORTANT**: the path must not "
        "start with a slash"
    )

    def _run(self, tool_input: str) -> str:
        path = tool_path(tool_input)
        try:
            content_file = self.client.get_file(path)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to get file {path} for deletion: {e}") from e

        try:
            self.client.repo.delete_file(
                path, f"Delete {path}", content_file.sha, **self.client.branch_kwargs()
            )
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to delete file {path}: {e}") from e
        return f"Successfully deleted file: {path}"
