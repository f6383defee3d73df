"""Test main CLI functionality."""

import json
import os
import re
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from github_toolkit.cli.main import app
from github_toolkit.document_loaders.base import Document
from github_toolkit.errors import GitHubAPIError, InputFormatError


def strip_ansi(text: str) -> str:
    """Strip ANSI escape codes from text."""
    ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
    return ansi_escape.sub("", text)


@pytest.fixture
def runner() -> CliRunner:
    """Provide CLI test runner."""
    return CliRunner(env={"NO_COLOR": "1", "FORCE_COLOR": "0"})


@pytest.fixture
def mock_wrapper_class() -> Mock:
    """Patch the wrapper class used by the CLI."""
    with patch("github_toolkit.cli.main.GitHubAPIWrapper") as wrapper_class:
        yield wrapper_class


class TestBasicCommands:
    """Test version, help and tool listing."""

    def test_version_command(self, runner: CliRunner) -> None:
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "GitHub Toolkit v" in result.stdout

    def test_help_shorthand(self, runner: CliRunner) -> None:
        """Test -h shows help."""
        result = runner.invoke(app, ["-h"])
        assert result.exit_code == 0
        clean_output = strip_ansi(result.stdout)
        assert "load-issues" in clean_output
        assert "--log-level" in clean_output

    def test_tools_lists_core_tools(self, runner: CliRunner) -> None:
        """Test tool listing works without credentials."""
        result = runner.invoke(app, ["tools"])
        assert result.exit_code == 0
        assert "18 tools available" in result.stdout

    def test_tools_with_releases(self, runner: CliRunner) -> None:
        """Test release tools are counted when enabled."""
        result = runner.invoke(app, ["tools", "--include-releases"])
        assert result.exit_code == 0
        assert "21 tools available" in result.stdout


class TestRunCommand:
    """Test the run command."""

    def test_run_mode(self, runner: CliRunner, mock_wrapper_class: Mock) -> None:
        """Test a mode is dispatched and its result printed verbatim."""
        wrapper = mock_wrapper_class.return_value
        wrapper.run.return_value = "Found 1 issues:\n[{'title': 'Bug'}]"

        result = runner.invoke(
            app, ["run", "get_issues", "--repository", "octo/demo"]
        )

        assert result.exit_code == 0
        assert "[{'title': 'Bug'}]" in result.stdout
        wrapper.run.assert_called_once_with("get_issues", "")
        config = mock_wrapper_class.call_args.args[0]
        assert config.repository == "octo/demo"

    def test_run_input_error(self, runner: CliRunner, mock_wrapper_class: Mock) -> None:
        """Test parse errors exit with status 1."""
        mock_wrapper_class.return_value.run.side_effect = InputFormatError(
            "invalid issue number: abc"
        )

        result = runner.invoke(app, ["run", "get_issue", "abc"])

        assert result.exit_code == 1
        assert "invalid issue number: abc" in result.stdout

    def test_run_api_error(self, runner: CliRunner, mock_wrapper_class: Mock) -> None:
        """Test API errors exit with status 1."""
        mock_wrapper_class.return_value.run.side_effect = GitHubAPIError("boom")

        result = runner.invoke(app, ["run", "list_branches_in_repo"])

        assert result.exit_code == 1
        assert "GitHub API error: boom" in result.stdout

    @patch.dict(os.environ, {}, clear=True)
    def test_run_without_configuration(self, runner: CliRunner) -> None:
        """Test missing credentials are reported."""
        result = runner.invoke(app, ["run", "get_issues"])

        assert result.exit_code == 1
        assert "GITHUB_REPOSITORY is required" in result.stdout


class TestCallCommand:
    """Test the call command."""

    def test_call_tool(self, runner: CliRunner, mock_wrapper_class: Mock) -> None:
        """Test a tool is looked up and called with preprocessed input."""
        wrapper = mock_wrapper_class.return_value
        wrapper.run.return_value = "Commented on issue 42"

        result = runner.invoke(app, ["call", "Comment on Issue", "42\nThanks"])

        assert result.exit_code == 0
        assert "Commented on issue 42" in result.stdout
        mode, query = wrapper.run.call_args.args
        assert mode.value == "comment_on_issue"
        assert query == "42\n\nThanks"

    def test_call_unknown_tool(
        self, runner: CliRunner, mock_wrapper_class: Mock
    ) -> None:
        """Test an unknown tool name."""
        result = runner.invoke(app, ["call", "Fly Away"])

        assert result.exit_code == 1
        assert "Unknown tool: Fly Away" in result.stdout

    def test_call_tool_error(self, runner: CliRunner, mock_wrapper_class: Mock) -> None:
        """Test tool failures exit with status 1."""
        mock_wrapper_class.return_value.run.side_effect = GitHubAPIError("nope")

        result = runner.invoke(app, ["call", "Get Issues"])

        assert result.exit_code == 1
        assert "GitHub operation failed: nope" in result.stdout


class TestLoaderCommands:
    """Test load-issues and load-files."""

    def test_load_issues_to_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test documents are written as JSON."""
        document = Document(page_content="Body", metadata={"number": 1})
        output = tmp_path / "issues.json"

        with patch("github_toolkit.cli.main.GitHubIssuesLoader") as loader_class:
            loader_class.return_value.load.return_value = [document]
            result = runner.invoke(
                app,
                [
                    "load-issues",
                    "octo/demo",
                    "--token",
                    "tok",
                    "--label",
                    "bug",
                    "--no-prs",
                    "--output",
                    str(output),
                ],
            )

        assert result.exit_code == 0
        assert "Loaded 1 documents" in result.stdout
        assert json.loads(output.read_text()) == [
            {"page_content": "Body", "metadata": {"number": 1}}
        ]
        kwargs = loader_class.call_args.kwargs
        assert kwargs["labels"] == ["bug"]
        assert kwargs["include_prs"] is False

    def test_load_issues_error(self, runner: CliRunner) -> None:
        """Test loader errors exit with status 1."""
        with patch("github_toolkit.cli.main.GitHubIssuesLoader") as loader_class:
            loader_class.return_value.load.side_effect = GitHubAPIError(
                "GitHub API error: 404 Not Found"
            )
            result = runner.invoke(app, ["load-issues", "octo/demo", "-t", "tok"])

        assert result.exit_code == 1
        assert "404 Not Found" in result.stdout

    def test_load_files_extension_filter(self, runner: CliRunner) -> None:
        """Test --extension builds a suffix filter."""
        document = Document(
            page_content="print()", metadata={"path": "a.py", "sha": "abcdef123"}
        )
        with patch("github_toolkit.cli.main.GitHubFileLoader") as loader_class:
            loader_class.return_value.load.return_value = [document]
            result = runner.invoke(
                app, ["load-files", "octo/demo", "-t", "tok", "-e", ".py"]
            )

        assert result.exit_code == 0
        file_filter = loader_class.call_args.kwargs["file_filter"]
        assert file_filter("src/app.py")
        assert not file_filter("README.md")
