"""Main CLI entry point."""

import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..agents.toolkit import CORE_TOOLS, RELEASE_TOOLS, GitHubAgentToolkit
from ..config import WrapperConfig
from ..document_loaders.base import Document
from ..document_loaders.github import GitHubFileLoader, GitHubIssuesLoader
from ..errors import (
    ConfigurationError,
    GitHubAPIError,
    GitHubToolError,
    InputFormatError,
)
from ..github_client.client import GitHubAPIWrapper
from ..logging_config import configure_logging
from .options import (
    ACTIVE_BRANCH_OPTION,
    ASSIGNEE_OPTION,
    BASE_BRANCH_OPTION,
    BRANCH_OPTION,
    CREATOR_OPTION,
    EXTENSION_OPTION,
    INCLUDE_PRS_OPTION,
    INCLUDE_RELEASES_OPTION,
    LABELS_OPTION,
    LOG_LEVEL_OPTION,
    MILESTONE_OPTION,
    OUTPUT_OPTION,
    PAGE_OPTION,
    PER_PAGE_OPTION,
    REPOSITORY_OPTION,
    STATE_OPTION,
    TOKEN_OPTION,
)

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-toolkit",
    help="GitHub repository operations, agent tools and document loaders",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main(log_level: str = LOG_LEVEL_OPTION) -> None:
    """GitHub repository operations, agent tools and document loaders."""
    configure_logging(log_level)


def _build_wrapper(
    repository: str | None, active_branch: str | None, base_branch: str | None
) -> GitHubAPIWrapper:
    config = WrapperConfig.from_env(
        repository=repository or "",
        active_branch=active_branch or "",
        base_branch=base_branch or "",
    )
    try:
        return GitHubAPIWrapper(config)
    except ConfigurationError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)
    except GitHubAPIError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)


def _print_result(result: str) -> None:
    # Results contain brackets that rich would otherwise read as markup
    console.print(result, markup=False, highlight=False)


def _write_documents(documents: list[Document], output: Path) -> None:
    payload = [document.model_dump() for document in documents]
    output.write_text(json.dumps(payload, indent=2))
    console.print(f"💾 Saved {len(documents)} documents to {output}")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from github_toolkit import __version__

    console.print(f"GitHub Toolkit v{__version__}")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def run(
    mode: str = typer.Argument(..., help="Operation to run, e.g. get_issues"),
    query: str = typer.Argument("", help="Mode-specific input"),
    repository: str | None = REPOSITORY_OPTION,
    active_branch: str | None = ACTIVE_BRANCH_OPTION,
    base_branch: str | None = BASE_BRANCH_OPTION,
) -> None:
    """Run one repository operation through the API wrapper.

    Examples:
        github-toolkit run get_issues
        github-toolkit run get_issue 42
        github-toolkit run read_file README.md --active-branch feature
    """
    wrapper = _build_wrapper(repository, active_branch, base_branch)
    try:
        result = wrapper.run(mode, query)
    except InputFormatError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)
    except GitHubAPIError as e:
        console.print(f"❌ GitHub API error: {e}")
        raise typer.Exit(1)

    _print_result(result)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def tools(include_releases: bool = INCLUDE_RELEASES_OPTION) -> None:
    """List the agent tools and the operation each one runs."""
    specs = CORE_TOOLS + RELEASE_TOOLS if include_releases else CORE_TOOLS

    table = Table(title="Agent Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Mode", style="green")
    table.add_column("Description")
    for spec in specs:
        table.add_row(spec.name, spec.mode.value, spec.description)

    console.print(table)
    console.print(f"\n{len(specs)} tools available")


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def call(
    tool_name: str = typer.Argument(..., help='Tool name, e.g. "Get Issue"'),
    tool_input: str = typer.Argument("", help="Free-form tool input"),
    include_releases: bool = INCLUDE_RELEASES_OPTION,
    repository: str | None = REPOSITORY_OPTION,
    active_branch: str | None = ACTIVE_BRANCH_OPTION,
    base_branch: str | None = BASE_BRANCH_OPTION,
) -> None:
    """Invoke one agent tool by name."""
    wrapper = _build_wrapper(repository, active_branch, base_branch)
    toolkit = GitHubAgentToolkit(wrapper, include_release_tools=include_releases)

    tool = toolkit.get_tool_by_name(tool_name)
    if tool is None:
        console.print(f"❌ Unknown tool: {tool_name}")
        console.print(f"Available tools: {', '.join(toolkit.get_tool_names())}")
        raise typer.Exit(1)

    try:
        result = tool.call(tool_input)
    except GitHubToolError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)

    _print_result(result)


@app.command(
    name="load-issues", context_settings={"help_option_names": ["-h", "--help"]}
)
def load_issues(
    repo: str = typer.Argument(..., help="Repository as owner/repo"),
    token: str | None = TOKEN_OPTION,
    state: str = STATE_OPTION,
    labels: list[str] | None = LABELS_OPTION,
    milestone: str | None = MILESTONE_OPTION,
    creator: str | None = CREATOR_OPTION,
    assignee: str | None = ASSIGNEE_OPTION,
    include_prs: bool = INCLUDE_PRS_OPTION,
    page: int | None = PAGE_OPTION,
    per_page: int | None = PER_PAGE_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Load issues as documents and show or save them.

    Examples:
        github-toolkit load-issues owner/repo --state all --label bug
        github-toolkit load-issues owner/repo --no-prs --output issues.json
    """
    try:
        loader = GitHubIssuesLoader(
            repo,
            token,
            include_prs=include_prs,
            milestone=milestone,
            state=state,
            assignee=assignee or "",
            creator=creator or "",
            labels=labels,
            page=page,
            per_page=per_page,
        )
        console.print(f"🔍 Loading issues from {repo}")
        documents = loader.load()
    except ConfigurationError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)
    except GitHubAPIError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)

    console.print(f"✅ Loaded {len(documents)} documents")
    if output is not None:
        _write_documents(documents, output)
        return

    table = Table(title=f"Issues in {repo}")
    table.add_column("Number", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("State")
    table.add_column("Labels")
    table.add_column("PR")
    for document in documents:
        metadata = document.metadata
        table.add_row(
            str(metadata["number"]),
            metadata["title"],
            metadata["state"],
            ", ".join(metadata["labels"]),
            "yes" if metadata["is_pull_request"] else "",
        )
    console.print(table)


@app.command(
    name="load-files", context_settings={"help_option_names": ["-h", "--help"]}
)
def load_files(
    repo: str = typer.Argument(..., help="Repository as owner/repo"),
    token: str | None = TOKEN_OPTION,
    branch: str = BRANCH_OPTION,
    extensions: list[str] | None = EXTENSION_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Load repository files as documents and show or save them.

    Examples:
        github-toolkit load-files owner/repo --branch main --extension .md
    """
    file_filter = None
    if extensions:
        suffixes = tuple(extensions)

        def file_filter(path: str) -> bool:
            return path.endswith(suffixes)

    try:
        loader = GitHubFileLoader(repo, token, branch=branch, file_filter=file_filter)
        console.print(f"🔍 Loading files from {repo}@{branch}")
        documents = loader.load()
    except ConfigurationError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)
    except GitHubAPIError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)

    console.print(f"✅ Loaded {len(documents)} documents")
    if output is not None:
        _write_documents(documents, output)
        return

    table = Table(title=f"Files in {repo}@{branch}")
    table.add_column("Path", style="cyan")
    table.add_column("Size", style="green", justify="right")
    table.add_column("SHA")
    for document in documents:
        table.add_row(
            document.metadata["path"],
            str(len(document.page_content)),
            str(document.metadata["sha"])[:8],
        )
    console.print(table)


if __name__ == "__main__":
    app()
