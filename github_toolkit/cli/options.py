"""Shared CLI option definitions so every command uses the same flags."""

import typer

# Wrapper options
REPOSITORY_OPTION = typer.Option(
    None,
    "--repository",
    "-r",
    help="Repository as owner/repo (defaults to GITHUB_REPOSITORY env var)",
)

ACTIVE_BRANCH_OPTION = typer.Option(
    None, "--active-branch", "-a", help="Working branch for file changes"
)

BASE_BRANCH_OPTION = typer.Option(
    None, "--base-branch", "-b", help="Base branch that pull requests target"
)

INCLUDE_RELEASES_OPTION = typer.Option(
    False, "--include-releases", help="Also expose the release tools"
)

# Loader options
TOKEN_OPTION = typer.Option(
    None,
    "--token",
    "-t",
    help="GitHub token (defaults to GITHUB_PERSONAL_ACCESS_TOKEN env var)",
)

STATE_OPTION = typer.Option(
    "open", "--state", "-s", help="Issue state: open, closed, or all"
)

LABELS_OPTION = typer.Option(
    None, "--label", "-l", help="Filter by label (can be used multiple times)"
)

MILESTONE_OPTION = typer.Option(
    None, "--milestone", help='Milestone number, "*" for any, "none" for none'
)

CREATOR_OPTION = typer.Option(None, "--creator", help="Filter by issue author")

ASSIGNEE_OPTION = typer.Option(None, "--assignee", help="Filter by assignee")

INCLUDE_PRS_OPTION = typer.Option(
    True, "--prs/--no-prs", help="Include pull requests in the results"
)

PAGE_OPTION = typer.Option(None, "--page", help="Fetch only this page")

PER_PAGE_OPTION = typer.Option(
    None, "--per-page", help="Page size (disables automatic pagination)"
)

BRANCH_OPTION = typer.Option("main", "--branch", help="Branch to load files from")

EXTENSION_OPTION = typer.Option(
    None,
    "--extension",
    "-e",
    help="Only load files with this extension, e.g. .py (repeatable)",
)

OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Write documents as JSON to this file"
)

LOG_LEVEL_OPTION = typer.Option(
    "WARNING", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"
)
