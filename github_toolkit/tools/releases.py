"""Release tools. Only added to the toolkit when release tools are enabled."""

from itertools import islice

from github.GitRelease import GitRelease

from ..errors import REQUEST_ERRORS, GitHubToolError
from .base import BaseTool, format_time, require_text

RELEASE_LIMIT = 5


def _describe(release: GitRelease, body_inline: bool = False) -> list[str]:
    lines = [
        f"Tag: {release.tag_name}",
        f"Name: {release.title or ''}",
        f"Published: {format_time(release.published_at)}",
        f"Draft: {str(release.draft).lower()}, "
        f"Prerelease: {str(release.prerelease).lower()}",
    ]
    if release.body:
        if body_inline:
            lines.append(f"Description: {release.body}")
        else:
            lines.append(f"Description:\n{release.body}")
    return lines


def _assets(release: GitRelease) -> list[str]:
    assets = list(release.assets)
    if not assets:
        return []
    return ["", "Assets:"] + [f"- {asset.name} ({asset.size} bytes)" for asset in assets]


class GetReleasesTool(BaseTool):
    name = "Get Releases"
    description = (
        "This tool will fetch the latest 5 releases of the repository. No input "
        "parameters are required."
    )

    def _run(self, tool_input: str) -> str:
        try:
            releases = list(islice(self.client.repo.get_releases(), RELEASE_LIMIT))
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch releases: {e}") from e

        parts = ["Repository Releases:\n\n"]
        if not releases:
            parts.append("No releases found.\n")
        for release in releases:
            lines = _describe(release, body_inline=True)
            lines[0] = f"Release: {release.tag_name}"
            parts.append("\n".join(lines) + "\n")
            parts.append("\n---\n\n")
        return "".join(parts)


class GetLatestReleaseTool(BaseTool):
    name = "Get Latest Release"
    description = (
        "This tool will fetch the latest release of the repository. No input "
        "parameters are required."
    )

    def _run(self, tool_input: str) -> str:
        try:
            release = self.client.repo.get_latest_release()
            lines = ["Latest Release:", ""] + _describe(release) + _assets(release)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch latest release: {e}") from e
        return "\n".join(lines) + "\n"


class GetReleaseTool(BaseTool):
    name = "Get Release"
    description = (
        "This tool will fetch a specific release of the repository. **VERY "
        "IMPORTANT**: You must specify the tag name of the release as a string "
        "input parameter."
    )

    def _run(self, tool_input: str) -> str:
        tag_name = require_text(tool_input, "tag name")
        try:
            release = self.client.repo.get_release(tag_name)
            lines = [f"Release {tag_name}:", ""] + _describe(release) + _assets(release)
        except REQUEST_ERRORS as e:
            raise GitHubToolError(f"failed to fetch release {tag_name}: {e}") from e
        return "\n".join(lines) + "\n"
