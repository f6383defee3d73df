"""Tests for the GitHub file loader."""

import base64
from typing import Any

import httpx
import pytest

from github_toolkit.document_loaders.github import GitHubFileLoader
from github_toolkit.errors import GitHubAPIError

TREE = {
    "tree": [
        {"path": "README.md", "type": "blob", "sha": "a1"},
        {"path": "src", "type": "tree", "sha": "t1"},
        {"path": "src/app.py", "type": "blob", "sha": "b2"},
        {"path": "src/empty.py", "type": "blob", "sha": "c3"},
        {"path": "src/broken.py", "type": "blob", "sha": "d4"},
        {"path": "logo.png", "type": "blob", "sha": "e5"},
    ]
}


def encoded(text: str) -> str:
    # GitHub wraps base64 content at 60 characters
    raw = base64.b64encode(text.encode()).decode()
    return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))


FILES = {
    "README.md": encoded("# Demo\n" + "x" * 100),
    "src/app.py": encoded("print('hello')\n"),
    "src/empty.py": "",
}


def make_client(tree: Any = TREE, tree_status: int = 200) -> tuple[httpx.Client, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        path = request.url.path
        if "/git/trees/" in path:
            return httpx.Response(tree_status, json=tree)
        file_path = path.split("/contents/", 1)[1]
        if file_path in FILES:
            return httpx.Response(200, json={"content": FILES[file_path]})
        return httpx.Response(404, json={"message": "Not Found"})

    return httpx.Client(transport=httpx.MockTransport(handler)), requests


class TestGitHubFileLoader:
    """Test loading repository files."""

    def test_load_blobs(self) -> None:
        """Test blobs are decoded and failures or empty files skipped."""
        client, requests = make_client()
        loader = GitHubFileLoader("octo/demo", "token", branch="dev", client=client)

        documents = loader.load()

        assert [d.metadata["path"] for d in documents] == ["README.md", "src/app.py"]
        assert documents[0].page_content.startswith("# Demo\nxxx")
        assert documents[1].page_content == "print('hello')\n"
        assert documents[1].metadata == {
            "path": "src/app.py",
            "sha": "b2",
            "source": "https://api.github.com/octo/demo/blob/dev/src/app.py",
        }
        assert requests[0].url.params["recursive"] == "1"
        assert requests[1].url.params["ref"] == "dev"

    def test_file_filter(self) -> None:
        """Test only paths passing the filter are fetched."""
        client, requests = make_client()
        loader = GitHubFileLoader(
            "octo/demo",
            "token",
            file_filter=lambda path: path.endswith(".py"),
            client=client,
        )

        documents = loader.load()

        assert [d.metadata["path"] for d in documents] == ["src/app.py"]
        fetched = [r.url.path for r in requests if "/contents/" in r.url.path]
        assert all(p.endswith(".py") for p in fetched)

    def test_tree_error(self) -> None:
        """Test a failed tree listing raises."""
        client, _ = make_client(tree_status=404)
        loader = GitHubFileLoader("octo/demo", "token", client=client)

        with pytest.raises(GitHubAPIError, match="404"):
            loader.load()

    def test_invalid_tree(self) -> None:
        """Test a tree field that is not a list."""
        client, _ = make_client(tree={"tree": "nope"})
        loader = GitHubFileLoader("octo/demo", "token", client=client)

        with pytest.raises(GitHubAPIError, match="invalid tree response format"):
            loader.load()
