"""Link-header pagination for GitHub REST list endpoints."""

import logging
from collections.abc import Iterator

import httpx

logger = logging.getLogger(__name__)


def get_next_url(link_header: str | None) -> str | None:
    """Extract the ``rel="next"`` URL from a GitHub Link header.

    Format: <https://api.github.com/...?page=2>; rel="next", <...>; rel="last"

    Args:
        link_header: Raw Link header value

    Returns:
        Next page URL, or None if there is no next page or the header is
        malformed
    """
    if not link_header:
        return None

    for link in link_header.split(","):
        parts = link.strip().split(";")
        if len(parts) == 2 and 'rel="next"' in parts[1]:
            return parts[0].strip().strip("<>")
    return None


def iter_pages(
    client: httpx.Client,
    url: str,
    headers: dict[str, str],
    follow: bool = True,
) -> Iterator[httpx.Response]:
    """Yield successive responses, following Link headers.

    Args:
        client: HTTP client used for every request
        url: First page URL
        headers: Request headers sent with each page
        follow: If False only the first page is fetched

    The caller is responsible for checking each response's status.
    """
    next_url: str | None = url
    page = 1
    while next_url:
        response = client.get(next_url, headers=headers)
        yield response

        if not follow or response.status_code != 200:
            return

        next_url = get_next_url(response.headers.get("Link"))
        if next_url:
            page += 1
            logger.debug("Paginating: fetching page %d", page)
