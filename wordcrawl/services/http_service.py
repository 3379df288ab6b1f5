import logging
from typing import Callable

import requests

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)

# Media types whose body is handed to the HTML parser.
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml", "text/plain")


def media_type(content_type):
    """'text/html; charset=utf-8' -> 'text/html'. None stays None."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower()


class HttpService:
    """
    HTTP client wrapper for fetching crawl pages.

    Requires http_client callable for dependency injection, so tests can
    pass a fake instead of patching requests. Every failure surfaces as
    `HttpFetchError`, which the crawl treats as a per-page parse failure.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """GET `url` and return status code, body text and Content-Type, whatever the status."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, f"HTTP fetch failed: {e}", original=e) from e

        headers = getattr(resp, "headers", None) or {}
        return HttpResponse(resp.status_code, resp.text, headers.get("Content-Type"))

    def fetch_html(self, url: str) -> str:
        """Return the body of a 2xx HTML (or plain text) response.

        A missing Content-Type is accepted; servers that omit it usually serve HTML.
        """
        response = self.fetch(url)
        if not response.ok:
            raise HttpFetchError(
                url,
                f"status {response.status_code}",
                status_code=response.status_code,
                content_type=response.content_type,
            )
        kind = media_type(response.content_type)
        if kind is not None and kind not in HTML_CONTENT_TYPES:
            raise HttpFetchError(
                url,
                f"non-HTML content type {kind!r}",
                status_code=response.status_code,
                content_type=response.content_type,
            )
        logger.debug("Fetched %s (%s, %d chars)", url, kind or "no content type", len(response.text))
        return response.text
