"""Custom exceptions for wordcrawl."""
from typing import Optional


class CrawlConfigError(ValueError):
    """Raised when a crawl configuration is invalid. Nothing has been crawled yet."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid crawl config '{field}': {reason}")


class PageParseError(Exception):
    """Raised when a single page cannot be parsed. The crawl contains it and moves on."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not parse {url}: {reason}")


class HttpFetchError(PageParseError):
    """Raised when an HTTP fetch fails or returns something other than an HTML page.

    `original` is set for transport errors, `status_code` and `content_type`
    for responses that were received but rejected.
    """

    def __init__(
        self,
        url: str,
        reason: str,
        *,
        original: Optional[Exception] = None,
        status_code: Optional[int] = None,
        content_type: Optional[str] = None,
    ):
        self.original = original
        self.status_code = status_code
        self.content_type = content_type
        super().__init__(url, reason)


class CrawlTaskError(RuntimeError):
    """Raised by the coordinator when a crawl task failed for a reason other than parsing."""

    def __init__(self, url: str, original: BaseException):
        self.url = url
        self.original = original
        super().__init__(f"Crawl task for {url} failed: {original!r}")
