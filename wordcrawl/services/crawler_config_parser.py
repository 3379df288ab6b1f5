from typing import Optional

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import CrawlConfigError

_LIST_KEYS = ("start_pages", "ignored_urls", "ignored_words")


class CrawlerConfigParser:
    """Parse a YAML dict into a CrawlerConfig.

    Responsibility: schema/validation for crawl config documents.
    It does NOT perform filesystem IO.
    """

    def parse(self, data: Optional[dict]) -> CrawlerConfig:
        if not isinstance(data, dict):
            raise CrawlConfigError("<document>", "expected a mapping of config keys")

        for key in _LIST_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, list):
                raise CrawlConfigError(key, f"must be a list, got {type(value).__name__}")

        return CrawlerConfig(
            start_pages=data.get("start_pages"),
            max_depth=data.get("max_depth", 0),
            timeout_seconds=data.get("timeout_seconds", 1),
            ignored_urls=data.get("ignored_urls"),
            ignored_words=data.get("ignored_words"),
            # None falls back to the number of CPUs
            parallelism=data.get("parallelism"),
            popular_word_count=data.get("popular_word_count", 0),
            result_path=data.get("result_path"),
            profile_output_path=data.get("profile_output_path"),
        )
