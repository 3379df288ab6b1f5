"""Crawl result data model."""
from typing import Dict, NamedTuple


class CrawlResult(NamedTuple):
    """Aggregate produced once at the end of a crawl.

    Built from a snapshot of the crawl state after every task has finished,
    so it never changes afterwards.
    """
    word_counts: Dict[str, int]
    """Word -> total occurrences over every successfully parsed page"""

    urls_visited: int
    """Number of distinct URLs claimed for processing (parse failures included)"""
