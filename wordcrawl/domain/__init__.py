"""Domain objects for wordcrawl - explicit re-exports to satisfy linters."""
from .config import CrawlerConfig as CrawlerConfig
from .crawl_result import CrawlResult as CrawlResult
from .crawl_state import CrawlState as CrawlState
from .crawl_task import CrawlTask as CrawlTask
from .parse_result import ParseResult as ParseResult

__all__ = ["CrawlerConfig", "CrawlResult", "CrawlState", "CrawlTask", "ParseResult"]
