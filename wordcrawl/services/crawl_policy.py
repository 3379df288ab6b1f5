import logging
import re
from typing import Callable, Iterable

from wordcrawl.domain.crawl_task import CrawlTask

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates the rules that end a crawl task before any work: depth, deadline and URL exclusion.

    Separates policy decisions from crawl orchestration logic. Both the
    exclusion patterns and the clock are fixed for the lifetime of a crawl.
    """

    def __init__(self, ignored_urls: Iterable[re.Pattern], clock: Callable[[], float]):
        self.ignored_urls = tuple(ignored_urls or ())
        self.clock = clock

    def should_skip_due_to_depth(self, task: CrawlTask) -> bool:
        """Depth 0 means the page is not even fetched."""
        if task.remaining_depth <= 0:
            logger.debug("Skipping (max depth reached) %s", task.url)
            return True
        return False

    def should_skip_due_to_deadline(self, task: CrawlTask) -> bool:
        if self.clock() >= task.deadline:
            logger.debug("Skipping (deadline passed) %s", task.url)
            return True
        return False

    def should_skip_due_to_exclusion(self, task: CrawlTask) -> bool:
        if self.is_excluded(task.url):
            logger.debug("Skipping (excluded) %s", task.url)
            return True
        return False

    def is_excluded(self, url: str) -> bool:
        return any(p.fullmatch(url) for p in self.ignored_urls)
