import logging

from wordcrawl.domain.crawl_state import CrawlState
from wordcrawl.domain.crawl_task import CrawlTask
from wordcrawl.exceptions import PageParseError
from wordcrawl.services.crawl_policy import CrawlPolicy

logger = logging.getLogger(__name__)


class CrawlTaskProcessor:
    """Runs the body of one crawl task.

    `compute` decides whether the task's URL is processed, parses it, merges
    its word counts into the shared state and returns the child tasks. It
    never schedules anything itself; the caller owns fan-out and joining.
    """

    def __init__(self, *, state: CrawlState, crawl_policy: CrawlPolicy, page_parser):
        self.state = state
        self.crawl_policy = crawl_policy
        self.page_parser = page_parser

    def compute(self, task: CrawlTask) -> list[CrawlTask]:
        if self.crawl_policy.should_skip_due_to_depth(task):
            return []
        if self.crawl_policy.should_skip_due_to_deadline(task):
            return []
        # Excluded URLs must never reach the visited set.
        if self.crawl_policy.should_skip_due_to_exclusion(task):
            return []
        if not self.state.try_claim(task.url):
            logger.debug("Skipping (visited) %s", task.url)
            return []

        try:
            result = self.page_parser.parse(task.url)
        except PageParseError as e:
            # The URL stays claimed so it is not retried within this crawl.
            logger.warning("Parse failed for %s: %s", task.url, e)
            return []

        self.state.merge(result.word_counts)
        logger.info(
            "Parsed %s -> %d words, %d links (depth left %d)",
            task.url,
            len(result.word_counts),
            len(result.links),
            task.remaining_depth,
        )
        return [task.child(link) for link in result.links]
