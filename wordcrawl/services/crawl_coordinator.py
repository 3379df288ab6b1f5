import logging
import re
import time
from typing import Callable, Iterable, Optional

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.crawl_state import CrawlState
from wordcrawl.domain.crawl_task import CrawlTask
from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.crawl_policy import CrawlPolicy
from wordcrawl.services.crawl_task_processor import CrawlTaskProcessor
from wordcrawl.services.profiler import profiled
from wordcrawl.services.task_scheduler import ForkJoinTaskScheduler, SequentialTaskScheduler
from wordcrawl.services.word_counts import sort_by_popularity

logger = logging.getLogger(__name__)


class CrawlCoordinator:
    """Crawls from a set of seed URLs and aggregates word counts.

    Each call to `crawl` owns a fresh `CrawlState`: one root task is created
    per seed, every task tree is run to completion, and the state is read
    once, after no task can touch it anymore.

    With `parallelism == 1` the crawl is a plain depth-first traversal on the
    calling thread. Otherwise tasks run on a pool of `parallelism` threads.

    When the timeout expires mid-crawl the result covers whatever was parsed
    before each task observed the deadline, which depends on scheduling.
    """

    def __init__(
        self,
        *,
        page_parser,
        max_depth: int,
        timeout_seconds: float,
        ignored_urls: Optional[Iterable[re.Pattern]] = None,
        parallelism: int = 1,
        popular_word_count: int = 0,
        clock: Callable[[], float] = time.monotonic,
        lock_stripes: int = 64,
    ):
        if max_depth is None or max_depth < 0:
            raise CrawlConfigError("max_depth", f"must be >= 0, got {max_depth}")
        if timeout_seconds is None or timeout_seconds < 0:
            raise CrawlConfigError("timeout_seconds", f"must be >= 0, got {timeout_seconds}")
        if parallelism is None or parallelism < 1:
            raise CrawlConfigError("parallelism", f"must be >= 1, got {parallelism}")
        self.page_parser = page_parser
        self.max_depth = int(max_depth)
        self.timeout_seconds = float(timeout_seconds)
        self.ignored_urls = tuple(ignored_urls or ())
        self.parallelism = int(parallelism)
        self.popular_word_count = int(popular_word_count or 0)
        self.clock = clock
        self.lock_stripes = lock_stripes

    @classmethod
    def from_config(cls, config, *, page_parser, **kwargs) -> "CrawlCoordinator":
        return cls(
            page_parser=page_parser,
            max_depth=config.max_depth,
            timeout_seconds=config.timeout_seconds,
            ignored_urls=config.ignored_urls,
            parallelism=config.parallelism,
            popular_word_count=config.popular_word_count,
            **kwargs,
        )

    def _scheduler(self):
        if self.parallelism == 1:
            return SequentialTaskScheduler()
        return ForkJoinTaskScheduler(self.parallelism)

    @profiled
    def crawl(self, seeds: Iterable[str]) -> CrawlResult:
        """Crawl from `seeds` and return the aggregate result.

        Raises CrawlConfigError for an empty or malformed seed list and
        CrawlTaskError if a task fails for a reason other than parsing.
        """
        if isinstance(seeds, str):
            raise CrawlConfigError("start_pages", "must be a list of URLs")
        seeds = list(seeds or ())
        if not seeds:
            raise CrawlConfigError("start_pages", "at least one start page is required")
        if any(not isinstance(s, str) or s.strip() == "" for s in seeds):
            raise CrawlConfigError("start_pages", "start pages must be non-empty strings")

        started = self.clock()
        deadline = started + self.timeout_seconds
        state = CrawlState(concurrent=self.parallelism > 1, lock_stripes=self.lock_stripes)
        processor = CrawlTaskProcessor(
            state=state,
            crawl_policy=CrawlPolicy(self.ignored_urls, self.clock),
            page_parser=self.page_parser,
        )
        roots = [CrawlTask(url=seed, remaining_depth=self.max_depth, deadline=deadline) for seed in seeds]

        logger.info(
            "Starting crawl of %d seed(s): max_depth=%s parallelism=%s timeout=%.1fs",
            len(roots),
            self.max_depth,
            self.parallelism,
            self.timeout_seconds,
        )
        self._scheduler().run(roots, processor.compute)

        word_counts, visited = state.snapshot()
        result = CrawlResult(
            word_counts=sort_by_popularity(word_counts, self.popular_word_count),
            urls_visited=len(visited),
        )
        if self.clock() >= deadline:
            logger.info("Crawl deadline reached; result may be partial")
        logger.info(
            "Crawl finished: %d URLs visited, %d distinct words",
            result.urls_visited,
            len(word_counts),
        )
        return result
