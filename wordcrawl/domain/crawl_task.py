from dataclasses import dataclass


@dataclass(frozen=True)
class CrawlTask:
    """Crawl `url` with `remaining_depth` hops left, unless `deadline` has passed.

    `deadline` is an absolute reading of the coordinator's clock.
    """

    url: str
    remaining_depth: int
    deadline: float

    def child(self, url: str) -> "CrawlTask":
        return CrawlTask(url=url, remaining_depth=self.remaining_depth - 1, deadline=self.deadline)
