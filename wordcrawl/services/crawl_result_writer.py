import json
from typing import TextIO

from wordcrawl.domain.crawl_result import CrawlResult


class CrawlResultWriter:
    """Writes a CrawlResult as a JSON document: `{"wordCounts": {...}, "urlsVisited": n}`."""

    def __init__(self, result: CrawlResult):
        if result is None:
            raise ValueError("result is required")
        self.result = result

    def to_dict(self) -> dict:
        return {
            "wordCounts": dict(self.result.word_counts),
            "urlsVisited": self.result.urls_visited,
        }

    def write(self, path: str) -> None:
        """Append the JSON document to `path`, creating the file if needed."""
        with open(path, "a", encoding="utf-8") as f:
            self.write_to(f)

    def write_to(self, stream: TextIO) -> None:
        json.dump(self.to_dict(), stream)
        stream.write("\n")
