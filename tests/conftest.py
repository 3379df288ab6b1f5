import threading
from collections import Counter

import pytest

from wordcrawl.domain.parse_result import ParseResult
from wordcrawl.exceptions import PageParseError


class GraphPageParser:
    """In-memory web graph: url -> (links, word_counts). Unknown URLs fail to parse."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = Counter()
        self._lock = threading.Lock()

    def parse(self, url):
        with self._lock:
            self.calls[url] += 1
        if url not in self.pages:
            raise PageParseError(url, "not found")
        links, words = self.pages[url]
        return ParseResult(links=list(links), word_counts=dict(words))


@pytest.fixture
def graph_parser():
    return GraphPageParser


@pytest.fixture
def abc_graph():
    return {
        "a": (["b", "c"], {"x": 1}),
        "b": (["a"], {"x": 2}),
        "c": ([], {"y": 3}),
    }
