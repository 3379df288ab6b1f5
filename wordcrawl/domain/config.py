from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from wordcrawl.exceptions import CrawlConfigError

PatternLike = Union[str, re.Pattern]


def _compile_patterns(field: str, patterns: Optional[Iterable[PatternLike]]) -> tuple[re.Pattern, ...]:
    compiled = []
    for p in patterns or ():
        if isinstance(p, re.Pattern):
            compiled.append(p)
            continue
        if not isinstance(p, str):
            raise CrawlConfigError(field, f"pattern must be a string, got {type(p).__name__}")
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            raise CrawlConfigError(field, f"invalid regular expression {p!r}: {e}") from e
    return tuple(compiled)


@dataclass(frozen=True)
class CrawlerConfigOutput:
    """Where the results of a crawl go. Empty paths mean stdout."""

    result_path: Optional[str] = None
    profile_output_path: Optional[str] = None


@dataclass(frozen=True)
class CrawlerConfigData:
    """Crawl-behavior fields for a crawler configuration."""

    start_pages: tuple[str, ...]
    max_depth: int
    timeout_seconds: float
    ignored_urls: tuple[re.Pattern, ...]
    ignored_words: tuple[re.Pattern, ...]
    parallelism: int
    popular_word_count: int = 0


class CrawlerConfig:
    """Validated crawl configuration: crawl settings + output locations.

    Construction fails fast with `CrawlConfigError`, so an instance always
    describes a crawl that can be started.
    """

    def __init__(
        self,
        start_pages=None,
        max_depth: int = 0,
        timeout_seconds: float = 1.0,
        ignored_urls: Optional[Iterable[PatternLike]] = None,
        ignored_words: Optional[Iterable[PatternLike]] = None,
        parallelism: Optional[int] = None,
        popular_word_count: int = 0,
        result_path: Optional[str] = None,
        profile_output_path: Optional[str] = None,
    ):
        if isinstance(start_pages, str):
            raise CrawlConfigError("start_pages", "must be a list of URLs")
        pages = tuple(start_pages or ())
        if not pages:
            raise CrawlConfigError("start_pages", "at least one start page is required")
        if any(not isinstance(p, str) or p.strip() == "" for p in pages):
            raise CrawlConfigError("start_pages", "start pages must be non-empty strings")

        if isinstance(max_depth, bool) or not isinstance(max_depth, int):
            raise CrawlConfigError("max_depth", f"must be an integer, got {max_depth!r}")
        if max_depth < 0:
            raise CrawlConfigError("max_depth", f"must be >= 0, got {max_depth}")

        if isinstance(timeout_seconds, bool) or not isinstance(timeout_seconds, (int, float)):
            raise CrawlConfigError("timeout_seconds", f"must be a number, got {timeout_seconds!r}")
        if timeout_seconds < 0:
            raise CrawlConfigError("timeout_seconds", f"must be >= 0, got {timeout_seconds}")

        if parallelism is None:
            parallelism = os.cpu_count() or 1
        if isinstance(parallelism, bool) or not isinstance(parallelism, int):
            raise CrawlConfigError("parallelism", f"must be an integer, got {parallelism!r}")
        if parallelism < 1:
            raise CrawlConfigError("parallelism", f"must be >= 1, got {parallelism}")

        if isinstance(popular_word_count, bool) or not isinstance(popular_word_count, int):
            raise CrawlConfigError("popular_word_count", f"must be an integer, got {popular_word_count!r}")
        if popular_word_count < 0:
            raise CrawlConfigError("popular_word_count", f"must be >= 0, got {popular_word_count}")

        self.data = CrawlerConfigData(
            start_pages=pages,
            max_depth=max_depth,
            timeout_seconds=float(timeout_seconds),
            ignored_urls=_compile_patterns("ignored_urls", ignored_urls),
            ignored_words=_compile_patterns("ignored_words", ignored_words),
            parallelism=parallelism,
            popular_word_count=popular_word_count,
        )
        self.output = CrawlerConfigOutput(
            result_path=result_path or None,
            profile_output_path=profile_output_path or None,
        )

    @property
    def start_pages(self) -> list[str]:
        return list(self.data.start_pages)

    @property
    def max_depth(self) -> int:
        return self.data.max_depth

    @property
    def timeout_seconds(self) -> float:
        return self.data.timeout_seconds

    @property
    def ignored_urls(self) -> tuple[re.Pattern, ...]:
        return self.data.ignored_urls

    @property
    def ignored_words(self) -> tuple[re.Pattern, ...]:
        return self.data.ignored_words

    @property
    def parallelism(self) -> int:
        return self.data.parallelism

    @property
    def popular_word_count(self) -> int:
        return self.data.popular_word_count

    @property
    def result_path(self) -> Optional[str]:
        return self.output.result_path

    @property
    def profile_output_path(self) -> Optional[str]:
        return self.output.profile_output_path

    def __repr__(self):
        return (
            f"<CrawlerConfig start_pages={len(self.data.start_pages)} max_depth={self.max_depth} "
            f"parallelism={self.parallelism} timeout={self.timeout_seconds}s>"
        )
