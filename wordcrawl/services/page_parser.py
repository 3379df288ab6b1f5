import logging
import re
from collections import Counter
from typing import Iterable, Optional, Protocol
from urllib.parse import urldefrag, urljoin, urlparse
from urllib.request import url2pathname

from bs4 import BeautifulSoup

from wordcrawl.domain.parse_result import ParseResult
from wordcrawl.exceptions import PageParseError

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"\W")
_FOLLOWED_SCHEMES = ("http", "https", "file")


class PageParser(Protocol):
    """Turn a URL into its outgoing links and word counts.

    Implementations raise `PageParseError` for anything wrong with one page;
    any other exception is treated by the crawl as a bug.
    """

    def parse(self, url: str) -> ParseResult: ...


class HtmlPageParser:
    def __init__(self, http_service, ignored_words: Optional[Iterable[re.Pattern]] = None):
        self.http_service = http_service
        self.ignored_words = tuple(ignored_words or ())

    def parse(self, url: str) -> ParseResult:
        html = self._load(url)
        soup = BeautifulSoup(html, "html.parser")
        return ParseResult(
            links=self.extract_links(url, soup),
            word_counts=self.count_words(soup),
        )

    def _load(self, url: str) -> str:
        scheme = urlparse(url).scheme.lower()
        if scheme == "file":
            return self._read_local(url)
        if scheme not in ("http", "https"):
            raise PageParseError(url, f"unsupported scheme {scheme!r}")

        return self.http_service.fetch_html(url)

    def _read_local(self, url: str) -> str:
        path = url2pathname(urlparse(url).path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PageParseError(url, f"could not read local file: {e}") from e

    def extract_links(self, base_url: str, soup: BeautifulSoup) -> list[str]:
        links = []
        for a in soup.find_all("a", href=True):
            href = a.get("href", "").strip()
            if not href:
                continue
            abs_url, _ = urldefrag(urljoin(base_url, href))
            if urlparse(abs_url).scheme.lower() not in _FOLLOWED_SCHEMES:
                logger.debug("Ignoring link %s on %s (scheme)", abs_url, base_url)
                continue
            links.append(abs_url)
        return links

    def count_words(self, soup: BeautifulSoup) -> dict[str, int]:
        root = soup.body if soup.body is not None else soup
        for tag in root.find_all(["script", "style"]):
            tag.decompose()
        counts: Counter = Counter()
        for token in root.get_text(" ").split():
            word = _NON_WORD.sub("", token).lower()
            if not word or self._is_ignored_word(word):
                continue
            counts[word] += 1
        return dict(counts)

    def _is_ignored_word(self, word: str) -> bool:
        return any(p.fullmatch(word) for p in self.ignored_words)
