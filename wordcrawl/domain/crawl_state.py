import threading
from contextlib import nullcontext
from typing import Dict, Mapping, Set, Tuple


class _LockStripes:
    """Fixed set of locks; a key always maps to the same lock.

    Two operations on the same key are serialized, operations on keys that
    hash to different stripes are not.
    """

    def __init__(self, count: int):
        count = int(count) if count is not None else 1
        if count <= 0:
            count = 1
        self._locks = tuple(threading.Lock() for _ in range(count))

    def for_key(self, key: str):
        return self._locks[hash(key) % len(self._locks)]


class _NoLocks:
    def for_key(self, key: str):
        return nullcontext()


class CrawlState:
    """Visited URLs and word counts shared by every task of one crawl.

    The raw containers are never handed out while a crawl runs. Tasks go
    through `try_claim` and `merge`; the coordinator reads `snapshot` once all
    tasks are done.

    With `concurrent=False` (single-threaded crawls) the same operations run
    without any locking.
    """

    def __init__(self, *, concurrent: bool = True, lock_stripes: int = 64):
        stripes = _LockStripes(lock_stripes) if concurrent else _NoLocks()
        self._url_locks = stripes
        self._word_locks = stripes
        self._visited: Set[str] = set()
        self._word_counts: Dict[str, int] = {}

    def try_claim(self, url: str) -> bool:
        """Mark `url` visited. Returns False if it already was."""
        with self._url_locks.for_key(url):
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def merge(self, word_counts: Mapping[str, int]) -> None:
        """Add a page's word counts to the crawl-wide totals."""
        for word, count in word_counts.items():
            with self._word_locks.for_key(word):
                self._word_counts[word] = self._word_counts.get(word, 0) + count

    def snapshot(self) -> Tuple[Dict[str, int], Set[str]]:
        return dict(self._word_counts), set(self._visited)
