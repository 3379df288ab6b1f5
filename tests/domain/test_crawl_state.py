import threading

from wordcrawl.domain.crawl_state import CrawlState


def test_url_can_be_claimed_once():
    state = CrawlState()
    assert state.try_claim("https://example.com")
    assert not state.try_claim("https://example.com")


def test_different_urls_claimed_independently():
    state = CrawlState()
    assert state.try_claim("https://example.com")
    assert state.try_claim("https://other.com")
    _, visited = state.snapshot()
    assert visited == {"https://example.com", "https://other.com"}


def test_merge_adds_to_existing_counts():
    state = CrawlState()
    state.merge({"x": 1, "y": 2})
    state.merge({"x": 4})
    counts, _ = state.snapshot()
    assert counts == {"x": 5, "y": 2}


def test_sequential_state_behaves_the_same():
    state = CrawlState(concurrent=False)
    assert state.try_claim("a")
    assert not state.try_claim("a")
    state.merge({"x": 1})
    state.merge({"x": 1})
    assert state.snapshot() == ({"x": 2}, {"a"})


def test_snapshot_is_a_copy():
    state = CrawlState()
    state.merge({"x": 1})
    counts, visited = state.snapshot()
    counts["x"] = 100
    visited.add("z")
    assert state.snapshot() == ({"x": 1}, set())


def test_concurrent_claims_only_one_winner():
    state = CrawlState(lock_stripes=4)
    barrier = threading.Barrier(16)
    wins = []
    wins_lock = threading.Lock()

    def claim():
        barrier.wait()
        for i in range(200):
            if state.try_claim(f"https://example.com/{i}"):
                with wins_lock:
                    wins.append(i)

    threads = [threading.Thread(target=claim) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(wins) == list(range(200))


def test_concurrent_merges_lose_no_updates():
    state = CrawlState(lock_stripes=2)
    barrier = threading.Barrier(8)

    def merge():
        barrier.wait()
        for _ in range(500):
            state.merge({"shared": 1, "other": 2})

    threads = [threading.Thread(target=merge) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    counts, _ = state.snapshot()
    assert counts == {"shared": 4000, "other": 8000}


def test_non_positive_stripe_count_falls_back_to_one_lock():
    state = CrawlState(lock_stripes=0)
    assert state.try_claim("a")
    assert not state.try_claim("a")
