from typing import Dict, Mapping


def sort_by_popularity(word_counts: Mapping[str, int], limit: int = 0) -> Dict[str, int]:
    """Return the `limit` most popular words, most popular first.

    Ties on count are broken by longer word first, then alphabetically.
    `limit <= 0` keeps every word.
    """
    ranked = sorted(word_counts.items(), key=lambda kv: (-kv[1], -len(kv[0]), kv[0]))
    if limit > 0:
        ranked = ranked[:limit]
    return dict(ranked)
