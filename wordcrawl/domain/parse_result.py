from typing import Dict, List, NamedTuple


class ParseResult(NamedTuple):
    """Links and word counts found on a single page."""
    links: List[str]
    word_counts: Dict[str, int]
