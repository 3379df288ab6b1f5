import io
import json

import pytest

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.services.crawl_result_writer import CrawlResultWriter


def test_write_to_stream_keeps_word_order():
    result = CrawlResult(word_counts={"fig": 5, "apple": 3}, urls_visited=2)
    out = io.StringIO()

    CrawlResultWriter(result).write_to(out)

    assert out.getvalue() == '{"wordCounts": {"fig": 5, "apple": 3}, "urlsVisited": 2}\n'


def test_write_appends_to_existing_file(tmp_path):
    path = tmp_path / "result.json"
    path.write_text("previous\n", encoding="utf-8")

    CrawlResultWriter(CrawlResult(word_counts={"x": 1}, urls_visited=1)).write(str(path))

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "previous"
    assert json.loads(lines[1]) == {"wordCounts": {"x": 1}, "urlsVisited": 1}


def test_write_creates_missing_file(tmp_path):
    path = tmp_path / "new.json"
    CrawlResultWriter(CrawlResult(word_counts={}, urls_visited=0)).write(str(path))
    assert json.loads(path.read_text(encoding="utf-8")) == {"wordCounts": {}, "urlsVisited": 0}


def test_result_is_required():
    with pytest.raises(ValueError):
        CrawlResultWriter(None)
