import re
from unittest.mock import MagicMock, Mock

import pytest

from wordcrawl.exceptions import HttpFetchError, PageParseError
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.page_parser import HtmlPageParser

PAGE = """
<html>
  <head><title>Ignored title</title><style>p { color: red; }</style></head>
  <body>
    <p>The quick brown fox. The lazy dog!</p>
    <script>var hidden = "secret";</script>
    <a href="/about#team">About</a>
    <a href="https://other.example.org/x">Other</a>
    <a href="mailto:someone@example.com">Mail</a>
    <a href="">Empty</a>
  </body>
</html>
"""


def _http(status_code, text, content_type):
    http_client = Mock()
    http_client.return_value.status_code = status_code
    http_client.return_value.text = text
    http_client.return_value.headers = {"Content-Type": content_type} if content_type else {}
    return HttpService(user_agent="TestAgent", http_client=http_client)


def test_parse_counts_words_and_resolves_links():
    parser = HtmlPageParser(_http(200, PAGE, "text/html; charset=utf-8"))

    result = parser.parse("http://example.com/index.html")

    assert result.links == ["http://example.com/about", "https://other.example.org/x"]
    assert result.word_counts["the"] == 2
    assert result.word_counts["fox"] == 1
    assert result.word_counts["dog"] == 1
    assert "secret" not in result.word_counts
    assert "color" not in result.word_counts
    assert "title" not in result.word_counts


def test_ignored_words_use_full_match():
    parser = HtmlPageParser(
        _http(200, PAGE, "text/html"),
        ignored_words=[re.compile(r"^.{1,3}$")],
    )

    result = parser.parse("http://example.com/")

    assert "the" not in result.word_counts
    assert "fox" not in result.word_counts
    assert result.word_counts["quick"] == 1
    assert result.word_counts["about"] == 1


def test_non_success_status_is_parse_error():
    parser = HtmlPageParser(_http(404, "not found", "text/html"))
    with pytest.raises(PageParseError) as exc:
        parser.parse("http://example.com/missing")
    assert exc.value.url == "http://example.com/missing"
    assert exc.value.status_code == 404


def test_non_html_content_is_parse_error():
    parser = HtmlPageParser(_http(200, "%PDF-1.4", "application/pdf"))
    with pytest.raises(PageParseError) as exc:
        parser.parse("http://example.com/doc.pdf")
    assert exc.value.content_type == "application/pdf"


def test_missing_content_type_is_parsed():
    parser = HtmlPageParser(_http(200, "<p>hello</p>", None))
    assert parser.parse("http://example.com/").word_counts == {"hello": 1}


def test_fetch_errors_are_parse_errors():
    http_service = MagicMock()
    http_service.fetch_html.side_effect = HttpFetchError("http://example.com/", "connection reset")
    parser = HtmlPageParser(http_service)
    with pytest.raises(PageParseError):
        parser.parse("http://example.com/")


def test_unsupported_scheme_is_parse_error():
    parser = HtmlPageParser(MagicMock())
    with pytest.raises(PageParseError):
        parser.parse("ftp://example.com/file")


def test_local_files_are_read_from_disk(tmp_path):
    (tmp_path / "index.html").write_text('<body>Hello hello <a href="next.html">next</a></body>', encoding="utf-8")
    http_service = MagicMock()
    parser = HtmlPageParser(http_service)

    url = (tmp_path / "index.html").as_uri()
    result = parser.parse(url)

    assert result.word_counts == {"hello": 2, "next": 1}
    assert result.links == [(tmp_path / "next.html").as_uri()]
    assert not http_service.fetch_html.called


def test_missing_local_file_is_parse_error(tmp_path):
    parser = HtmlPageParser(MagicMock())
    with pytest.raises(PageParseError):
        parser.parse((tmp_path / "missing.html").as_uri())
