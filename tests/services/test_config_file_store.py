import pytest

from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.config_file_store import ConfigFileStore


def test_load_yaml_dict_missing_file_returns_none(tmp_path):
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("missing.yml") is None


def test_load_yaml_dict_non_dict_returns_none(tmp_path):
    (tmp_path / "list.yml").write_text("- a\n- b\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("list.yml") is None


def test_load_yaml_dict_invalid_yaml_returns_none(tmp_path):
    # Invalid YAML should be treated as missing/invalid config, not crash.
    (tmp_path / "bad.yml").write_text(": this is not valid yaml", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("bad.yml") is None


def test_load_yaml_dict_dict_is_returned(tmp_path):
    (tmp_path / "ok.yml").write_text("start_pages:\n  - http://example.com\nmax_depth: 2\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load_yaml_dict("ok.yml") == {"start_pages": ["http://example.com"], "max_depth": 2}


def test_json_documents_are_accepted(tmp_path):
    (tmp_path / "crawl.json").write_text('{"start_pages": ["http://example.com"], "parallelism": 2}', encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    assert store.load("crawl.json") == {"start_pages": ["http://example.com"], "parallelism": 2}


def test_resolve_path_allows_absolute(tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    cfg = other / "abs.yml"
    cfg.write_text("max_depth: 1\n", encoding="utf-8")

    store = ConfigFileStore(configs_dir=str(tmp_path / "elsewhere"))
    assert store.load_yaml_dict(str(cfg)) == {"max_depth": 1}


def test_load_raises_config_error_when_missing(tmp_path):
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(CrawlConfigError):
        store.load("missing.yml")
