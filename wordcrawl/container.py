"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from wordcrawl import config as env
from wordcrawl.services.config_file_store import ConfigFileStore
from wordcrawl.services.crawl_coordinator import CrawlCoordinator
from wordcrawl.services.crawler_config_parser import CrawlerConfigParser
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.page_parser import HtmlPageParser
from wordcrawl.services.profiler import Profiler


# Environment variables used by the container (read via `wordcrawl.config` helpers).
#
# USER_AGENT (str, default: "wordcrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for a single page fetch. Bounds how long an in-flight parse can
#   outlive the crawl deadline.
#
# WORDCRAWL_LOCK_STRIPES (int, default: 64)
#   Number of locks guarding the shared visited set and word counts. A URL or
#   word always maps to the same lock.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "wordcrawl/0.1"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "WORDCRAWL_LOCK_STRIPES": env.get_int_env("WORDCRAWL_LOCK_STRIPES", 64),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for wordcrawl."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    config_file_store = providers.Singleton(
        ConfigFileStore
    )

    config_parser = providers.Singleton(
        CrawlerConfigParser
    )

    profiler = providers.Singleton(
        Profiler
    )

    # Per-crawl collaborators, built from a loaded CrawlerConfig.
    page_parser = providers.Factory(
        HtmlPageParser,
        http_service=http_service,
    )

    crawl_coordinator = providers.Factory(
        CrawlCoordinator.from_config,
        lock_stripes=config.WORDCRAWL_LOCK_STRIPES.as_(int),
    )
