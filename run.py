#!/usr/bin/env python3
"""Crawl from the start pages of a config file and report word counts."""
import argparse
import logging
import sys

from wordcrawl import config as env
from wordcrawl.container import Container
from wordcrawl.exceptions import CrawlConfigError, CrawlTaskError
from wordcrawl.services.crawl_result_writer import CrawlResultWriter

logger = logging.getLogger("wordcrawl")


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, env.log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def run(config_path: str, container: Container = None, stdout=None) -> int:
    container = container or Container()
    stdout = stdout or sys.stdout
    try:
        data = container.config_file_store().load(config_path)
        cfg = container.config_parser().parse(data)
    except CrawlConfigError as e:
        logger.error("Config error: %s", e)
        return 1
    logger.info("Loaded %r from %s", cfg, config_path)

    profiler = container.profiler()
    page_parser = container.page_parser(ignored_words=cfg.ignored_words)
    coordinator = container.crawl_coordinator(cfg, page_parser=page_parser)
    crawler = profiler.wrap(coordinator)

    try:
        result = crawler.crawl(cfg.start_pages)
    except CrawlTaskError as e:
        logger.error("Crawl aborted: %s", e, exc_info=True)
        return 1

    writer = CrawlResultWriter(result)
    if cfg.result_path:
        writer.write(cfg.result_path)
        logger.info("Wrote crawl result to %s", cfg.result_path)
    else:
        writer.write_to(stdout)

    if cfg.profile_output_path:
        profiler.write_data(cfg.profile_output_path)
        logger.info("Wrote profile data to %s", cfg.profile_output_path)
    else:
        profiler.write_data_to(stdout)
    stdout.flush()
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Concurrent, depth- and time-bounded word-count crawler",
    )
    parser.add_argument("config", help="Path to a YAML (or JSON) crawl config")
    args = parser.parse_args(argv)

    setup_logging()
    return run(args.config)


if __name__ == '__main__':
    sys.exit(main())
