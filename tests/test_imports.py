import importlib

MODULES = [
    'wordcrawl.config',
    'wordcrawl.container',
    'wordcrawl.domain',
    'wordcrawl.services.crawl_coordinator',
    'wordcrawl.services.page_parser',
    'wordcrawl.services.profiler',
    'wordcrawl.services.task_scheduler',
]

def test_imports():
    for m in MODULES:
        importlib.import_module(m)
