import os
from typing import Optional

import yaml

from wordcrawl.exceptions import CrawlConfigError


class ConfigFileStore:
    """Filesystem/YAML IO for crawl config files.

    Responsibility: locate, read, and parse YAML (or JSON) documents on disk.
    Relative paths are resolved against `configs_dir`.
    """

    def __init__(self, *, configs_dir: str = "."):
        self.configs_dir = configs_dir

    def _resolve_path(self, config_path: str) -> str:
        return config_path if os.path.isabs(config_path) else os.path.join(self.configs_dir, config_path)

    def load_yaml_dict(self, config_path: str) -> Optional[dict]:
        """Return parsed YAML dict for `config_path`, or None if missing/invalid."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            return None
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            return None
        return data if isinstance(data, dict) else None

    def load(self, config_path: str) -> dict:
        """Like `load_yaml_dict`, but a missing or invalid document is a config error."""
        data = self.load_yaml_dict(config_path)
        if data is None:
            raise CrawlConfigError(config_path, "missing, unreadable or not a YAML mapping")
        return data
