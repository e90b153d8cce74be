import json
import os
from dataclasses import asdict
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from chatsearch.models.config import (
    HighlightConfig,
    LoggingConfig,
    ScoringConfig,
    SearchConfig,
)
from conduit_logging import get_logger

DEFAULT_CONFIG_PATHS = ("config/search.yaml", "config/search.yml", "config/search.json")


def _load_env():
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)


class ConfigManager:
    """Loads SearchConfig from YAML/JSON with environment overrides.

    Lookup order for the file: ``CHATSEARCH_CONFIG_PATH``, then the first
    existing entry of DEFAULT_CONFIG_PATHS. ``CHATSEARCH_MAX_RESULTS`` and
    ``CHATSEARCH_LOG_LEVEL`` override the file.
    """

    def __init__(self, config_path: Path | str | None = None):
        _load_env()
        self.logger = get_logger('chatsearch.config')
        self.config_path = self._resolve_path(config_path)
        self.config = self.load_config()

    @staticmethod
    def _resolve_path(config_path: Path | str | None) -> Path:
        if config_path:
            return Path(config_path)
        env_path = os.getenv("CHATSEARCH_CONFIG_PATH")
        if env_path:
            return Path(env_path)
        for candidate in DEFAULT_CONFIG_PATHS:
            if Path(candidate).exists():
                return Path(candidate)
        return Path(DEFAULT_CONFIG_PATHS[0])

    def _read_file(self) -> dict:
        if not self.config_path.exists():
            return {}
        with open(self.config_path, "r") as f:
            if self.config_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        if not isinstance(data, dict):
            self.logger.warning("Ignoring config that is not a mapping", path=str(self.config_path))
            return {}
        return data

    def _apply_env_overrides(self, data: dict):
        max_results = os.getenv("CHATSEARCH_MAX_RESULTS")
        if max_results:
            try:
                data["max_results"] = int(max_results)
            except ValueError:
                self.logger.warning("Ignoring invalid CHATSEARCH_MAX_RESULTS", value=max_results)

        log_level = os.getenv("CHATSEARCH_LOG_LEVEL")
        if log_level:
            logging_section = data.get("logging")
            if not isinstance(logging_section, dict):
                logging_section = {}
            logging_section["level"] = log_level
            data["logging"] = logging_section

    def load_config(self) -> SearchConfig:
        try:
            data = self._read_file()
        except (OSError, ValueError, yaml.YAMLError) as e:
            self.logger.warning("Failed to read config, using defaults", path=str(self.config_path), error=str(e))
            data = {}

        self._apply_env_overrides(data)

        sections = {
            "scoring": ScoringConfig,
            "highlight": HighlightConfig,
            "logging": LoggingConfig,
        }
        try:
            for key, section_cls in sections.items():
                if isinstance(data.get(key), dict):
                    data[key] = section_cls(**data[key])
                else:
                    data.pop(key, None)
            return SearchConfig(**data)
        except (TypeError, ValueError) as e:
            self.logger.warning("Invalid config values, using defaults", path=str(self.config_path), error=str(e))
            return SearchConfig()

    def save_config(self, config: SearchConfig):
        data = asdict(config)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            if self.config_path.suffix in (".yaml", ".yml"):
                yaml.safe_dump(data, f, default_flow_style=False)
            else:
                json.dump(data, f, indent=2)
