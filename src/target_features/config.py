'''Global configuration system supporting JSON5 files and command-line overrides'''

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

import json5

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = 'target_features'


class Config:
    '''Global configuration singleton'''

    _instance = None
    _initialized = False

    # Default configuration values
    _defaults = {
        'feature_table': None,
        'log_level': 'WARNING',
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._defaults.copy()
            self._cli_overrides = {}
            self._initialized = True

    def load_file(self, filepath: str | Path) -> bool:
        '''Load configuration from JSON5 file'''
        filepath = Path(filepath)
        if not filepath.exists():
            return False

        try:
            with open(filepath, 'r', encoding = 'utf-8') as f:
                data = json5.loads(f.read())

        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config from {filepath}: {e}")
            return False

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {filepath}: top level is not an object")
            return False

        self._config.update(data)
        logger.debug(f"Loaded config from {filepath}")
        return True

    def load_defaults(self):
        '''Load default configuration files'''
        self.load_file(Path(__file__).parent / 'config.json5')

    def parse_args(self, args: list[str] = None):
        '''Parse command-line arguments and override config'''
        parser = argparse.ArgumentParser(
            description = 'target_features configuration',
            add_help = False
        )

        parser.add_argument(
            '--config',
            type = str,
            help = 'Path to config file'
        )

        parser.add_argument(
            '--feature-table',
            type = str,
            help = 'Path to an alternate feature table (YAML)'
        )

        parser.add_argument(
            '--log-level',
            type = str,
            choices = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
            help = 'Log level for the target_features logger'
        )

        # Parse known args, ignore unknown
        parsed, _ = parser.parse_known_args(args)

        if parsed.config:
            self.load_file(parsed.config)

        if parsed.feature_table:
            self._cli_overrides['feature_table'] = parsed.feature_table

        if parsed.log_level:
            self._cli_overrides['log_level'] = parsed.log_level

    def get(self, key: str, default: Any = None) -> Any:
        '''Get configuration value'''
        # CLI overrides have highest priority
        if key in self._cli_overrides:
            return self._cli_overrides[key]

        if key in self._config:
            return self._config[key]

        return default

    def set(self, key: str, value: Any):
        '''Set configuration value at runtime'''
        self._config[key] = value

    def reset(self):
        '''Drop loaded values and overrides, keeping only the defaults'''
        self._config = self._defaults.copy()
        self._cli_overrides = {}

    @property
    def feature_table(self) -> Optional[Path]:
        '''Path of an alternate feature table, if one is configured'''
        value = self.get('feature_table')
        return Path(value) if value else None

    @property
    def log_level(self) -> str:
        '''Level name for the package logger'''
        return str(self.get('log_level', 'WARNING')).upper()


# Global config instance
_config = Config()


def get_config() -> Config:
    '''Get global config instance'''
    return _config


def default_feature_table_path() -> Path:
    '''Path of the feature table to load: configured override or packaged catalog'''
    return _config.feature_table or Path(__file__).parent / 'data' / 'features.yaml'


def apply_log_level():
    '''Apply the configured level to the package logger'''
    level = logging.getLevelName(_config.log_level)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {_config.log_level!r}, using WARNING")
        level = logging.WARNING

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def init_config(args: list[str] = None):
    '''Initialize configuration system'''
    _config.load_defaults()
    if args is not None:
        _config.parse_args(args)

    apply_log_level()


# Auto-load defaults on import
_config.load_defaults()
