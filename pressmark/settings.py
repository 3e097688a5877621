#!/usr/bin/env python3
"""
Settings loader for the pressmark publisher.
Supports configuration from config.json, config.yml or config.yaml files.
"""

import copy
import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigParseError
from .models import DirSpec, NavEntry, SiteConfig


class SiteSettings:
    """Load and manage the site configuration."""

    # Default configuration, also written by ``create_default_config``
    DEFAULT_SETTINGS = {
        'title': 'a neat site',
        'description': 'a rather neat site',
        'base_url': 'https://example.github.io',
        'nav': [
            {'url': 'index.html', 'text': 'Home'},
            {'url': 'info.html', 'text': 'Info'},
            {'url': 'archive.html', 'text': 'Archive'}
        ],
        'test_dir': './preview',
        'output_dir': {
            'dir': './pages',
            'dirs': {
                'content': './',
                'js': 'js',
                'css': 'css',
                'posts': 'posts'
            }
        },
        'input_dir': {
            'dir': './input',
            'dirs': {
                'posts': 'posts',
                'templates': 'templates',
                'css': 'css',
                'js': 'js',
                'content': 'content'
            }
        },
        'stylesheets': [['main.less', 'main.css']]
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['config.json', 'config.yml', 'config.yaml']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.config_file_path = None

    def load_settings(self) -> SiteConfig:
        """
        Load settings from the configuration file.

        Returns:
            The parsed site configuration

        Raises:
            FileNotFoundError: If no configuration file exists
            ConfigParseError: If the file is malformed
        """
        config_file = self.find_config_file()
        if not config_file:
            raise FileNotFoundError(
                f"No configuration file ({', '.join(self.CONFIG_FILES)}) in {self.config_dir}; "
                f"run 'pressmark init' to create one"
            )
        self.config_file_path = config_file
        loaded_settings = self._load_config_file(config_file)
        if not isinstance(loaded_settings, dict):
            raise ConfigParseError(f"Configuration file {config_file} must contain an object")
        self.settings.update(loaded_settings)
        return self.to_site_config(self.settings)

    def find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f)
                else:
                    raise ConfigParseError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON in configuration file {config_path}: {e}") from e

    @staticmethod
    def to_site_config(settings: Dict[str, Any]) -> SiteConfig:
        """Build a SiteConfig from a settings dictionary."""
        try:
            return SiteConfig(
                title=settings['title'],
                description=settings['description'],
                base_url=settings['base_url'],
                nav=[NavEntry(item['url'], item['text']) for item in settings['nav']],
                test_dir=settings['test_dir'],
                input_dir=DirSpec(settings['input_dir']['dir'], dict(settings['input_dir']['dirs'])),
                output_dir=DirSpec(settings['output_dir']['dir'], dict(settings['output_dir']['dirs'])),
                stylesheets=[(source, output) for source, output in settings['stylesheets']],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigParseError(f"Invalid configuration: {e!r}") from e

    def create_default_config(self) -> str:
        """
        Write the default configuration to config.json.

        Returns:
            Path to the created config file
        """
        config_path = os.path.join(self.config_dir, self.CONFIG_FILES[0])
        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                json.dump(self.DEFAULT_SETTINGS, f, indent=4)
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")
        return config_path


def apply_modes(config: SiteConfig, test: bool) -> SiteConfig:
    """
    Apply the ``test`` mode override.

    Test mode writes to ``test_dir`` and points ``base_url`` at it with a
    file URI, so links work without a server.
    """
    if not test:
        return config
    return dataclasses.replace(
        config,
        base_url=Path(config.test_dir).resolve().as_uri(),
        output_dir=dataclasses.replace(config.output_dir, dir=config.test_dir),
    )
