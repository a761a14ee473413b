"""Configuration management for device media extraction."""

import copy
import os
import yaml
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    'extraction': {
        'default_target': '~/Dropbox/Pictures/{date}-phone',
        'dry_run': False,
        'delete': False,
        'media_dir_suffix': 'APPLE',
        'render_extensions': ['jpg', 'mov'],
    },
    'safety': {
        'min_free_space_gb': 1,
    },
    'logging': {
        'level': 'INFO',
        'log_dir': None,
    },
}


class Config:
    """Manages extraction defaults loaded from an optional YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file. If None, searches for config files
                and falls back to built-in defaults when none is found.
        """
        self.config_path = config_path or self._find_config_file()
        self.config: Dict[str, Any] = {}
        self._load_config()

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        # Look for config files in order of preference
        possible_paths = [
            Path.cwd() / "config.local.yml",
            Path.cwd() / "config.yml",
            Path(__file__).parent.parent / "config.local.yml",
            Path(__file__).parent.parent / "config.yml",
        ]

        for config_file in possible_paths:
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return str(config_file.resolve())

        logger.debug("No config file found, using built-in defaults")
        return None

    def _load_config(self) -> None:
        """Load configuration from YAML file on top of the defaults."""
        loaded: Dict[str, Any] = {}
        if self.config_path:
            try:
                with open(self.config_path, 'r') as f:
                    loaded = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise ConfigurationError(f"cannot load config {self.config_path}: {e}") from e
            if not isinstance(loaded, dict):
                raise ConfigurationError(f"config {self.config_path} must be a mapping")
            logger.info(f"Loaded configuration from {self.config_path}")
        self.config = _merge(copy.deepcopy(DEFAULTS), loaded)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'extraction.media_dir_suffix'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_default_target(self, today: Optional[datetime] = None) -> str:
        """Expand the default destination template for today's date."""
        today = today or datetime.now()
        template = self.get('extraction.default_target', DEFAULTS['extraction']['default_target'])
        return os.path.expanduser(template.format(date=today.strftime('%Y-%m-%d')))

    def get_media_dir_suffix(self) -> str:
        return self.get('extraction.media_dir_suffix', 'APPLE')

    def get_render_extensions(self) -> List[str]:
        """Render extensions in priority order (photo first)."""
        return [ext.lower().lstrip('.') for ext in self.get('extraction.render_extensions', [])]

    def is_dry_run(self) -> bool:
        return bool(self.get('extraction.dry_run', False))

    def should_delete(self) -> bool:
        return bool(self.get('extraction.delete', False))

    def get_min_free_space_gb(self) -> int:
        return self.get('safety.min_free_space_gb', 1)

    def get_log_level(self) -> str:
        return self.get('logging.level', 'INFO')

    def get_log_dir(self) -> Optional[str]:
        log_dir = self.get('logging.log_dir')
        return os.path.expanduser(log_dir) if log_dir else None

    def validate_config(self) -> List[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of validation error messages
        """
        errors = []

        if not self.get_media_dir_suffix():
            errors.append("Media directory suffix must not be empty")

        extensions = self.get_render_extensions()
        if not extensions:
            errors.append("No render extensions configured")
        elif len(set(extensions)) != len(extensions):
            errors.append(f"Duplicate render extensions: {extensions}")

        try:
            self.get_default_target()
        except (KeyError, IndexError, ValueError) as e:
            errors.append(f"Invalid default_target template: {e}")

        min_free = self.get_min_free_space_gb()
        if not isinstance(min_free, (int, float)) or min_free < 0:
            errors.append(f"Invalid min_free_space_gb value: {min_free}")

        return errors

    def __str__(self) -> str:
        """String representation of configuration."""
        return f"Config(path={self.config_path}, suffix={self.get_media_dir_suffix()})"


@dataclass(frozen=True)
class RunConfig:
    """Settings for a single extraction run, fixed once the run starts."""
    mount: str
    target: str
    delete: bool = False
    dry_run: bool = False

    def validated(self) -> 'RunConfig':
        """Check required paths and return a copy whose target is a directory path."""
        if not self.mount or not self.target:
            raise ConfigurationError("mount and target must be specified")
        target = self.target
        if not target.endswith(os.sep):
            target = target + os.sep
        return replace(self, target=target)

    @property
    def mode(self) -> str:
        return 'mv' if self.delete else 'cp'


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
