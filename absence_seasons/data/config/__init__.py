"""Data configuration."""

from .paths import DataConfig, DEFAULT_CONFIG_PATH

__all__ = ['DataConfig', 'DEFAULT_CONFIG_PATH']
