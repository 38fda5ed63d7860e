"""Retention configuration loading."""

from .loader import RetentionConfig, load_retention_config, parse_duration, resolve_retention

__all__ = ["RetentionConfig", "load_retention_config", "parse_duration", "resolve_retention"]
