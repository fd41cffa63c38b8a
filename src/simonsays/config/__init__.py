"""Settings loading."""

from .settings import DEFAULT_CONFIG_PATH, load_settings

__all__ = ["DEFAULT_CONFIG_PATH", "load_settings"]
