"""Configuration and logging setup for snadmin."""

from snadmin.config.settings import AdminSettings, load_settings

__all__ = ["AdminSettings", "load_settings"]
