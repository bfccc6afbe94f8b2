"""
OLAP Dashboard
Configuration Module
"""
from .settings import EmptyFilterPolicy, Settings, get_settings

__all__ = ["EmptyFilterPolicy", "Settings", "get_settings"]
