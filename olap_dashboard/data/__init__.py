"""
Data Generation Module
"""
from .generators import ResultGenerator, build_manifest
from .provider import DataProvider, MockDataProvider, apply_request_filters

__all__ = [
    "ResultGenerator",
    "build_manifest",
    "DataProvider",
    "MockDataProvider",
    "apply_request_filters",
]
