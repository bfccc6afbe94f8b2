"""
Data Quality Module
"""
from .manifest import ColumnKind, ColumnManifest, ColumnSpec, ManifestViolation

__all__ = [
    "ColumnKind",
    "ColumnManifest",
    "ColumnSpec",
    "ManifestViolation",
]
