"""
Dimensions Module
"""
from .catalog import (
    AGGREGATE_LEVEL,
    Dimension,
    Domain,
    Level,
    UnknownLevel,
    dimension_title,
    level_label,
    levels_for,
    resolve,
)
from .selection import DimensionChoice, SelectionState

__all__ = [
    "AGGREGATE_LEVEL",
    "Dimension",
    "Domain",
    "Level",
    "UnknownLevel",
    "dimension_title",
    "level_label",
    "levels_for",
    "resolve",
    "DimensionChoice",
    "SelectionState",
]
