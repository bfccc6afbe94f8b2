"""
Data Transformation Module
"""
from .filters import column_options, filter_vocabulary, result_columns, visible_rows

__all__ = [
    "column_options",
    "filter_vocabulary",
    "result_columns",
    "visible_rows",
]
