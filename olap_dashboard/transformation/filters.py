"""
Result Filter Engine

Display-time column filters over an already fetched result.

Cells are compared as strings, so a filter value picked from a column's
vocabulary matches numeric and text columns alike. These filters are
independent of the request filters the provider applies while generating.
"""

from typing import Dict, List, Mapping, Sequence

import polars as pl
import structlog

from olap_dashboard.query.models import ResultRow

logger = structlog.get_logger(__name__)


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def result_columns(rows: Sequence[ResultRow]) -> List[str]:
    """Ordered union of the columns present in ``rows``"""
    columns: Dict[str, None] = {}
    for row in rows:
        for column in row:
            columns.setdefault(column, None)
    return list(columns)


def _string_frame(rows: Sequence[ResultRow]) -> pl.DataFrame:
    """One Utf8 column per result column; absent cells become empty strings"""
    columns = result_columns(rows)
    return pl.DataFrame(
        {column: [_stringify(row.get(column)) for row in rows] for column in columns},
        schema={column: pl.Utf8 for column in columns},
    )


def visible_rows(rows: Sequence[ResultRow], filters: Mapping[str, str]) -> List[ResultRow]:
    """
    Rows matching every non-empty column filter.

    Filters on columns the result does not have match nothing. Never raises;
    an empty list is a valid display state.
    """
    active = {column: value for column, value in filters.items() if value}
    if not active:
        return list(rows)
    if not rows:
        return []

    frame = _string_frame(rows)
    if any(column not in frame.columns for column in active):
        return []

    predicate = pl.all_horizontal([pl.col(column) == value for column, value in active.items()])
    mask = frame.select(predicate.alias("visible")).to_series().to_list()

    visible = [row for row, keep in zip(rows, mask) if keep]
    logger.debug("Column filters applied", filters=active, total=len(rows), visible=len(visible))
    return visible


def filter_vocabulary(rows: Sequence[ResultRow], column: str) -> List[str]:
    """Sorted distinct stringified values of ``column``"""
    if not rows:
        return []

    frame = _string_frame(rows)
    if column not in frame.columns:
        return []
    return frame[column].unique().sort().to_list()


def column_options(rows: Sequence[ResultRow]) -> Dict[str, List[str]]:
    """Filter vocabulary for every column of the result, in column order"""
    if not rows:
        return {}

    frame = _string_frame(rows)
    return {column: frame[column].unique().sort().to_list() for column in frame.columns}
