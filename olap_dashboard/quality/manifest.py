"""
Column Manifest

Declares the columns a result must carry and validates rows against it.
Every row of a result must contain exactly the manifest's columns, with
int or float cells for numeric columns and string cells for text columns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

import structlog

from olap_dashboard.query.models import ResultRow

logger = structlog.get_logger(__name__)


class ColumnKind(str, Enum):
    """Value kind of a result column"""
    NUMERIC = "numeric"
    TEXT = "text"


class ManifestViolation(ValueError):
    """A row does not match the column manifest"""

    def __init__(self, row_index: int, message: str):
        self.row_index = row_index
        super().__init__(f"Row {row_index}: {message}")


@dataclass(frozen=True)
class ColumnSpec:
    name: str
    kind: ColumnKind


@dataclass
class ColumnManifest:
    """
    Ordered column declaration for one result.

    Example:
        manifest = ColumnManifest()
        manifest.add("Year", ColumnKind.NUMERIC)
        manifest.add("revenue", ColumnKind.NUMERIC)
        manifest.validate_rows(rows)
    """
    columns: List[ColumnSpec] = field(default_factory=list)

    def add(self, name: str, kind: ColumnKind) -> "ColumnManifest":
        """Append a column; a name already present keeps its first position"""
        if name not in self.names:
            self.columns.append(ColumnSpec(name, ColumnKind(kind)))
        return self

    @property
    def names(self) -> List[str]:
        return [column.name for column in self.columns]

    def items(self) -> List[Tuple[str, ColumnKind]]:
        return [(column.name, column.kind) for column in self.columns]

    def validate_row(self, index: int, row: ResultRow) -> None:
        """Raise ManifestViolation if ``row`` does not conform"""
        expected = self.names
        missing = [name for name in expected if name not in row]
        unexpected = [name for name in row if name not in expected]
        if missing or unexpected:
            raise ManifestViolation(
                index,
                f"columns mismatch (missing={missing}, unexpected={unexpected})",
            )

        for column in self.columns:
            value = row[column.name]
            if column.kind is ColumnKind.NUMERIC:
                # bool is an int subclass
                valid = isinstance(value, (int, float)) and not isinstance(value, bool)
            else:
                valid = isinstance(value, str)
            if not valid:
                raise ManifestViolation(
                    index,
                    f"column '{column.name}' expects {column.kind.value}, got {type(value).__name__}",
                )

    def validate_rows(self, rows: Iterable[ResultRow]) -> int:
        """Validate every row; returns the number of rows checked"""
        count = 0
        for index, row in enumerate(rows):
            self.validate_row(index, row)
            count += 1

        logger.debug("Rows validated against manifest", rows=count, columns=self.names)
        return count
