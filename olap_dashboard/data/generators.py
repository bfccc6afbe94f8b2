"""
Synthetic Result Generator

Generates tabular results shaped like the future aggregation backend.
Includes:
- Rule table mapping dimension level ids to result columns
- Per-column cell rules keyed off the row index
- Random measure values (revenue/stock)
"""

from typing import Callable, Dict, List, Tuple

import numpy as np
import structlog

from olap_dashboard.config.settings import ProviderSettings
from olap_dashboard.dimensions.catalog import Dimension, Domain
from olap_dashboard.quality.manifest import ColumnKind, ColumnManifest
from olap_dashboard.query.models import CellValue, DataRequest, ResultRow

logger = structlog.get_logger(__name__)


# =============================================================================
# RULE TABLES
# =============================================================================

DIMENSION_COLUMNS: Dict[Dimension, Dict[int, Tuple[str, ...]]] = {
    Dimension.TIME: {
        1: ("Year",),
        2: ("Quarter",),
        3: ("Month",),
    },
    Dimension.ITEM: {
        1: ("Size",),
        2: ("WeightRange",),
        3: ("ProductCode",),
        4: ("Size", "WeightRange"),
    },
    Dimension.GEO: {
        1: ("State",),
        2: ("State", "City"),
    },
}

# Customer levels are store levels in the inventory domain
CUSTOMER_COLUMNS: Dict[Domain, Dict[int, Tuple[str, ...]]] = {
    Domain.SALES: {
        1: ("CustomerType",),
        2: ("CityKey",),
        3: ("CustomerName",),
    },
    Domain.INVENTORY: {
        1: ("StoreCode",),
    },
}

SIZES = ["S", "M", "L", "XL"]


def _weight_range(i: int) -> str:
    low = (i % 3 + 1) * 5
    return f"{low}-{low + 5}kg"


COLUMN_RULES: Dict[str, Tuple[ColumnKind, Callable[[int], CellValue]]] = {
    "Year": (ColumnKind.NUMERIC, lambda i: 2020 + i % 5),
    "Quarter": (ColumnKind.TEXT, lambda i: f"Q{1 + i % 4}"),
    "Month": (ColumnKind.TEXT, lambda i: f"Month {1 + i % 12}"),
    "CustomerType": (ColumnKind.TEXT, lambda i: f"Type {1 + i % 3}"),
    "CityKey": (ColumnKind.TEXT, lambda i: f"CK-{100 + i % 7}"),
    "CustomerName": (ColumnKind.TEXT, lambda i: f"Customer {1 + i % 8}"),
    "StoreCode": (ColumnKind.TEXT, lambda i: f"Store {10 + i}"),
    "Size": (ColumnKind.TEXT, lambda i: SIZES[i % 4]),
    "WeightRange": (ColumnKind.TEXT, _weight_range),
    "ProductCode": (ColumnKind.TEXT, lambda i: f"PROD-{1000 + i}"),
    "State": (ColumnKind.TEXT, lambda i: f"State {chr(65 + i % 10)}"),
    "City": (ColumnKind.TEXT, lambda i: f"City {i + 1}"),
}


def columns_for_level(dimension: Dimension, domain: Domain, level_id: int) -> Tuple[str, ...]:
    """Result columns produced by a dimension level; id 0 produces none"""
    if level_id == 0:
        return ()

    table = CUSTOMER_COLUMNS[domain] if dimension is Dimension.CUSTOMER else DIMENSION_COLUMNS[dimension]
    try:
        return table[level_id]
    except KeyError:
        raise ValueError(
            f"No generation rule for {dimension.value} level id {level_id} in domain '{domain.value}'"
        ) from None


def build_manifest(request: DataRequest) -> ColumnManifest:
    """Active dimension columns in dimension order, then the domain's value field"""
    manifest = ColumnManifest()
    for dimension in Dimension:
        for column in columns_for_level(dimension, request.data_type, getattr(request, dimension.value)):
            manifest.add(column, COLUMN_RULES[column][0])

    manifest.add(request.data_type.value_field, ColumnKind.NUMERIC)
    return manifest


# =============================================================================
# GENERATOR
# =============================================================================

class ResultGenerator:
    """
    Generate a synthetic result for a request.

    Cells of dimension columns are deterministic in the row index; the
    measure column is random. A fresh random generator is created per call,
    so instances hold no mutable state and are safe to share.

    Example:
        generator = ResultGenerator(ProviderSettings(random_seed=42))
        manifest, rows = generator.generate(request)
    """

    def __init__(self, settings: ProviderSettings):
        self.settings = settings

    def row_count(self, n_columns: int) -> int:
        """Rows to generate for ``n_columns`` active dimension columns"""
        return min(self.settings.max_rows, max(self.settings.min_rows, n_columns * self.settings.rows_per_column))

    def generate(self, request: DataRequest) -> Tuple[ColumnManifest, List[ResultRow]]:
        """Generate the unfiltered rows for ``request`` and validate them"""
        manifest = build_manifest(request)
        value_field = request.data_type.value_field
        dimension_columns = [name for name in manifest.names if name != value_field]

        count = self.row_count(len(dimension_columns))
        rng = np.random.default_rng(self.settings.random_seed)

        rows: List[ResultRow] = []
        for i in range(count):
            row: ResultRow = {}
            for column in dimension_columns:
                row[column] = COLUMN_RULES[column][1](i)
            row[value_field] = int(round(rng.random() * 10000)) * (1 + i % 10)
            rows.append(row)

        manifest.validate_rows(rows)
        logger.debug(
            "Result generated",
            domain=request.data_type.value,
            columns=manifest.names,
            rows=count,
        )
        return manifest, rows
