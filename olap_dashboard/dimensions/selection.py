"""
Selection State

The user's current level choice per dimension plus the column filter map.
"""

from dataclasses import dataclass, field
from typing import Dict

import structlog

from olap_dashboard.dimensions.catalog import (
    AGGREGATE_LEVEL,
    Dimension,
    Domain,
    level_label,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DimensionChoice:
    """Chosen level key and its display label"""
    level: str
    label: str


def _aggregate_choices(domain: Domain) -> Dict[Dimension, DimensionChoice]:
    return {
        dimension: DimensionChoice(AGGREGATE_LEVEL, level_label(dimension, domain, AGGREGATE_LEVEL))
        for dimension in Dimension
    }


@dataclass
class SelectionState:
    """
    Mutable dashboard selection.

    Starts at the aggregate-total level for every dimension with no column
    filters. Customer/store levels are domain specific, so switching the
    domain resets that dimension and drops the filters tied to the old result.

    Example:
        selection = SelectionState()
        selection.set_level(Dimension.TIME, '["Year"]')
        selection.set_filter("Year", "2021")
    """
    domain: Domain = Domain.SALES
    choices: Dict[Dimension, DimensionChoice] = field(default_factory=dict)
    filters: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.domain = Domain(self.domain)
        defaults = _aggregate_choices(self.domain)
        defaults.update(self.choices)
        self.choices = defaults

    def choice(self, dimension: Dimension) -> DimensionChoice:
        """Current choice for a dimension"""
        return self.choices[Dimension(dimension)]

    def set_level(self, dimension: Dimension, level_key: str) -> None:
        """Select a level; raises UnknownLevel for keys invalid in the current domain"""
        label = level_label(dimension, self.domain, level_key)
        dimension = Dimension(dimension)
        self.choices[dimension] = DimensionChoice(level_key, label)
        logger.debug("Dimension level set", dimension=dimension.value, level=level_key)

    def set_domain(self, domain: Domain) -> None:
        """Switch domain, resetting the customer dimension and clearing filters"""
        domain = Domain(domain)
        if domain is self.domain:
            return

        self.domain = domain
        self.choices[Dimension.CUSTOMER] = DimensionChoice(
            AGGREGATE_LEVEL,
            level_label(Dimension.CUSTOMER, domain, AGGREGATE_LEVEL),
        )
        self.filters.clear()
        logger.info("Domain changed", domain=domain.value)

    def set_filter(self, column: str, value: str) -> None:
        """Constrain a column to a literal value; an empty value removes the constraint"""
        if value == "":
            self.clear_filter(column)
            return
        self.filters[column] = value

    def clear_filter(self, column: str) -> None:
        self.filters.pop(column, None)
