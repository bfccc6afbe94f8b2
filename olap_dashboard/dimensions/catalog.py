"""
Dimension Catalog

Static registry of the selectable levels for every dimension and domain.

Level keys are JSON-encoded lists of grouping columns, as the dashboard
widgets emit them. The empty grouping ``"[]"`` is the aggregate total and
always resolves to id 0.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

AGGREGATE_LEVEL = "[]"


class Dimension(str, Enum):
    """Axes of data breakdown"""
    TIME = "time"
    CUSTOMER = "customer"
    ITEM = "item"
    GEO = "geo"


class Domain(str, Enum):
    """Business dataset context"""
    SALES = "sales"
    INVENTORY = "inventory"

    @property
    def value_field(self) -> str:
        """Result column carrying the measure"""
        return "revenue" if self is Domain.SALES else "stock"

    @property
    def value_title(self) -> str:
        """Display title of the measure column"""
        return "Revenue" if self is Domain.SALES else "Stock Level"


@dataclass(frozen=True)
class Level:
    """A selectable granularity within a dimension"""
    id: int
    label: str


class UnknownLevel(ValueError):
    """Dimension, domain or level key not defined in the catalog

    The offending values are kept as passed, so names that are not valid
    enum members can still be reported.
    """

    def __init__(self, dimension: object, domain: object, level_key: Optional[str] = None):
        self.dimension = dimension
        self.domain = domain
        self.level_key = level_key
        dimension_name = getattr(dimension, "value", dimension)
        domain_name = getattr(domain, "value", domain)
        if level_key is None:
            message = f"Unknown dimension {dimension_name!r} or domain {domain_name!r}"
        else:
            message = (
                f"Unknown level {level_key!r} for dimension {dimension_name!r} "
                f"in domain {domain_name!r}"
            )
        super().__init__(message)


def _levels(*entries) -> Mapping[str, Level]:
    return MappingProxyType({key: Level(id=id_, label=label) for key, id_, label in entries})


TIME_LEVELS = _levels(
    (AGGREGATE_LEVEL, 0, "All Time"),
    ('["Year"]', 1, "Year"),
    ('["Quarter"]', 2, "Quarter"),
    ('["Month"]', 3, "Month"),
)

CUSTOMER_LEVELS = MappingProxyType({
    Domain.SALES: _levels(
        (AGGREGATE_LEVEL, 0, "All Customers"),
        ('["Customer Type"]', 1, "Customer Type"),
        ('["City Key"]', 2, "City Key"),
        ('["Customer Name"]', 3, "Customer Name"),
    ),
    Domain.INVENTORY: _levels(
        (AGGREGATE_LEVEL, 0, "All Stores"),
        ('["Customer Name"]', 1, "Store Code"),
    ),
})

ITEM_LEVELS = _levels(
    (AGGREGATE_LEVEL, 0, "All Items"),
    ('["Size"]', 1, "Size"),
    ('["Weight Range"]', 2, "Weight Range"),
    ('["Ma Mat Hang"]', 3, "Product Code"),
    ('["Size", "Weight Range"]', 4, "Size & Weight Range"),
)

GEO_LEVELS = _levels(
    (AGGREGATE_LEVEL, 0, "All Store"),
    ('["Store Key"]', 1, "Store Key"),
    ('["City Key"]', 2, "City Key"),
)

_DIMENSION_TITLES = {
    Dimension.TIME: "Time Dimension",
    Dimension.ITEM: "Product Dimension",
    Dimension.GEO: "Store Dimension",
}


def _coerce(dimension: object, domain: object, level_key: Optional[str] = None) -> Tuple[Dimension, Domain]:
    try:
        return Dimension(dimension), Domain(domain)
    except ValueError:
        raise UnknownLevel(dimension, domain, level_key) from None


def levels_for(dimension: Dimension, domain: Domain) -> Mapping[str, Level]:
    """Ordered, read-only mapping of level key -> Level for a dimension/domain pair"""
    dimension, domain = _coerce(dimension, domain)
    if dimension is Dimension.TIME:
        return TIME_LEVELS
    if dimension is Dimension.CUSTOMER:
        return CUSTOMER_LEVELS[domain]
    if dimension is Dimension.ITEM:
        return ITEM_LEVELS
    return GEO_LEVELS


def get_level(dimension: Dimension, domain: Domain, level_key: str) -> Level:
    """Look up a level, raising UnknownLevel if the key is not defined"""
    dimension, domain = _coerce(dimension, domain, level_key)
    try:
        return levels_for(dimension, domain)[level_key]
    except KeyError:
        raise UnknownLevel(dimension, domain, level_key) from None


def resolve(dimension: Dimension, domain: Domain, level_key: str) -> int:
    """Numeric backend id of a level"""
    return get_level(dimension, domain, level_key).id


def level_label(dimension: Dimension, domain: Domain, level_key: str) -> str:
    """Human-readable label of a level"""
    return get_level(dimension, domain, level_key).label


def dimension_title(dimension: Dimension, domain: Domain) -> str:
    """Widget title for a dimension; the customer axis is renamed for inventory"""
    dimension, domain = _coerce(dimension, domain)
    if dimension is Dimension.CUSTOMER:
        return "Customer Dimension" if domain is Domain.SALES else "Store Dimension"
    return _DIMENSION_TITLES[dimension]
