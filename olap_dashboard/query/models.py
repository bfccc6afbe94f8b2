"""
Request/Response Models

Wire shapes exchanged with the data provider. Field aliases match the
JSON contract so a network transport can replace the in-process provider.
"""

from types import MappingProxyType
from typing import Annotated, Dict, List, Mapping, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer

from olap_dashboard.dimensions.catalog import Domain

# int first so whole numbers stay ints
CellValue = Union[int, float, str]
ResultRow = Dict[str, CellValue]

# Validated into a fresh dict, then wrapped read-only
ReadOnlyFilters = Annotated[
    Mapping[str, str],
    AfterValidator(lambda value: MappingProxyType(dict(value))),
    PlainSerializer(dict, return_type=Dict[str, str]),
]


class DataRequest(BaseModel):
    """Normalized query: domain, one level id per dimension and request filters"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data_type: Domain = Field(alias="dataType")
    time: int = Field(default=0, ge=0)
    customer: int = Field(default=0, ge=0)
    item: int = Field(default=0, ge=0)
    geo: int = Field(default=0, ge=0)
    filters: ReadOnlyFilters = Field(default_factory=lambda: MappingProxyType({}))

    def to_wire(self) -> dict:
        """JSON-compatible payload"""
        return self.model_dump(mode="json", by_alias=True)


class DataResponse(BaseModel):
    """Tabular result or failure indication"""

    success: bool
    data: List[ResultRow] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "DataResponse":
        return cls(success=False, message=message)

    def to_wire(self) -> dict:
        """JSON-compatible payload"""
        return self.model_dump(mode="json", exclude_none=True)
