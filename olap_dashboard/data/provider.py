"""
Data Provider

Resolves a normalized request into a tabular result. The mock provider
stands in for the aggregation backend; any object with the same
``fetch`` coroutine can replace it.
"""

import asyncio
from typing import List, Mapping, Optional, Protocol

import structlog

from olap_dashboard.config.settings import EmptyFilterPolicy, ProviderSettings, get_settings
from olap_dashboard.data.generators import ResultGenerator
from olap_dashboard.query.models import DataRequest, DataResponse, ResultRow

logger = structlog.get_logger(__name__)


class DataProvider(Protocol):
    """Request/response contract shared by the mock and a real backend"""

    async def fetch(self, request: DataRequest) -> DataResponse:
        ...


def apply_request_filters(
    rows: List[ResultRow],
    filters: Mapping[str, str],
    policy: EmptyFilterPolicy = EmptyFilterPolicy.FALLBACK_TO_UNFILTERED,
) -> List[ResultRow]:
    """
    Keep rows whose value equals every filter value.

    Comparison is strict: a string filter never matches a numeric cell.
    When nothing matches, ``policy`` decides between returning the
    unfiltered rows and returning no rows.
    """
    if not filters:
        return rows

    matched = [
        row for row in rows
        if all(key in row and row[key] == value for key, value in filters.items())
    ]
    if matched:
        return matched

    if policy is EmptyFilterPolicy.FALLBACK_TO_UNFILTERED:
        logger.warning(
            "Request filters matched no rows, returning unfiltered result",
            filters=dict(filters),
            rows=len(rows),
        )
        return rows

    logger.info("Request filters matched no rows", filters=dict(filters))
    return []


class MockDataProvider:
    """
    In-process provider backed by the synthetic result generator.

    Holds no per-request state; concurrent ``fetch`` calls are independent.

    Example:
        provider = MockDataProvider()
        response = await provider.fetch(request)
        if response.success:
            rows = response.data
    """

    def __init__(self, settings: Optional[ProviderSettings] = None):
        self.settings = settings or get_settings().provider
        self.generator = ResultGenerator(self.settings)

    async def fetch(self, request: DataRequest) -> DataResponse:
        """Generate, filter and return a result; errors become a failed response"""
        logger.info("Fetching data", **request.to_wire())

        try:
            if self.settings.latency_seconds:
                await asyncio.sleep(self.settings.latency_seconds)

            manifest, rows = self.generator.generate(request)
            rows = apply_request_filters(rows, request.filters, self.settings.empty_filter_policy)
        except Exception as e:
            logger.exception("Data generation failed", error=str(e))
            return DataResponse.failure(str(e) or "Unknown error occurred")

        logger.info("Data fetched", rows=len(rows), columns=manifest.names)
        return DataResponse(success=True, data=rows, columns=manifest.names)
