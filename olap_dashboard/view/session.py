"""
Dashboard Session

View-layer owner of the selection, the current result and the loading
state. Fetches carry a sequence token; a response is applied only if no
newer fetch or domain switch happened while it was pending.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

import structlog

from olap_dashboard.data.provider import DataProvider, MockDataProvider
from olap_dashboard.dimensions.catalog import Dimension, Domain
from olap_dashboard.dimensions.selection import SelectionState
from olap_dashboard.query.builder import build_request
from olap_dashboard.query.models import DataResponse, ResultRow
from olap_dashboard.transformation.filters import column_options, visible_rows

logger = structlog.get_logger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


Notifier = Callable[[NoticeLevel, str], None]


def log_notifier(level: NoticeLevel, message: str) -> None:
    """Default notifier: route user notifications to the log"""
    if level is NoticeLevel.ERROR:
        logger.error("Notification", message=message)
    else:
        logger.info("Notification", message=message)


@dataclass
class FetchOutcome:
    """What happened to one refresh call"""
    token: int
    response: DataResponse
    applied: bool


@dataclass
class DashboardSession:
    """
    One user's dashboard.

    Example:
        session = DashboardSession()
        session.set_level(Dimension.TIME, '["Year"]')
        await session.refresh()
        session.set_filter("Year", "2021")
        rows = session.visible_rows
    """
    provider: DataProvider = field(default_factory=MockDataProvider)
    notify: Notifier = log_notifier
    selection: SelectionState = field(default_factory=SelectionState)
    result: Optional[List[ResultRow]] = None
    is_loading: bool = False
    _latest_token: int = field(default=0, init=False, repr=False)

    @property
    def domain(self) -> Domain:
        return self.selection.domain

    @property
    def value_field(self) -> str:
        return self.domain.value_field

    @property
    def value_title(self) -> str:
        return self.domain.value_title

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_level(self, dimension: Dimension, level_key: str) -> None:
        self.selection.set_level(dimension, level_key)

    def set_filter(self, column: str, value: str) -> None:
        self.selection.set_filter(column, value)

    def clear_filter(self, column: str) -> None:
        self.selection.clear_filter(column)

    def set_domain(self, domain: Domain) -> None:
        """Switch domain; the displayed result and pending fetches are discarded"""
        domain = Domain(domain)
        if domain is self.domain:
            return

        self.selection.set_domain(domain)
        self.result = None
        self._latest_token += 1
        self.is_loading = False

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _next_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    async def refresh(self) -> FetchOutcome:
        """
        Fetch a result for the current selection.

        Raises:
            UnknownLevel: the selection references a level invalid for its domain
        """
        request = build_request(self.domain, self.selection)
        token = self._next_token()
        self.is_loading = True

        log = logger.bind(token=token, domain=self.domain.value)
        log.info("Refresh started")

        try:
            response = await self.provider.fetch(request)
        except Exception as e:
            log.exception("Provider raised", error=str(e))
            response = DataResponse.failure(str(e) or "An error occurred while fetching data")

        if token != self._latest_token:
            log.info("Discarding superseded response", latest=self._latest_token)
            return FetchOutcome(token=token, response=response, applied=False)

        self.is_loading = False
        if response.success:
            self.result = response.data
            self.notify(NoticeLevel.SUCCESS, "Data loaded successfully")
        else:
            self.notify(NoticeLevel.ERROR, response.message or "Failed to load data")

        log.info("Refresh completed", success=response.success, rows=len(response.data))
        return FetchOutcome(token=token, response=response, applied=True)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def visible_rows(self) -> List[ResultRow]:
        if not self.result:
            return []
        return visible_rows(self.result, self.selection.filters)

    @property
    def column_options(self) -> Dict[str, List[str]]:
        return column_options(self.result or [])

    def record_summary(self) -> str:
        total = len(self.result or [])
        return f"Showing {len(self.visible_rows)} of {total} record(s)"
