"""
Dashboard walkthrough

Runs one session against the configured provider: sales by year and size,
then narrows the displayed rows to 2021.

Usage:
    python -m olap_dashboard
"""

import asyncio
from typing import Optional

import structlog

from olap_dashboard.config.logging import configure_logging
from olap_dashboard.dimensions.catalog import Dimension
from olap_dashboard.view.session import DashboardSession

logger = structlog.get_logger(__name__)


async def run_demo(session: Optional[DashboardSession] = None) -> DashboardSession:
    session = session or DashboardSession()
    session.set_level(Dimension.TIME, '["Year"]')
    session.set_level(Dimension.ITEM, '["Size"]')

    outcome = await session.refresh()
    if not outcome.response.success:
        logger.error("Walkthrough fetch failed", message=outcome.response.message)
        return session

    logger.info("Columns available", options=session.column_options)

    session.set_filter("Year", "2021")
    logger.info(session.record_summary(), filters=dict(session.selection.filters))
    return session


def main() -> None:
    configure_logging()
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
