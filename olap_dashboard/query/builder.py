"""
Query Builder

Turns the selection into a normalized request that references level ids only.
"""

import structlog

from olap_dashboard.dimensions.catalog import Dimension, Domain, resolve
from olap_dashboard.dimensions.selection import SelectionState
from olap_dashboard.query.models import DataRequest

logger = structlog.get_logger(__name__)


def build_request(domain: Domain, selection: SelectionState) -> DataRequest:
    """
    Build a request for ``domain`` from the current selection.

    Each dimension's level key is resolved through the catalog for the given
    domain; the filter map is copied so later selection edits do not leak
    into an issued request.

    Raises:
        UnknownLevel: a selected level is not valid for ``domain``
    """
    domain = Domain(domain)
    ids = {
        dimension.value: resolve(dimension, domain, selection.choice(dimension).level)
        for dimension in Dimension
    }
    request = DataRequest(data_type=domain, filters=dict(selection.filters), **ids)

    logger.debug("Request built", **request.to_wire())
    return request
