"""
OLAP Dashboard Core

Dimension-driven data requests, a mock data provider and client-side
result filtering for the sales/inventory dashboard.
"""

__version__ = "1.0.0"
