"""
Dashboard View Module
"""
from .session import DashboardSession, FetchOutcome, NoticeLevel, log_notifier

__all__ = [
    "DashboardSession",
    "FetchOutcome",
    "NoticeLevel",
    "log_notifier",
]
