"""
Dashboard client for the link service.

Lists, searches, creates and deletes links over the HTTP API and keeps click
counts fresh by polling.
"""

from .app import Dashboard
from .client import DashboardApiError, LinkApiClient
from .poller import CounterPoller
from .table import LinkTable, filter_rows

__all__ = [
    "Dashboard",
    "DashboardApiError",
    "LinkApiClient",
    "CounterPoller",
    "LinkTable",
    "filter_rows",
]
