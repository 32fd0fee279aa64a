"""
Storage module for link records.

The relational store owns all persisted Link state; services only request
reads and mutations through it.
"""

from .link_store import LinkStore

__all__ = [
    "LinkStore",
]
