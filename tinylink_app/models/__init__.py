"""
Database models for the link shortener.

Links are the only persisted entity: code, destination, click counter and
timestamps all live in a single table.
"""

from .link import Link

__all__ = ["Link"]
