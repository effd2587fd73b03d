"""Utility functions for topology tooling."""

from topology.utils.identifiers import utc_timestamp

__all__ = [
    "utc_timestamp",
]
