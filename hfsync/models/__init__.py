"""
Data Models Layer.

This package contains the core data structures used throughout the
application: validated settings, manifest records and cycle statistics.
"""

from .config import SyncSettings
from .manifest import ManifestRecord, SyncPlan
from .stats import SyncStats

__all__ = ["ManifestRecord", "SyncPlan", "SyncSettings", "SyncStats"]
