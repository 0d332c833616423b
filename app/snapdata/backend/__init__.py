"""Data directory migration backend.

This module provides the trash manager, the failure aggregation policy,
and the two migrators: revision copy-forward and hidden-layout migration.
"""

from snapdata.backend.copydata import RevisionDataMigrator
from snapdata.backend.failures import FailureCollector, FailurePolicy
from snapdata.backend.hidden import HiddenLayoutMigrator
from snapdata.backend.trash import discard, restore, stage

__all__ = [
    "FailureCollector",
    "FailurePolicy",
    "HiddenLayoutMigrator",
    "RevisionDataMigrator",
    "discard",
    "restore",
    "stage",
]
