"""Reconciliation engine: mirror the local store against the interviews server.

Passes:
1) ``Migrator`` pushes guest-local interviews and binds their remote ids
2) ``Reconciler`` merges remote companies, stages, methods and interviews
3) ``Deduplicator`` collapses reference rows sharing a display name

``SyncCoordinator`` runs them in that order on sign-in and guards against
overlapping passes.
"""

from __future__ import annotations

from .coordinator import SyncCoordinator
from .deduplicate import DeduplicationResult, Deduplicator, choose_survivor
from .migrate import MigrationResult, Migrator
from .parsing import format_datetime, parse_datetime, parse_outcome
from .payloads import create_payload, location_type_for, update_payload
from .reconcile import MergeCounts, Reconciler, ReconcileResult

__all__ = [
    "DeduplicationResult",
    "Deduplicator",
    "MergeCounts",
    "MigrationResult",
    "Migrator",
    "ReconcileResult",
    "Reconciler",
    "SyncCoordinator",
    "choose_survivor",
    "create_payload",
    "format_datetime",
    "location_type_for",
    "parse_datetime",
    "parse_outcome",
    "update_payload",
]
