"""Orchestration of a reconciliation run.

This package provides:
- Orchestrator / reconcile: phase machine sequencing systems, group, search and event retrieval
- ResultLedger: filter keeping only created/deleted/retrieval items
"""

from trailctl.orchestration.ledger import ResultLedger, is_reportable
from trailctl.orchestration.orchestrator import (
    Orchestrator,
    Phase,
    ReconcileResult,
    reconcile,
    systems_phase_enabled,
)

__all__ = [
    "Orchestrator",
    "Phase",
    "ReconcileResult",
    "ResultLedger",
    "is_reportable",
    "reconcile",
    "systems_phase_enabled",
]
