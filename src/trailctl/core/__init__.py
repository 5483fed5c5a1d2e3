"""Core data models, configuration, validation and errors.

This package provides:
- Data models (Item, TimeWindow, EventCursor, remote descriptors)
- Configuration classes (ClientConfig, ReconcileOptions)
- Action classification and run validation
"""

from trailctl.core.actions import Action, SystemType, ValidatedRun, classify, validate
from trailctl.core.config import ClientConfig, ReconcileOptions
from trailctl.core.models import EventCursor, Item, ItemKind, TimeWindow

__all__ = [
    "Action",
    "SystemType",
    "ValidatedRun",
    "classify",
    "validate",
    "ClientConfig",
    "ReconcileOptions",
    "EventCursor",
    "Item",
    "ItemKind",
    "TimeWindow",
]
