from __future__ import annotations

from .core.actions import Action, classify
from .core.config import ClientConfig, ReconcileOptions
from .core.errors import (
    ConfigError,
    NotFoundError,
    RemoteOperationFailed,
    TrailctlError,
    TransportError,
    ValidationError,
)
from .core.models import Item, ItemKind
from .orchestration.orchestrator import Orchestrator, ReconcileResult, reconcile

__version__ = "1.0.0"

__all__ = [
    "Action",
    "classify",
    "ClientConfig",
    "ReconcileOptions",
    "ConfigError",
    "NotFoundError",
    "RemoteOperationFailed",
    "TrailctlError",
    "TransportError",
    "ValidationError",
    "Item",
    "ItemKind",
    "Orchestrator",
    "ReconcileResult",
    "reconcile",
]
