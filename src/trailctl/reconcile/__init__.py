"""Resource reconcilers: turn a desired action + natural key into a
create / delete / no-op decision against remote state.

This package provides:
- ResourceCollection: list/find/get/create/delete over one API collection
- SystemReconciler, GroupReconciler, SearchReconciler
- DestinationLookup: destination resolution used by hostname systems
"""

from trailctl.reconcile.base import ResourceCollection
from trailctl.reconcile.destinations import DestinationLookup
from trailctl.reconcile.groups import GroupReconciler
from trailctl.reconcile.searches import SearchReconciler
from trailctl.reconcile.systems import SystemReconciler, system_request

__all__ = [
    "ResourceCollection",
    "DestinationLookup",
    "GroupReconciler",
    "SearchReconciler",
    "SystemReconciler",
    "system_request",
]
