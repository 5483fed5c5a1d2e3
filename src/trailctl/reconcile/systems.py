"""System reconciler.

A system is identified by one of three natural keys, mirrored by the three
`SystemCreationRequest` variants:

- `ByHostnamePort`: (hostname, syslog port)
- `ByHostnameDestinationId`: (hostname, destination syslog host and port),
  the destination being resolved remotely first
- `ByIPAddress`: ip address

Lookups scan the full system list. Deleting a system that does not exist is a
no-op, unlike groups and searches.
"""

from __future__ import annotations

import logging
from typing import Callable

from trailctl.constants import SYSTEMS_PATH
from trailctl.core.actions import Action, SystemType
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import (
    ByHostnameDestinationId,
    ByHostnamePort,
    ByIPAddress,
    Item,
    ItemKind,
    System,
    SystemCreationRequest,
)
from trailctl.reconcile.base import ResourceCollection
from trailctl.reconcile.destinations import DestinationLookup

logger = logging.getLogger(__name__)


def system_request(
    entry: str,
    system_type: SystemType,
    *,
    destination_port: int = 0,
    destination_id: int = 0,
    ip_address: str = "",
) -> SystemCreationRequest:
    """Build the natural key / creation request for one wildcard entry.

    For hostname systems the port wins when both destinations are given; that
    combination only gets this far on delete, where it is not validated.
    A port of 0 with no destination id matches the hostname on any port.
    """
    if system_type is SystemType.IP_ADDRESS:
        return ByIPAddress(address=ip_address or entry)
    if destination_id and not destination_port:
        return ByHostnameDestinationId(hostname=entry, destination_id=destination_id)
    return ByHostnamePort(hostname=entry, destination_port=destination_port)


class SystemReconciler:
    def __init__(self, api: IRemoteAPI) -> None:
        self.systems = ResourceCollection(api, name=SYSTEMS_PATH, model=System, kind="System")
        self.destinations = DestinationLookup(api)

    def _predicate(self, request: SystemCreationRequest) -> Callable[[System], bool]:
        if isinstance(request, ByIPAddress):
            return lambda s: s.ip_address == request.address
        if isinstance(request, ByHostnameDestinationId):
            syslog = self.destinations.get(request.destination_id).syslog
            return lambda s: (
                s.hostname == request.hostname
                and s.syslog.hostname == syslog.hostname
                and s.syslog.port == syslog.port
            )
        if request.destination_port == 0:
            return lambda s: s.hostname == request.hostname
        return lambda s: s.hostname == request.hostname and s.syslog.port == request.destination_port

    def lookup(self, request: SystemCreationRequest) -> System | None:
        return self.systems.find(self._predicate(request))

    def create_system(self, request: SystemCreationRequest) -> System:
        """Create a system from any `SystemCreationRequest` variant."""
        system = self.systems.create(request.body())
        logger.info("System with name %s was successfully created with id %d", system.name, system.id)
        return system

    def reconcile(self, action: Action, request: SystemCreationRequest) -> Item | None:
        """Apply `action` to one system; None when nothing was done."""
        if action is Action.OBTAIN:
            return None

        label = _label(request)
        existing = self.lookup(request)
        if action is Action.DELETE:
            if existing is None:
                logger.info("System %s doesn't exist, nothing to delete", label)
                return None
            self.systems.delete(existing.id)
            logger.info("System %s with id %d was successfully deleted", label, existing.id)
            return Item(existing.id, ItemKind.SYSTEM, existing.name, deleted=True)

        if existing is not None:
            logger.info("System %s already exists with id %d", label, existing.id)
            return Item(existing.id, ItemKind.SYSTEM, existing.name)
        logger.info("System %s doesn't exist yet", label)
        created = self.create_system(request)
        return Item(created.id, ItemKind.SYSTEM, created.name, created=True)


def _label(request: SystemCreationRequest) -> str:
    if isinstance(request, ByIPAddress):
        return f"with IPAddress {request.address}"
    return f"with hostname {request.hostname}"
