from __future__ import annotations

import logging

from trailctl.constants import GROUPS_PATH
from trailctl.core.actions import Action
from trailctl.core.errors import GroupNotFound
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import Group, Item, ItemKind
from trailctl.reconcile.base import ResourceCollection

logger = logging.getLogger(__name__)


class GroupReconciler:
    """Groups are keyed by name; the system wildcard is creation data only."""

    def __init__(self, api: IRemoteAPI) -> None:
        self.groups = ResourceCollection(api, name=GROUPS_PATH, model=Group, kind="Group")

    def lookup(self, name: str) -> Group | None:
        return self.groups.find(lambda g: g.name == name)

    def reconcile(self, action: Action, name: str, system_wildcard: str = "*") -> Item:
        existing = self.lookup(name)
        if action is Action.CREATE:
            if existing is not None:
                logger.info("Group with name %s already exists with id %d", name, existing.id)
                return Item(existing.id, ItemKind.GROUP, existing.name)
            logger.info("Group with name %s doesn't exist yet", name)
            created = self.groups.create({"group": {"name": name, "system_wildcard": system_wildcard}})
            logger.info("Group with name %s and id %d was successfully created", created.name, created.id)
            return Item(created.id, ItemKind.GROUP, created.name, created=True)

        if existing is None:
            raise GroupNotFound(name)
        if action is Action.DELETE:
            self.groups.delete(existing.id)
            logger.info("Group with name %s and id %d was successfully deleted", existing.name, existing.id)
            return Item(existing.id, ItemKind.GROUP, existing.name, deleted=True)
        logger.info("Group with name %s exists with id %d", name, existing.id)
        return Item(existing.id, ItemKind.GROUP, existing.name)
