from __future__ import annotations

import logging

from trailctl.constants import SEARCHES_PATH
from trailctl.core.actions import Action
from trailctl.core.errors import SearchNotFound
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import Item, ItemKind, Search
from trailctl.reconcile.base import ResourceCollection

logger = logging.getLogger(__name__)


class SearchReconciler:
    """Saved searches, keyed by (name, query, group id)."""

    def __init__(self, api: IRemoteAPI) -> None:
        self.searches = ResourceCollection(api, name=SEARCHES_PATH, model=Search, kind="Search")

    def lookup(self, name: str, query: str, group_id: int) -> Search | None:
        return self.searches.find(lambda s: s.name == name and s.query == query and s.group.id == group_id)

    def reconcile(self, action: Action, name: str, query: str, group_id: int) -> Item:
        existing = self.lookup(name, query, group_id)
        if action is Action.CREATE:
            if existing is not None:
                logger.info("Search with name %s already exists with id %d", existing.name, existing.id)
                return Item(existing.id, ItemKind.SEARCH, existing.name)
            logger.info("Search with name %s doesn't exist yet", name)
            created = self.searches.create({"search": {"name": name, "query": query, "group_id": group_id}})
            logger.info("Search with name %s and id %d was successfully created", created.name, created.id)
            return Item(created.id, ItemKind.SEARCH, created.name, created=True)

        if existing is None:
            raise SearchNotFound(name)
        if action is Action.DELETE:
            self.searches.delete(existing.id)
            logger.info("Search with name %s and id %d was successfully deleted", existing.name, existing.id)
            return Item(existing.id, ItemKind.SEARCH, existing.name, deleted=True)
        logger.info("Search with name %s exists with id %d", existing.name, existing.id)
        return Item(existing.id, ItemKind.SEARCH, existing.name)
