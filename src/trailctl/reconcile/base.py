"""Generic access to one remote resource collection.

The service has no keyed lookup for systems, groups or searches, so existence
checks scan the full list. `ResourceCollection.find` is the single place that
does that scan.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from trailctl.core.errors import TransportError, error_for_status
from trailctl.core.interfaces import IRemoteAPI

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ResourceCollection(Generic[M]):
    """CRUD calls against `<name>.json` and `<name>/<id>.json`.

    Parameters
    ----------
    api : IRemoteAPI
        Transport used for every call.
    name : str
        Collection path segment, e.g. "groups".
    model : type[BaseModel]
        Descriptor model the JSON payloads are parsed into.
    kind : str
        Human-readable resource kind used in error messages.
    """

    def __init__(self, api: IRemoteAPI, *, name: str, model: type[M], kind: str) -> None:
        self.api = api
        self.name = name
        self.model = model
        self.kind = kind

    @property
    def list_path(self) -> str:
        return f"{self.name}.json"

    def item_path(self, resource_id: int) -> str:
        return f"{self.name}/{resource_id}.json"

    def _parse(self, payload: Any) -> M:
        try:
            return self.model.model_validate(payload)
        except PydanticValidationError as e:
            raise TransportError(f"unexpected {self.kind} payload: {e}") from e

    def fetch_all(self) -> list[M]:
        resp = self.api.request("GET", self.list_path)
        if not resp.ok:
            raise error_for_status(resp.status_code, self.kind, "Listing")
        return [self._parse(raw) for raw in resp.body or []]

    def find(self, predicate: Callable[[M], bool]) -> M | None:
        """Return the first descriptor matching `predicate`, or None."""
        for descriptor in self.fetch_all():
            if predicate(descriptor):
                return descriptor
        return None

    def get(self, resource_id: int) -> M:
        resp = self.api.request("GET", self.item_path(resource_id))
        if not resp.ok:
            raise error_for_status(resp.status_code, self.kind, "Obtaining")
        return self._parse(resp.body)

    def create(self, body: dict[str, Any]) -> M:
        resp = self.api.request("POST", self.list_path, body)
        if not resp.ok:
            raise error_for_status(resp.status_code, self.kind, "Creating")
        return self._parse(resp.body)

    def delete(self, resource_id: int) -> None:
        resp = self.api.request("DELETE", self.item_path(resource_id))
        if not resp.ok:
            raise error_for_status(resp.status_code, self.kind, "Deleting")
