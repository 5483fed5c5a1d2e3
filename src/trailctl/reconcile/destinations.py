from __future__ import annotations

import logging

from trailctl.constants import DESTINATIONS_PATH
from trailctl.core.errors import DestinationNotFound, NotFoundError
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import Destination
from trailctl.reconcile.base import ResourceCollection

logger = logging.getLogger(__name__)


class DestinationLookup:
    """Resolve log destinations by ID (the only keyed lookup the API offers)."""

    def __init__(self, api: IRemoteAPI) -> None:
        self.destinations = ResourceCollection(api, name=DESTINATIONS_PATH, model=Destination, kind="Destination")

    def get(self, destination_id: int) -> Destination:
        try:
            destination = self.destinations.get(destination_id)
        except NotFoundError:
            raise DestinationNotFound(destination_id) from None
        logger.info("Destination with id %d exists", destination.id)
        return destination
