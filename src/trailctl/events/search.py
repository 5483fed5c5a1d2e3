"""Event retrieval: backward cursor pagination over `events/search.json`.

Each page holds the newest events (oldest first within the page) at or below
the requested bound. The first page is bounded by the window end; every
following page is bounded by the oldest event ID seen so far (`max_id`), so
the walk moves back in time until a page reaches the window start. Older pages
are prepended, which keeps the assembled list in chronological order.

The loop has no iteration cap: it ends only when a page's `min_time_at` is at
or before the window start.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trailctl.constants import EVENTS_SEARCH_PATH
from trailctl.core.errors import OutputError, TransportError, error_for_status
from trailctl.core.interfaces import IRemoteAPI
from trailctl.core.models import EventsPage, Item, ItemKind, TimeWindow
from trailctl.core.timeutils import date_from_unix

logger = logging.getLogger(__name__)


def _fixed_date(timestamp: int) -> str:
    return date_from_unix(timestamp).replace(" ", "_").replace("/", "-")


def events_file_path(path: Path, group_name: str, search_name: str, window: TimeWindow) -> Path:
    """`<path>/<group>_<search>_<start>_<end>` with shell-unfriendly characters replaced."""
    name = "_".join(
        [
            group_name.replace(" ", "_"),
            search_name.replace(" ", "_"),
            _fixed_date(window.start_unix),
            _fixed_date(window.end_unix),
        ]
    )
    return Path(path) / name


def escape_file_name(file_path: Path | str) -> str:
    """Backslash-escape square brackets for display / copy-paste into a shell."""
    return str(file_path).replace("]", "\\]").replace("[", "\\[")


class EventsRetriever:
    """Fetch every event of a group/query inside a time window."""

    def __init__(self, api: IRemoteAPI) -> None:
        self.api = api

    def _page(self, body: dict[str, Any]) -> EventsPage:
        resp = self.api.request("GET", EVENTS_SEARCH_PATH, body)
        if not resp.ok:
            raise error_for_status(resp.status_code, "EventsSearch", "Obtaining")
        try:
            return EventsPage.model_validate(resp.body or {})
        except PydanticValidationError as e:
            raise TransportError(f"unexpected EventsSearch payload: {e}") from e

    def fetch_messages(self, group_id: int, query: str, window: TimeWindow) -> list[str]:
        """Return the messages of every event in `window`, oldest first."""
        page = self._page(
            {
                "group_id": group_id,
                "q": query,
                "min_time": str(window.start_unix),
                "max_time": str(window.end_unix),
            }
        )
        if not page.events:
            return []

        messages = [event.message for event in page.events]
        cursor = page.cursor()
        pages = 1
        while not cursor.reached(window.start_unix):
            max_id = cursor.min_id
            page = self._page(
                {
                    "group_id": group_id,
                    "q": query,
                    "min_time": str(window.start_unix),
                    "max_id": max_id,
                }
            )
            pages += 1
            # the event at max_id was already collected on the previous page
            older = [event.message for event in page.events if event.id != max_id]
            messages = older + messages
            cursor = page.cursor()
            logger.debug(
                "page %d: %d older events, ids %s..%s, min_time_at=%s",
                pages,
                len(older),
                cursor.min_id,
                cursor.max_id,
                cursor.min_time_at,
            )

        logger.info("Retrieved %d events in %d page(s)", len(messages), pages)
        return messages

    def run(
        self,
        *,
        group_id: int,
        group_name: str,
        search_name: str,
        query: str,
        window: TimeWindow,
        path: Path,
    ) -> Item:
        """Retrieve the window's events into a file and report them as an item."""
        file_path = events_file_path(path, group_name, search_name, window)
        messages = self.fetch_messages(group_id, query, window)
        if messages:
            save_messages(file_path, messages)
            logger.info("Saved %d events to %s", len(messages), file_path)
        else:
            logger.info("No events found for search %s in group %s", search_name, group_name)
        return Item(0, ItemKind.EVENTS_SEARCH, f"{escape_file_name(file_path)} with {len(messages)} events retrieved")


def save_messages(file_path: Path, messages: list[str]) -> None:
    """Write one message per line, replacing any previous content."""
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            for message in messages:
                f.write(message + "\n")
    except OSError as e:
        raise OutputError(file_path, e) from e
