"""Core data models.

This module defines:
- Remote descriptors (`System`, `Destination`, `Group`, `Search`, `EventsPage`)
  parsed from the Papertrail JSON payloads with pydantic. Unknown fields are
  ignored so new API attributes never break parsing.
- `Item`: the uniform result record produced by every reconciler.
- `TimeWindow` and `EventCursor` used by the event retrieval engine.
- `SystemCreationRequest`: tagged union of the three system creation bodies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field


# === Remote descriptors ===


class Syslog(BaseModel):
    hostname: str = ""
    port: int = 0
    description: Any = None


class Destination(BaseModel):
    id: int
    filter: Any = None
    syslog: Syslog = Field(default_factory=Syslog)


class System(BaseModel):
    id: int
    name: str
    hostname: str | None = None
    ip_address: str | None = None
    last_event_at: datetime | None = None
    auto_delete: bool = False
    syslog: Syslog = Field(default_factory=Syslog)


class Group(BaseModel):
    id: int
    name: str
    system_wildcard: str | None = None
    systems: list[System] = Field(default_factory=list)


class SearchGroup(BaseModel):
    id: int
    name: str = ""


class Search(BaseModel):
    id: int
    name: str
    query: str
    group: SearchGroup


class Event(BaseModel):
    id: str
    message: str = ""
    received_at: datetime | None = None
    generated_at: datetime | None = None
    display_received_at: str = ""
    source_ip: str = ""
    source_id: int | None = None
    source_name: str = ""
    hostname: str = ""
    program: str | None = None
    severity: str = ""
    facility: str = ""


class EventsPage(BaseModel):
    """One page of `events/search.json`; events come oldest first."""

    min_id: str | None = None
    max_id: str | None = None
    events: list[Event] = Field(default_factory=list)
    min_time_at: datetime | None = None
    reached_beginning: bool = False
    reached_record_limit: bool = False

    def cursor(self) -> EventCursor:
        min_time = None
        if self.min_time_at is not None:
            at = self.min_time_at
            # timestamps without an offset are UTC
            if at.tzinfo is None:
                at = at.replace(tzinfo=timezone.utc)
            min_time = int(at.timestamp())
        return EventCursor(min_id=self.min_id, max_id=self.max_id, min_time_at=min_time)


# === Result record ===


class ItemKind(str, Enum):
    SYSTEM = "System"
    GROUP = "Group"
    SEARCH = "Search"
    EVENTS_SEARCH = "EventsSearch"


@dataclass(slots=True, frozen=True)
class Item:
    """A resource touched during a run.

    At most one of `created` / `deleted` is true. `EventsSearch` items carry a
    summary in `name` and keep both flags false.
    """

    id: int
    kind: ItemKind
    name: str
    created: bool = False
    deleted: bool = False

    def __post_init__(self) -> None:
        if self.created and self.deleted:
            raise ValueError("an item cannot be both created and deleted")


# === Event retrieval ===


@dataclass(slots=True, frozen=True)
class TimeWindow:
    """Inclusive [start_unix, end_unix] range, in Unix seconds."""

    start_unix: int
    end_unix: int


@dataclass(slots=True, frozen=True)
class EventCursor:
    min_id: str | None
    max_id: str | None
    min_time_at: int | None  # Unix seconds

    def reached(self, start_unix: int) -> bool:
        """True once the page covers `start_unix` (nothing older left to fetch)."""
        return self.min_time_at is None or self.min_time_at <= start_unix


# === System creation ===


@dataclass(slots=True, frozen=True)
class ByHostnamePort:
    hostname: str
    destination_port: int

    def body(self) -> dict[str, Any]:
        return {
            "system": {"name": self.hostname, "hostname": self.hostname},
            "destination_port": self.destination_port,
        }


@dataclass(slots=True, frozen=True)
class ByHostnameDestinationId:
    hostname: str
    destination_id: int

    def body(self) -> dict[str, Any]:
        return {
            "system": {"name": self.hostname, "hostname": self.hostname},
            "destination_id": self.destination_id,
        }


@dataclass(slots=True, frozen=True)
class ByIPAddress:
    address: str

    def body(self) -> dict[str, Any]:
        return {"system": {"name": self.address, "ip_address": self.address}}


SystemCreationRequest = Union[ByHostnamePort, ByHostnameDestinationId, ByIPAddress]
