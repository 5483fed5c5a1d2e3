from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from trailctl.core.config import ReconcileOptions
from trailctl.core.interfaces import ApiResponse

_PATH_RE = re.compile(r"^(?P<name>\w+)(?:/(?P<id>\d+))?\.json$")

START_DATE = "01/01/2024 00:00:00"
END_DATE = "01/02/2024 00:00:00"
START_UNIX = 1704067200
END_UNIX = 1704153600


def iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


class FakePapertrail:
    """In-memory Papertrail service speaking the `IRemoteAPI` protocol.

    Deleting a group also deletes its searches. Event pages hold the newest
    `page_size` matching events, oldest first; `max_id` is inclusive.
    """

    def __init__(self, page_size: int = 5) -> None:
        self.systems: list[dict[str, Any]] = []
        self.groups: list[dict[str, Any]] = []
        self.searches: list[dict[str, Any]] = []
        self.destinations: dict[int, dict[str, Any]] = {}
        self.events: list[dict[str, Any]] = []
        self.page_size = page_size
        self.calls: list[tuple[str, str, Any]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self._next_id = 100

    # --- seeding helpers ---

    def new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_destination(self, destination_id: int, hostname: str = "logs.papertrailapp.com", port: int = 12345) -> None:
        self.destinations[destination_id] = {
            "id": destination_id,
            "filter": None,
            "syslog": {"hostname": hostname, "port": port, "description": ""},
        }

    def add_event(self, event_id: int, ts: int, message: str | None = None) -> None:
        self.events.append({"id": str(event_id), "ts": ts, "message": message or f"event {event_id}"})
        self.events.sort(key=lambda e: e["ts"])

    def calls_to(self, method: str, prefix: str = "") -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == method and c[1].startswith(prefix)]

    # --- IRemoteAPI ---

    def request(self, method: str, path: str, body: Any = None) -> ApiResponse:
        self.calls.append((method, path, body))
        if (method, path) in self.failures:
            return ApiResponse(self.failures[(method, path)], {"message": "failure"})
        if path == "events/search.json":
            return self._search_events(body)

        m = _PATH_RE.match(path)
        assert m is not None, path
        name, raw_id = m.group("name"), m.group("id")
        if name == "destinations":
            dest = self.destinations.get(int(raw_id))
            return ApiResponse(200, dest) if dest else ApiResponse(404, {"message": "Not Found"})

        store: list[dict[str, Any]] = getattr(self, name)
        if raw_id is None and method == "GET":
            return ApiResponse(200, [dict(x) for x in store])
        if raw_id is None and method == "POST":
            return ApiResponse(200, getattr(self, f"_create_{name}")(body))
        if method == "DELETE":
            target = next((x for x in store if x["id"] == int(raw_id)), None)
            if target is None:
                return ApiResponse(404, {"message": "Not Found"})
            store.remove(target)
            if name == "groups":
                self.searches = [s for s in self.searches if s["group"]["id"] != target["id"]]
            return ApiResponse(200, {"message": "deleted"})
        raise AssertionError(f"unexpected call {method} {path}")

    def _create_systems(self, body: dict[str, Any]) -> dict[str, Any]:
        spec = body["system"]
        syslog = {"hostname": "logs.papertrailapp.com", "port": body.get("destination_port", 0)}
        if "destination_id" in body:
            syslog = dict(self.destinations[body["destination_id"]]["syslog"])
        system = {
            "id": self.new_id(),
            "name": spec["name"],
            "hostname": spec.get("hostname"),
            "ip_address": spec.get("ip_address"),
            "last_event_at": None,
            "auto_delete": False,
            "syslog": syslog,
        }
        self.systems.append(system)
        return system

    def _create_groups(self, body: dict[str, Any]) -> dict[str, Any]:
        group = {"id": self.new_id(), "name": body["group"]["name"], "system_wildcard": body["group"]["system_wildcard"]}
        self.groups.append(group)
        return group

    def _create_searches(self, body: dict[str, Any]) -> dict[str, Any]:
        spec = body["search"]
        group = next(g for g in self.groups if g["id"] == spec["group_id"])
        search = {
            "id": self.new_id(),
            "name": spec["name"],
            "query": spec["query"],
            "group": {"id": group["id"], "name": group["name"]},
        }
        self.searches.append(search)
        return search

    def _search_events(self, body: dict[str, Any]) -> ApiResponse:
        min_time = int(body["min_time"])
        selected = [e for e in self.events if e["ts"] >= min_time]
        if "max_time" in body:
            selected = [e for e in selected if e["ts"] <= int(body["max_time"])]
        if "max_id" in body:
            selected = [e for e in selected if int(e["id"]) <= int(body["max_id"])]
        page = selected[-self.page_size:]
        reached = len(page) == len(selected)
        if not page:
            return ApiResponse(200, {"events": [], "min_time_at": iso(min_time), "reached_beginning": True})
        return ApiResponse(
            200,
            {
                "min_id": page[0]["id"],
                "max_id": page[-1]["id"],
                "events": [
                    {"id": e["id"], "message": e["message"], "received_at": iso(e["ts"]), "hostname": "host"}
                    for e in page
                ],
                # once nothing older matches, the search has scanned down to min_time
                "min_time_at": iso(min_time if reached else page[0]["ts"]),
                "reached_beginning": reached,
                "reached_record_limit": False,
            },
        )


@pytest.fixture
def fake_api() -> FakePapertrail:
    return FakePapertrail()


@pytest.fixture
def mock_api():
    api = MagicMock()
    api.request = MagicMock(return_value=ApiResponse(200, []))
    return api


@pytest.fixture
def make_options(tmp_path):
    def _make(**overrides: Any) -> ReconcileOptions:
        values: dict[str, Any] = {
            "group_name": "g1",
            "system_wildcard": "1.2.3.4",
            "system_type": "ip-address",
            "search": "s1",
            "query": "*",
            "action": "c",
            "start_date": START_DATE,
            "end_date": END_DATE,
            "path": tmp_path,
        }
        values.update(overrides)
        return ReconcileOptions(**values)

    return _make
