import time
from pathlib import Path

import pytest

from trailctl.core.errors import OutputError, RemoteOperationFailed
from trailctl.core.models import EventsPage, ItemKind, TimeWindow
from trailctl.events import EventsRetriever, escape_file_name, events_file_path
from trailctl.events.search import save_messages

from conftest import END_UNIX, START_UNIX, iso

WINDOW = TimeWindow(start_unix=START_UNIX, end_unix=END_UNIX)


def seed_stream(api, count: int) -> None:
    # event 1 sits exactly on the window start
    for i in range(1, count + 1):
        api.add_event(i, START_UNIX + (i - 1) * 10)


def test_three_pages_are_stitched_in_chronological_order(fake_api) -> None:
    seed_stream(fake_api, 12)

    messages = EventsRetriever(fake_api).fetch_messages(group_id=1, query="*", window=WINDOW)

    calls = fake_api.calls_to("GET", "events/search.json")
    assert len(calls) == 3
    assert messages == [f"event {i}" for i in range(1, 13)]
    assert len(set(messages)) == len(messages)


def test_cursor_requests(fake_api) -> None:
    seed_stream(fake_api, 12)

    EventsRetriever(fake_api).fetch_messages(group_id=7, query="error", window=WINDOW)

    bodies = [body for _, _, body in fake_api.calls_to("GET", "events/search.json")]
    assert bodies[0] == {"group_id": 7, "q": "error", "min_time": str(START_UNIX), "max_time": str(END_UNIX)}
    assert bodies[1] == {"group_id": 7, "q": "error", "min_time": str(START_UNIX), "max_id": "8"}
    assert bodies[2] == {"group_id": 7, "q": "error", "min_time": str(START_UNIX), "max_id": "4"}


def test_single_page_when_it_reaches_the_start(fake_api) -> None:
    seed_stream(fake_api, 3)

    messages = EventsRetriever(fake_api).fetch_messages(group_id=1, query="*", window=WINDOW)

    assert messages == ["event 1", "event 2", "event 3"]
    assert len(fake_api.calls) == 1


def test_run_writes_file_and_reports_summary(fake_api, tmp_path: Path) -> None:
    seed_stream(fake_api, 12)

    item = EventsRetriever(fake_api).run(
        group_id=1, group_name="my group", search_name="s 1", query="*", window=WINDOW, path=tmp_path
    )

    out = tmp_path / "my_group_s_1_01-01-2024_00:00:00_01-02-2024_00:00:00"
    assert out.read_text().splitlines() == [f"event {i}" for i in range(1, 13)]
    assert item.kind is ItemKind.EVENTS_SEARCH
    assert item.id == 0
    assert not item.created and not item.deleted
    assert item.name == f"{out} with 12 events retrieved"


def test_run_truncates_previous_file(fake_api, tmp_path: Path) -> None:
    seed_stream(fake_api, 2)
    out = events_file_path(tmp_path, "g", "s", WINDOW)
    out.write_text("stale line\n" * 50)

    EventsRetriever(fake_api).run(group_id=1, group_name="g", search_name="s", query="*", window=WINDOW, path=tmp_path)

    assert out.read_text() == "event 1\nevent 2\n"


def test_run_without_events_writes_nothing(fake_api, tmp_path: Path) -> None:
    item = EventsRetriever(fake_api).run(
        group_id=1, group_name="g", search_name="s", query="*", window=WINDOW, path=tmp_path
    )

    assert list(tmp_path.iterdir()) == []
    assert item.name.endswith(" with 0 events retrieved")
    assert item.kind is ItemKind.EVENTS_SEARCH


def test_events_outside_window_are_ignored(fake_api) -> None:
    fake_api.add_event(1, START_UNIX - 100, "too old")
    fake_api.add_event(2, START_UNIX + 5, "inside")
    fake_api.add_event(3, END_UNIX + 100, "too new")

    messages = EventsRetriever(fake_api).fetch_messages(group_id=1, query="*", window=WINDOW)

    assert messages == ["inside"]


def test_events_error_status(fake_api) -> None:
    fake_api.failures[("GET", "events/search.json")] = 401
    with pytest.raises(RemoteOperationFailed) as exc_info:
        EventsRetriever(fake_api).fetch_messages(group_id=1, query="*", window=WINDOW)
    assert exc_info.value.status_code == 401


def test_file_name_escaping() -> None:
    path = events_file_path(Path("/tmp/logs"), "prod [eu]", "errors", WINDOW)
    assert path.name == "prod_[eu]_errors_01-01-2024_00:00:00_01-02-2024_00:00:00"
    assert escape_file_name(path) == "/tmp/logs/prod_\\[eu\\]_errors_01-01-2024_00:00:00_01-02-2024_00:00:00"


def test_page_cursor_uses_unix_seconds() -> None:
    page = EventsPage.model_validate(
        {"min_id": "10", "max_id": "20", "events": [], "min_time_at": iso(START_UNIX + 1)}
    )
    cursor = page.cursor()
    assert cursor.min_time_at == START_UNIX + 1
    assert not cursor.reached(START_UNIX)
    assert cursor.reached(START_UNIX + 1)


@pytest.fixture(params=["America/New_York", "Asia/Tokyo"])
def local_tz(request, monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", request.param)
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_page_cursor_reads_offsetless_times_as_utc(local_tz) -> None:
    page = EventsPage.model_validate({"events": [], "min_time_at": "2024-01-01T00:00:00"})
    assert page.cursor().min_time_at == START_UNIX


def test_offsetless_times_do_not_stop_pagination_early(fake_api, monkeypatch, local_tz) -> None:
    seed_stream(fake_api, 12)
    original = fake_api._search_events

    def without_offsets(body):
        resp = original(body)
        if resp.body and resp.body.get("min_time_at"):
            resp.body["min_time_at"] = resp.body["min_time_at"].replace("+00:00", "")
        return resp

    monkeypatch.setattr(fake_api, "_search_events", without_offsets)

    messages = EventsRetriever(fake_api).fetch_messages(group_id=1, query="*", window=WINDOW)

    assert messages == [f"event {i}" for i in range(1, 13)]


def test_save_messages_into_a_file_path_fails_cleanly(tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")

    with pytest.raises(OutputError) as exc_info:
        save_messages(blocker / "out", ["event 1"])
    assert isinstance(exc_info.value.__cause__, OSError)
    assert "not_a_dir" in str(exc_info.value)
