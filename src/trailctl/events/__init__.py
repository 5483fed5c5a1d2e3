"""Event retrieval into local files.

This package provides:
- EventsRetriever: cursor-based backward pagination over the events search endpoint
- File naming helpers for the exported event files
"""

from trailctl.events.search import EventsRetriever, escape_file_name, events_file_path, save_messages

__all__ = [
    "EventsRetriever",
    "escape_file_name",
    "events_file_path",
    "save_messages",
]
