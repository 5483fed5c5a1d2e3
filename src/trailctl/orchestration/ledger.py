from __future__ import annotations

from dataclasses import dataclass, field

from trailctl.core.models import Item, ItemKind


def is_reportable(item: Item) -> bool:
    """Only mutations and completed retrievals are reported."""
    return item.created or item.deleted or item.kind is ItemKind.EVENTS_SEARCH


@dataclass(slots=True)
class ResultLedger:
    """Ordered record of what a run changed or retrieved."""

    items: list[Item] = field(default_factory=list)

    def add(self, item: Item | None) -> bool:
        """Append `item` if reportable; returns whether it was kept."""
        if item is None or not is_reportable(item):
            return False
        self.items.append(item)
        return True

    def __len__(self) -> int:
        return len(self.items)
