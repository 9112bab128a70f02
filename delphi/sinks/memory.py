"""In-memory sink that keeps every notification for inspection."""

from typing import Any

from delphi.models.base import Event


class MemorySink:
    """Collect records per topic.

    Default sink of a ``Ledger``; tests and the sample scenario read the
    emitted events back from it.
    """

    def __init__(self) -> None:
        self.records: list[tuple[str, Any]] = []
        self.closed = False

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        self.records.append((topic, record))

    @property
    def events(self) -> list[Event]:
        return [record for _, record in self.records if isinstance(record, Event)]

    def events_of(self, event_type: str) -> list[Event]:
        """Return the events whose ``event_type`` matches, in emission order."""
        return [event for event in self.events if event.event_type == event_type]

    def topics(self) -> set[str]:
        return {topic for topic, _ in self.records}

    def clear(self) -> None:
        self.records.clear()

    def close(self) -> None:
        self.closed = True
