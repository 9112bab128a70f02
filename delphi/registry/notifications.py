"""Decide and dispatch the notification for each applied mutation."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from delphi.models.base import CallerContext, Event
from delphi.models.registry import EventType
from delphi.sinks.memory import MemorySink
from delphi.sinks.serialization import serialize_value

logger = logging.getLogger(__name__)


class Notifier:
    """Wrap registry facts in ``Event`` envelopes and hand them to a sink.

    Components call ``emit`` inside their open ``RegistryStore.batch()``,
    so an exception from the sink discards the mutation it describes.

    Parameters
    ----------
    sink : Any
        Anything with ``send(topic, record, key=None)``. Defaults to a
        ``MemorySink``.
    topic_prefix : str
        Prepended to the event family to form the topic
        (``dev.delphi`` + ``property`` -> ``dev.delphi.property``).
    """

    def __init__(self, sink: Any | None = None, topic_prefix: str = "dev.delphi") -> None:
        self.sink = sink if sink is not None else MemorySink()
        self.topic_prefix = topic_prefix

    def topic_for(self, event_type: EventType) -> str:
        return f"{self.topic_prefix}.{event_type.family}"

    def emit(
        self,
        event_type: EventType,
        caller: CallerContext,
        subject: bytes | str,
        data: dict[str, Any],
        source: str,
    ) -> Event:
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type.value,
            event_time=datetime.now(timezone.utc),
            source=source,
            subject=serialize_value(subject),
            data={key: serialize_value(value) for key, value in data.items()},
            metadata={"caller": caller.account_id},
        )
        topic = self.topic_for(event_type)
        self.sink.send(topic, event, key=event.subject)
        logger.debug("Emitted %s on %s", event.event_type, topic, extra={"event_type": event.event_type})
        return event

    def close(self) -> None:
        self.sink.close()
