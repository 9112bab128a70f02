"""Base models shared across the registry."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CallerContext:
    """Already-authenticated identity of whoever invokes an operation.

    The registry never authenticates callers itself; the invocation layer
    builds one of these per call.
    """

    account_id: str

    def __post_init__(self) -> None:
        if not self.account_id:
            raise ValueError("CallerContext requires a non-empty account_id")


@dataclass
class Event:
    """Standard event envelope for notifications."""

    event_id: str
    event_type: str  # entity.action (e.g., property.transferred)
    event_time: datetime
    source: str  # Component that decided to emit
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
