"""Domain models for the property registry."""

from delphi.models.base import CallerContext, Event

__all__ = ["CallerContext", "Event"]
