"""Enumeration types for registry entities."""

from enum import Enum


class Outcome(str, Enum):
    """Result of a mutation that targets an existing record."""

    APPLIED = "APPLIED"
    NOT_FOUND = "NOT_FOUND"

    def __bool__(self) -> bool:
        return self is Outcome.APPLIED


class TransferKind(str, Enum):
    WHOLE = "WHOLE"
    SPLIT = "SPLIT"


class EventType(str, Enum):
    ACCOUNT_CREATED = "account.created"
    PROPERTY_TYPE_REGISTERED = "property_type.registered"
    PROPERTY_CLAIM_REGISTERED = "property_claim.registered"
    PROPERTY_TRANSFERRED = "property.transferred"
    PROPERTY_DOCUMENT_SIGNED = "property_document.signed"

    @property
    def family(self) -> str:
        """Topic suffix shared by events about the same entity."""
        return self.value.split(".")[0].replace("_", "-")
