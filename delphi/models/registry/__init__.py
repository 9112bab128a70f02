"""Registry domain models."""

from delphi.models.registry.account import Account
from delphi.models.registry.enums import EventType, Outcome, TransferKind
from delphi.models.registry.property import (
    UNATTESTED,
    Attestation,
    AttestationStatus,
    Property,
    PropertyDetail,
    TransferRecord,
)
from delphi.models.registry.property_type import PropertyType

__all__ = [
    "UNATTESTED",
    "Account",
    "Attestation",
    "AttestationStatus",
    "EventType",
    "Outcome",
    "Property",
    "PropertyDetail",
    "PropertyType",
    "TransferKind",
    "TransferRecord",
]
