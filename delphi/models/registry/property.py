"""Canonical property record and its read projections."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TransferRecord:
    """One entry of a property's provenance: who gave it up, and when."""

    from_account: str
    timestamp: int


@dataclass(frozen=True)
class Attestation:
    """Authority sign-off on the current claim."""

    timestamp: int = 0
    authority: str | None = None

    @property
    def is_attested(self) -> bool:
        return self.authority is not None


UNATTESTED = Attestation()


@dataclass
class Property:
    """Ownership record for a single property id.

    ``transfer_history`` is append-only for the life of the record; a split
    retires the record and starts two new ones with a fresh history.
    """

    property_id: bytes
    claimer: str
    claim_addr: bytes  # IPFS CID of the ownership document
    type_id: bytes
    transfer_history: list[TransferRecord] = field(default_factory=list)
    attestation: Attestation = UNATTESTED

    @property
    def previous_owners(self) -> list[str]:
        return [record.from_account for record in self.transfer_history]


@dataclass(frozen=True)
class PropertyDetail:
    """Read-only view of a live property."""

    property_id: bytes
    claimer: str
    claim_addr: bytes
    type_id: bytes
    history_length: int
    attestation: Attestation

    @classmethod
    def from_property(cls, prop: Property) -> "PropertyDetail":
        return cls(
            property_id=prop.property_id,
            claimer=prop.claimer,
            claim_addr=prop.claim_addr,
            type_id=prop.type_id,
            history_length=len(prop.transfer_history),
            attestation=prop.attestation,
        )


@dataclass(frozen=True)
class AttestationStatus:
    """Provenance plus current sign-off of a property.

    An unknown property yields the empty status: no owners, timestamp 0.
    """

    previous_owners: tuple[str, ...] = ()
    asserted_at: int = 0
    authority: str | None = None

    @property
    def is_attested(self) -> bool:
        return self.authority is not None

    @classmethod
    def from_property(cls, prop: Property) -> "AttestationStatus":
        return cls(
            previous_owners=tuple(prop.previous_owners),
            asserted_at=prop.attestation.timestamp,
            authority=prop.attestation.authority,
        )
