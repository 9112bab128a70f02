"""Delimited byte-string listings for external consumers.

Layout, with FS the field delimiter and RS the record delimiter:

* property types:     ``type_id FS requirements_addr RS type_id FS ...``
* claims:             ``property_id RS property_id ...``
* attestation status: ``owner FS owner ... RS timestamp FS authority``

Every listing is b"" when there is nothing to report. That includes the
attestation status of an unknown property and of one that was never
transferred nor signed.

Payloads are opaque caller bytes, so a payload containing a delimiter
would make a listing ambiguous. Components call ``check`` or
``check_account`` on whatever a listing will later carry before storing it,
so encoding stored data does not fail.
"""

from __future__ import annotations

from typing import Iterable

from delphi.config import WireConfig
from delphi.exceptions import DelimiterCollisionError
from delphi.models.registry import AttestationStatus, PropertyType


class DelimitedCodec:
    """Encode and decode the two-level delimited listings."""

    def __init__(self, wire: WireConfig | None = None) -> None:
        wire = wire or WireConfig()
        self.field_delimiter = wire.field_delimiter
        self.record_delimiter = wire.record_delimiter

    def check(self, payload: bytes) -> bytes:
        """Return ``payload`` unchanged, or raise if it holds a delimiter."""
        if self.field_delimiter in payload or self.record_delimiter in payload:
            raise DelimiterCollisionError(f"Payload {payload!r} contains a wire delimiter")
        return payload

    def check_account(self, account_id: str) -> str:
        self.check(account_id.encode("utf-8"))
        return account_id

    def _join_fields(self, values: Iterable[bytes]) -> bytes:
        return self.field_delimiter.join(self.check(v) for v in values)

    def _split(self, data: bytes, delimiter: bytes) -> list[bytes]:
        return data.split(delimiter) if data else []

    # Property types
    def encode_property_types(self, types: Iterable[PropertyType]) -> bytes:
        return self.record_delimiter.join(
            self._join_fields((ptype.type_id, ptype.requirements_addr)) for ptype in types
        )

    def decode_property_types(self, data: bytes) -> list[tuple[bytes, bytes]]:
        """Return (type_id, requirements_addr) pairs."""
        pairs = []
        for record in self._split(data, self.record_delimiter):
            type_id, _, addr = record.partition(self.field_delimiter)
            pairs.append((type_id, addr))
        return pairs

    # Claims
    def encode_claims(self, property_ids: Iterable[bytes]) -> bytes:
        return self.record_delimiter.join(self.check(pid) for pid in property_ids)

    def decode_claims(self, data: bytes) -> list[bytes]:
        return self._split(data, self.record_delimiter)

    # Attestation
    def encode_attestation(self, status: AttestationStatus) -> bytes:
        if status == AttestationStatus():
            return b""
        owners = self._join_fields(owner.encode("utf-8") for owner in status.previous_owners)
        authority = (status.authority or "").encode("utf-8")
        tail = self._join_fields((str(status.asserted_at).encode("ascii"), authority))
        return owners + self.record_delimiter + tail

    def decode_attestation(self, data: bytes) -> AttestationStatus:
        if not data:
            return AttestationStatus()
        owners_part, _, tail = data.partition(self.record_delimiter)
        timestamp, _, authority = tail.partition(self.field_delimiter)
        return AttestationStatus(
            previous_owners=tuple(
                owner.decode("utf-8") for owner in self._split(owners_part, self.field_delimiter)
            ),
            asserted_at=int(timestamp or b"0"),
            authority=authority.decode("utf-8") or None,
        )
