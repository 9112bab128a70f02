"""Provenance and transfer engine.

Owns every write to the property table and the claim index. A whole
transfer rewrites one record in place; a partial transfer retires the
record and mints two, each seeded with a fresh single-entry history.
Either way ownership changed, so attestation starts over.

All writes of one operation go through a single ``RegistryStore.batch()``
and reach storage together, so readers never see the claim index pointing
at a deleted record. The notification is sent before the batch commits;
a sink that raises discards the pending writes. The index insert is
de-duplicated, which makes a retried split safe.
"""

from __future__ import annotations

import logging

from delphi.config import PolicyConfig
from delphi.exceptions import (
    CannotTransferToSelf,
    InvalidTransferError,
    NotPropertyOwnerError,
    UnauthorizedAccount,
)
from delphi.models.base import CallerContext
from delphi.models.registry import (
    UNATTESTED,
    Attestation,
    EventType,
    Outcome,
    Property,
    TransferKind,
    TransferRecord,
)
from delphi.registry.codec import DelimitedCodec
from delphi.registry.notifications import Notifier
from delphi.store.registry import RegistryStore, RegistryTables

logger = logging.getLogger(__name__)


class TransferEngine:
    """Create, transfer, split and attest property records."""

    def __init__(
        self,
        store: RegistryStore,
        notifier: Notifier,
        policy: PolicyConfig | None = None,
        codec: DelimitedCodec | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.policy = policy or PolicyConfig()
        self.codec = codec or DelimitedCodec()

    def insert_claim(self, tables: RegistryTables, prop: Property) -> None:
        """Store a freshly claimed record and index it under its type.

        Writes go to ``tables``, the caller's open batch. The record at
        ``prop.property_id`` is replaced if one exists; when the replaced
        record had another type, its old index entry is cleaned up.
        """
        previous = _store_record(tables, prop)
        if previous is not None:
            logger.info(
                "Claim on %r replaced the record held by %s",
                prop.property_id,
                previous.claimer,
                extra={"property_id": prop.property_id, "caller": prop.claimer},
            )

    def transfer(
        self,
        caller: CallerContext,
        property_id: bytes,
        recipient: str,
        senders_claim_addr: bytes,
        senders_new_property_id: bytes | None = None,
        recipients_claim_addr: bytes | None = None,
        recipients_new_property_id: bytes | None = None,
        timestamp: int = 0,
    ) -> Outcome:
        """Hand ``property_id`` to ``recipient``, whole or split.

        Passing ``recipients_claim_addr`` makes this a partial transfer: the
        original record is retired and the caller keeps
        ``senders_new_property_id`` while the recipient gets
        ``recipients_new_property_id``.

        Raises
        ------
        CannotTransferToSelf
            ``recipient`` is the caller.
        DelimiterCollisionError
            The caller's id or a new split id contains a wire delimiter.
        InvalidTransferError
            A split is missing a new id or reuses one id for both parts.
        NotPropertyOwnerError
            ``require_claimer_to_transfer`` is set and the caller is not
            the current claimer.
        """
        if recipient == caller.account_id:
            raise CannotTransferToSelf(f"{caller.account_id} cannot transfer {property_id!r} to itself")

        # Sender ids appear in attestation listings
        self.codec.check_account(caller.account_id)
        split = recipients_claim_addr is not None
        if split:
            self._check_split_ids(property_id, senders_new_property_id, recipients_new_property_id)

        record = TransferRecord(from_account=caller.account_id, timestamp=timestamp)
        kind = TransferKind.SPLIT if split else TransferKind.WHOLE
        data = {
            "sender": caller.account_id,
            "recipient": recipient,
            "property_id": property_id,
            "kind": kind,
            "timestamp": timestamp,
        }
        if split:
            data["senders_property_id"] = senders_new_property_id
            data["recipients_property_id"] = recipients_new_property_id

        with self.store.batch() as tables:
            prop = tables.get_property(property_id)
            if prop is None:
                logger.debug(
                    "Transfer of unknown property %r ignored",
                    property_id,
                    extra={"caller": caller.account_id, "property_id": property_id},
                )
                return Outcome.NOT_FOUND

            if self.policy.require_claimer_to_transfer and prop.claimer != caller.account_id:
                raise NotPropertyOwnerError(
                    f"{caller.account_id} is not the claimer of {property_id!r}"
                )

            if split:
                self._split(
                    tables,
                    prop,
                    caller,
                    recipient,
                    record,
                    senders_claim_addr,
                    senders_new_property_id,
                    recipients_claim_addr,
                    recipients_new_property_id,
                )
            else:
                prop.claimer = recipient
                prop.claim_addr = senders_claim_addr
                prop.transfer_history.append(record)
                prop.attestation = UNATTESTED
                tables.put_property(prop)

            self.notifier.emit(
                EventType.PROPERTY_TRANSFERRED,
                caller,
                subject=property_id,
                data=data,
                source="transfer",
            )

        logger.info(
            "Transferred %r from %s to %s (%s)",
            property_id,
            caller.account_id,
            recipient,
            kind.value.lower(),
            extra={"caller": caller.account_id, "recipient": recipient, "property_id": property_id},
        )
        return Outcome.APPLIED

    def _check_split_ids(
        self,
        property_id: bytes,
        senders_new_property_id: bytes | None,
        recipients_new_property_id: bytes | None,
    ) -> None:
        if not senders_new_property_id or not recipients_new_property_id:
            raise InvalidTransferError(
                f"Splitting {property_id!r} requires new property ids for both parts"
            )
        if senders_new_property_id == recipients_new_property_id:
            raise InvalidTransferError(
                f"Splitting {property_id!r} needs two distinct ids, got {senders_new_property_id!r} twice"
            )
        self.codec.check(senders_new_property_id)
        self.codec.check(recipients_new_property_id)

    @staticmethod
    def _split(
        tables: RegistryTables,
        prop: Property,
        caller: CallerContext,
        recipient: str,
        record: TransferRecord,
        senders_claim_addr: bytes,
        senders_new_property_id: bytes,
        recipients_claim_addr: bytes,
        recipients_new_property_id: bytes,
    ) -> None:
        # Order matters only inside the batch; storage sees one apply
        tables.remove_claim_id(prop.type_id, prop.property_id)
        tables.delete_property(prop.property_id)
        _store_record(
            tables,
            Property(
                property_id=senders_new_property_id,
                claimer=caller.account_id,
                claim_addr=senders_claim_addr,
                type_id=prop.type_id,
                transfer_history=[record],
            ),
        )
        _store_record(
            tables,
            Property(
                property_id=recipients_new_property_id,
                claimer=recipient,
                claim_addr=recipients_claim_addr,
                type_id=prop.type_id,
                transfer_history=[record],
            ),
        )

    def sign(
        self,
        caller: CallerContext,
        property_id: bytes,
        type_id: bytes,
        timestamp: int,
    ) -> Outcome:
        """Attest ``property_id`` on behalf of the authority owning ``type_id``.

        A caller that has registered types must own ``type_id``. A caller with
        no registered types at all is let through unless
        ``require_authority_to_sign`` is set.
        """
        owned = self.store.get_authority_types(caller.account_id)
        if owned is None:
            if self.policy.require_authority_to_sign:
                self._reject_signer(caller, property_id, type_id)
        elif not any(ptype.type_id == type_id for ptype in owned):
            self._reject_signer(caller, property_id, type_id)
        self.codec.check_account(caller.account_id)

        with self.store.batch() as tables:
            prop = tables.get_property(property_id)
            if prop is None:
                logger.debug(
                    "Signature on unknown property %r ignored",
                    property_id,
                    extra={"caller": caller.account_id, "property_id": property_id},
                )
                return Outcome.NOT_FOUND
            prop.attestation = Attestation(timestamp=timestamp, authority=caller.account_id)
            tables.put_property(prop)
            self.notifier.emit(
                EventType.PROPERTY_DOCUMENT_SIGNED,
                caller,
                subject=property_id,
                data={
                    "authority": caller.account_id,
                    "property_id": property_id,
                    "type_id": type_id,
                    "timestamp": timestamp,
                },
                source="transfer",
            )

        logger.info(
            "%s signed %r",
            caller.account_id,
            property_id,
            extra={"caller": caller.account_id, "property_id": property_id, "type_id": type_id},
        )
        return Outcome.APPLIED

    @staticmethod
    def _reject_signer(caller: CallerContext, property_id: bytes, type_id: bytes) -> None:
        logger.warning(
            "Rejected signature by %s on %r: type %r not owned",
            caller.account_id,
            property_id,
            type_id,
            extra={"caller": caller.account_id, "property_id": property_id, "type_id": type_id},
        )
        raise UnauthorizedAccount(f"{caller.account_id} does not own property type {type_id!r}")


def _store_record(tables: RegistryTables, prop: Property) -> Property | None:
    """Write ``prop`` at its id and index it, returning the record it replaced.

    A replaced record of another type is dropped from that type's index.
    """
    previous = tables.get_property(prop.property_id)
    if previous is not None and previous.type_id != prop.type_id:
        tables.remove_claim_id(previous.type_id, prop.property_id)
    tables.put_property(prop)
    tables.add_claim_id(prop.type_id, prop.property_id)
    return previous
