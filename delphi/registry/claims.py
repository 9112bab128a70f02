"""Claim registry: initial, unattested ownership claims."""

import logging

from delphi.models.base import CallerContext
from delphi.models.registry import EventType, Property
from delphi.registry.codec import DelimitedCodec
from delphi.registry.notifications import Notifier
from delphi.registry.transfer import TransferEngine
from delphi.store.registry import RegistryStore

logger = logging.getLogger(__name__)


class ClaimRegistry:
    """Accept claims against a property type and list them per type.

    Records are written through the ``TransferEngine``, which owns the
    property table and the claim index.
    """

    def __init__(
        self,
        store: RegistryStore,
        engine: TransferEngine,
        notifier: Notifier,
        codec: DelimitedCodec | None = None,
    ) -> None:
        self.store = store
        self.engine = engine
        self.notifier = notifier
        self.codec = codec or DelimitedCodec()

    def register_claim(
        self,
        caller: CallerContext,
        type_id: bytes,
        property_id: bytes,
        claim_addr: bytes,
    ) -> Property:
        """Record ``caller`` as claimer of ``property_id``.

        No existence check: a claim on an id already in use replaces the
        record (last writer wins). The type's index entry holds each id once.
        A ``property_id`` containing a wire delimiter raises
        ``DelimiterCollisionError`` and nothing is stored.
        """
        prop = Property(
            property_id=self.codec.check(property_id),
            claimer=caller.account_id,
            claim_addr=claim_addr,
            type_id=type_id,
        )
        with self.store.batch() as tables:
            self.engine.insert_claim(tables, prop)
            self.notifier.emit(
                EventType.PROPERTY_CLAIM_REGISTERED,
                caller,
                subject=property_id,
                data={
                    "claimer": caller.account_id,
                    "type_id": type_id,
                    "property_id": property_id,
                    "claim_addr": claim_addr,
                },
                source="claims",
            )

        logger.info(
            "%s claimed %r under %r",
            caller.account_id,
            property_id,
            type_id,
            extra={"caller": caller.account_id, "property_id": property_id, "type_id": type_id},
        )
        return prop

    def claim_ids(self, type_id: bytes) -> list[bytes]:
        return self.store.get_claim_ids(type_id)

    def claims_for(self, type_id: bytes) -> list[Property]:
        """Live records registered under ``type_id``, in index order."""
        props = []
        for pid in self.claim_ids(type_id):
            prop = self.store.get_property(pid)
            if prop is not None:
                props.append(prop)
        return props

    def list_claims(self, type_id: bytes) -> bytes:
        """Delimited listing of live property ids; b"" when unknown."""
        return self.codec.encode_claims(self.claim_ids(type_id))
