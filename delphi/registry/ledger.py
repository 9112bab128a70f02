"""External interface of the registry.

``Ledger`` wires the account directory, type catalog, claim registry,
transfer engine and query façade around one ``RegistryStore`` and exposes
the operations an invocation layer calls. Every mutating operation takes the
authenticated ``CallerContext`` explicitly.

Listings (``ptype_documents``, ``property_claims``, ``attestation_status``)
come back in the delimited wire form; ``Ledger.query`` gives the same data
as dataclasses.
"""

from __future__ import annotations

import logging
from typing import Any

from delphi.config import DelphiConfig
from delphi.models.base import CallerContext
from delphi.models.registry import Account, Outcome, Property, PropertyDetail, PropertyType
from delphi.registry.accounts import AccountDirectory
from delphi.registry.catalog import PropertyTypeCatalog
from delphi.registry.claims import ClaimRegistry
from delphi.registry.codec import DelimitedCodec
from delphi.registry.notifications import Notifier
from delphi.registry.query import QueryFacade
from delphi.registry.transfer import TransferEngine
from delphi.sinks import build_sink
from delphi.store.kv import KeyValueStore
from delphi.store.registry import RegistryStore

logger = logging.getLogger(__name__)


class Ledger:
    """Property-title registry and attestation ledger."""

    def __init__(
        self,
        kv: KeyValueStore | None = None,
        sink: Any | None = None,
        config: DelphiConfig | None = None,
    ) -> None:
        self.config = config or DelphiConfig()
        self.store = RegistryStore(kv)
        self.notifier = Notifier(sink, topic_prefix=self.config.topic_prefix)
        self.codec = DelimitedCodec(self.config.wire)

        policy = self.config.policy
        self.accounts = AccountDirectory(self.store, self.notifier)
        self.catalog = PropertyTypeCatalog(self.store, self.notifier, self.codec, policy)
        self.engine = TransferEngine(self.store, self.notifier, policy, self.codec)
        self.claims = ClaimRegistry(self.store, self.engine, self.notifier, self.codec)
        self.query = QueryFacade(self.store)

    @classmethod
    def from_config(cls, config: DelphiConfig, kv: KeyValueStore | None = None) -> "Ledger":
        """Build a ledger whose notifications go to the sink ``config`` names."""
        return cls(kv=kv, sink=build_sink(config), config=config)

    @property
    def sink(self) -> Any:
        return self.notifier.sink

    # Accounts
    def register_account(
        self,
        caller: CallerContext,
        name: bytes,
        timestamp: int,
        is_authority: bool = False,
    ) -> Account:
        return self.accounts.register(caller, name, timestamp, is_authority)

    def account_exists(self, caller: CallerContext) -> tuple[bool, bytes]:
        return self.accounts.exists(caller.account_id)

    # Property types
    def register_ptype(
        self,
        caller: CallerContext,
        type_id: bytes,
        requirements_addr: bytes,
    ) -> PropertyType:
        return self.catalog.register_type(caller, type_id, requirements_addr)

    def ptype_documents(self, authority: str) -> bytes:
        return self.catalog.list_types(authority)

    # Claims
    def register_claim(
        self,
        caller: CallerContext,
        type_id: bytes,
        property_id: bytes,
        claim_addr: bytes,
    ) -> Property:
        return self.claims.register_claim(caller, type_id, property_id, claim_addr)

    def property_claims(self, type_id: bytes) -> bytes:
        return self.claims.list_claims(type_id)

    def property_detail(self, property_id: bytes) -> PropertyDetail | None:
        return self.query.property_detail(property_id)

    # Transfers and attestation
    def transfer_property(
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
        return self.engine.transfer(
            caller,
            property_id,
            recipient,
            senders_claim_addr,
            senders_new_property_id=senders_new_property_id,
            recipients_claim_addr=recipients_claim_addr,
            recipients_new_property_id=recipients_new_property_id,
            timestamp=timestamp,
        )

    def sign_document(
        self,
        caller: CallerContext,
        property_id: bytes,
        type_id: bytes,
        timestamp: int,
    ) -> Outcome:
        return self.engine.sign(caller, property_id, type_id, timestamp)

    def attestation_status(self, property_id: bytes) -> bytes:
        return self.codec.encode_attestation(self.query.attestation_status(property_id))

    def close(self) -> None:
        """Close the notification sink."""
        self.notifier.close()
        logger.info("Ledger closed: %s", self.store.summary())
