"""Tests for the account directory and the property-type catalog."""

import pytest

from delphi.config import DelphiConfig, PolicyConfig
from delphi.exceptions import DuplicatePropertyTypeError
from delphi.models.base import CallerContext
from delphi.models.registry import EventType
from delphi.registry.ledger import Ledger
from delphi.sinks.memory import MemorySink


class TestAccountDirectory:
    """Tests for account registration and lookup."""

    def test_register_and_exists(self, ledger: Ledger, alice: CallerContext) -> None:
        account = ledger.register_account(alice, b"Alice", 1_700_000_000_000)

        assert account.account_id == "alice"
        assert ledger.account_exists(alice) == (True, b"Alice")

    def test_unknown_account(self, ledger: Ledger, carol: CallerContext) -> None:
        assert ledger.account_exists(carol) == (False, b"")

    def test_reregistration_overwrites(self, ledger: Ledger, alice: CallerContext) -> None:
        ledger.register_account(alice, b"Alice", 1)
        ledger.register_account(alice, b"Alice Smith", 2)

        account = ledger.accounts.get("alice")

        assert account.name == b"Alice Smith"
        assert account.created_at == 2

    def test_names_are_not_unique(self, ledger: Ledger, alice: CallerContext, carol: CallerContext) -> None:
        ledger.register_account(alice, b"Sam", 1)
        ledger.register_account(carol, b"Sam", 2)

        assert ledger.account_exists(alice) == (True, b"Sam")
        assert ledger.account_exists(carol) == (True, b"Sam")

    def test_emits_account_created(self, ledger: Ledger, sink: MemorySink, alice: CallerContext) -> None:
        ledger.register_account(alice, b"Alice", 1)

        [event] = sink.events_of(EventType.ACCOUNT_CREATED.value)
        assert event.subject == "alice"
        assert event.data == {"account_id": "alice", "name": "Alice"}
        assert event.metadata == {"caller": "alice"}


class TestPropertyTypeCatalog:
    """Tests for property-type registration and listing."""

    def test_register_type(self, ledger: Ledger, bob: CallerContext) -> None:
        ptype = ledger.register_ptype(bob, b"residential", b"QmReq")

        assert ptype.authority == "bob-land-office"
        assert ledger.catalog.owns("bob-land-office", b"residential")
        assert ledger.catalog.get(b"residential") == ptype

    def test_list_types_wire_form(self, ledger: Ledger, bob: CallerContext) -> None:
        ledger.register_ptype(bob, b"residential", b"QmA")
        ledger.register_ptype(bob, b"farm", b"QmB")

        assert ledger.ptype_documents("bob-land-office") == b"residential\x1fQmA\x1efarm\x1fQmB"

    def test_unknown_authority_lists_nothing(self, ledger: Ledger) -> None:
        assert ledger.ptype_documents("nobody") == b""
        assert ledger.catalog.types_for("nobody") == []

    def test_duplicate_ids_accumulate(self, ledger: Ledger, bob: CallerContext, carol: CallerContext) -> None:
        ledger.register_ptype(bob, b"residential", b"QmV1")
        ledger.register_ptype(bob, b"residential", b"QmV2")
        ledger.register_ptype(carol, b"residential", b"QmCarol")

        assert len(ledger.catalog.types_for("bob-land-office")) == 2
        assert len(ledger.catalog.types_for("carol")) == 1

    def test_duplicate_ids_rejected_by_policy(self, bob: CallerContext) -> None:
        config = DelphiConfig(policy=PolicyConfig(reject_duplicate_type_ids=True))
        ledger = Ledger(config=config)
        ledger.register_ptype(bob, b"residential", b"QmV1")

        with pytest.raises(DuplicatePropertyTypeError):
            ledger.register_ptype(bob, b"residential", b"QmV2")

        assert len(ledger.catalog.types_for("bob-land-office")) == 1

    def test_emits_type_registered(self, ledger: Ledger, sink: MemorySink, bob: CallerContext) -> None:
        ledger.register_ptype(bob, b"residential", b"QmReq")

        [event] = sink.events_of(EventType.PROPERTY_TYPE_REGISTERED.value)
        assert event.subject == "residential"
        assert event.data["requirements_addr"] == "QmReq"
        assert event.source == "catalog"
