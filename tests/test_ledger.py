"""End-to-end tests through the ``Ledger`` interface and query façade."""

from unittest.mock import MagicMock, patch

from delphi.config import DelphiConfig
from delphi.models.base import CallerContext
from delphi.models.registry import UNATTESTED, AttestationStatus, EventType, Outcome
from delphi.registry.ledger import Ledger
from delphi.sinks.console import ConsoleSink
from delphi.sinks.memory import MemorySink


class TestRoundTrip:
    """The full life of one property."""

    def test_claim_sign_transfer(
        self,
        ledger: Ledger,
        sink: MemorySink,
        alice: CallerContext,
        bob: CallerContext,
        carol: CallerContext,
    ) -> None:
        ledger.register_account(alice, b"Alice", 1_000)
        ledger.register_ptype(bob, b"residential", b"QmRequirements")
        ledger.register_claim(alice, b"residential", b"lot-42", b"QmAliceDeed")

        claims = ledger.codec.decode_claims(ledger.property_claims(b"residential"))
        assert claims.count(b"lot-42") == 1

        assert ledger.sign_document(bob, b"lot-42", b"residential", 1_700)
        status = ledger.codec.decode_attestation(ledger.attestation_status(b"lot-42"))
        assert status.authority == "bob-land-office"
        assert status.asserted_at == 1_700

        assert ledger.transfer_property(alice, b"lot-42", "carol", b"QmCarolDeed", timestamp=2_000)
        detail = ledger.property_detail(b"lot-42")
        assert detail.claimer == "carol"
        assert detail.history_length == 1
        assert detail.attestation == UNATTESTED

        assert [event.event_type for event in sink.events] == [
            EventType.ACCOUNT_CREATED.value,
            EventType.PROPERTY_TYPE_REGISTERED.value,
            EventType.PROPERTY_CLAIM_REGISTERED.value,
            EventType.PROPERTY_DOCUMENT_SIGNED.value,
            EventType.PROPERTY_TRANSFERRED.value,
        ]
        ledger.store.assert_consistent()


class TestQueries:
    """Tests for read operations."""

    def test_account_exists(self, ledger: Ledger, alice: CallerContext, carol: CallerContext) -> None:
        ledger.register_account(alice, b"Alice", 1_000)

        assert ledger.account_exists(alice) == (True, b"Alice")
        assert ledger.account_exists(carol) == (False, b"")

    def test_property_detail_absent(self, ledger: Ledger) -> None:
        assert ledger.property_detail(b"nowhere") is None

    def test_attestation_status_lists_previous_owners(
        self, ledger: Ledger, alice: CallerContext, carol: CallerContext, lot_42: bytes
    ) -> None:
        ledger.transfer_property(alice, lot_42, "carol", b"Qm1", timestamp=1)
        ledger.transfer_property(carol, lot_42, "dave", b"Qm2", timestamp=2)

        assert ledger.attestation_status(lot_42) == b"alice\x1fcarol\x1e0\x1f"
        assert ledger.query.attestation_status(lot_42).previous_owners == ("alice", "carol")

    def test_attestation_status_unknown_property(self, ledger: Ledger) -> None:
        assert ledger.query.attestation_status(b"nowhere") == AttestationStatus()
        assert ledger.attestation_status(b"nowhere") == b""

    def test_attestation_status_fresh_claim_is_empty(self, ledger: Ledger, lot_42: bytes) -> None:
        assert ledger.attestation_status(lot_42) == ledger.property_claims(b"unknown") == b""

    def test_ptype_documents(self, ledger: Ledger, bob: CallerContext, residential: bytes) -> None:
        ledger.register_ptype(bob, b"farm", b"QmFarm")

        assert ledger.ptype_documents("bob-land-office") == (
            b"residential\x1fQmRequirementsResidential\x1efarm\x1fQmFarm"
        )
        assert ledger.ptype_documents("nobody") == b""

    def test_property_claims_unknown_type(self, ledger: Ledger) -> None:
        assert ledger.property_claims(b"unknown") == b""

    def test_summary(self, ledger: Ledger, lot_42: bytes) -> None:
        summary = ledger.query.summary()

        assert summary["properties"] == 1
        assert summary["property_types"] == 1
        assert summary["claim_index_entries"] == 1

    def test_outcome_truthiness(self, ledger: Ledger, bob: CallerContext, residential: bytes) -> None:
        outcome = ledger.sign_document(bob, b"nowhere", residential, 1)

        assert outcome is Outcome.NOT_FOUND
        assert not outcome


class TestConstruction:
    """Tests for wiring a ledger from configuration."""

    def test_defaults_to_memory_sink(self) -> None:
        ledger = Ledger()

        assert isinstance(ledger.sink, MemorySink)
        assert ledger.notifier.topic_prefix == "dev.delphi"

    def test_from_config_console(self) -> None:
        ledger = Ledger.from_config(DelphiConfig(sink="console"))

        assert isinstance(ledger.sink, ConsoleSink)

    def test_topic_prefix_from_config(self, alice: CallerContext) -> None:
        sink = MemorySink()
        ledger = Ledger(sink=sink, config=DelphiConfig(topic_prefix="prod.registry"))

        ledger.register_claim(alice, b"residential", b"lot-1", b"Qm")

        assert sink.topics() == {"prod.registry.property-claim"}

    @patch("delphi.sinks.kafka.Producer")
    def test_from_config_kafka(self, mock_producer_class: MagicMock, alice: CallerContext) -> None:
        mock_producer = MagicMock()
        mock_producer.flush.return_value = 0
        mock_producer_class.return_value = mock_producer

        ledger = Ledger.from_config(DelphiConfig(sink="kafka"))
        ledger.register_claim(alice, b"residential", b"lot-1", b"Qm")
        ledger.close()

        call_kwargs = mock_producer.produce.call_args.kwargs
        assert call_kwargs["topic"] == "dev.delphi.property-claim"
        assert call_kwargs["key"] == b"lot-1"
        mock_producer.flush.assert_called()

    def test_close_closes_sink(self, ledger: Ledger, sink: MemorySink) -> None:
        ledger.close()

        assert sink.closed
