"""Pytest configuration and fixtures."""

import pytest

from delphi.models.base import CallerContext
from delphi.registry.ledger import Ledger
from delphi.sinks.memory import MemorySink


@pytest.fixture
def sink() -> MemorySink:
    """Memory sink capturing every notification."""
    return MemorySink()


@pytest.fixture
def ledger(sink: MemorySink) -> Ledger:
    """Fresh in-memory ledger for each test."""
    return Ledger(sink=sink)


@pytest.fixture
def alice() -> CallerContext:
    return CallerContext("alice")


@pytest.fixture
def bob() -> CallerContext:
    """Authority that registers property types."""
    return CallerContext("bob-land-office")


@pytest.fixture
def carol() -> CallerContext:
    return CallerContext("carol")


@pytest.fixture
def residential(ledger: Ledger, bob: CallerContext) -> bytes:
    """Type id ``residential`` registered by bob."""
    ledger.register_ptype(bob, b"residential", b"QmRequirementsResidential")
    return b"residential"


@pytest.fixture
def lot_42(ledger: Ledger, alice: CallerContext, residential: bytes) -> bytes:
    """Alice's claim ``lot-42`` under ``residential``."""
    ledger.register_claim(alice, residential, b"lot-42", b"QmAliceDeed")
    return b"lot-42"
