"""Registry components and the ledger that exposes them."""

from delphi.registry.accounts import AccountDirectory
from delphi.registry.catalog import PropertyTypeCatalog
from delphi.registry.claims import ClaimRegistry
from delphi.registry.codec import DelimitedCodec
from delphi.registry.ledger import Ledger
from delphi.registry.notifications import Notifier
from delphi.registry.query import QueryFacade
from delphi.registry.transfer import TransferEngine

__all__ = [
    "AccountDirectory",
    "ClaimRegistry",
    "DelimitedCodec",
    "Ledger",
    "Notifier",
    "PropertyTypeCatalog",
    "QueryFacade",
    "TransferEngine",
]
