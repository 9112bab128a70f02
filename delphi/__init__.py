"""Property-title registry and attestation ledger."""

from delphi.models.base import CallerContext
from delphi.registry.ledger import Ledger

__version__ = "0.1.0"

__all__ = ["CallerContext", "Ledger", "__version__"]
