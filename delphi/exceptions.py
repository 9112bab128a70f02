"""Custom exception hierarchy for delphi."""


class DelphiError(Exception):
    """Base exception for all delphi errors."""


class CannotTransferToSelf(DelphiError):
    """Raised when a transfer names the caller as its recipient."""


class UnauthorizedAccount(DelphiError):
    """Raised when a signer does not own the referenced property type."""


class InvalidTransferError(DelphiError):
    """Raised when the arguments of a split transfer are incomplete or collide."""


class NotPropertyOwnerError(DelphiError):
    """Raised when a non-claimer transfers a property under the strict policy."""


class DuplicatePropertyTypeError(DelphiError):
    """Raised when an authority re-registers a type id under the strict policy."""


class StorageError(DelphiError):
    """Raised when the key-value store rejects a write."""


class IndexConsistencyError(StorageError):
    """Raised when the claim index disagrees with the live property records."""


class DelimiterCollisionError(DelphiError):
    """Raised when a payload contains one of the wire delimiters."""


class ConfigurationError(DelphiError):
    """Raised when configuration is invalid or missing."""


class SinkError(DelphiError):
    """Raised when a sink operation fails."""
