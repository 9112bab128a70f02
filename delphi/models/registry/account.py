"""Account model for the identity directory."""

from dataclasses import dataclass


@dataclass
class Account:
    """Registered identity.

    ``account_id`` is the opaque identifier supplied by the platform;
    ``name`` is whatever display bytes the owner registered.
    """

    account_id: str
    name: bytes
    created_at: int  # caller-supplied timestamp, ms since epoch
    is_authority: bool = False
