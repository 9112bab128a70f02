"""Property type schema registered by an authority."""

from dataclasses import dataclass


@dataclass
class PropertyType:
    """Property-type schema.

    ``requirements_addr`` points at an external requirements document
    (typically an IPFS CID).
    """

    type_id: bytes
    requirements_addr: bytes
    authority: str
