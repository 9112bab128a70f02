"""Read-only projections for external callers."""

from delphi.models.registry import AttestationStatus, PropertyDetail, PropertyType
from delphi.store.registry import RegistryStore


class QueryFacade:
    """Thin reads over the registry tables. Absence is never an error."""

    def __init__(self, store: RegistryStore) -> None:
        self.store = store

    def property_detail(self, property_id: bytes) -> PropertyDetail | None:
        prop = self.store.get_property(property_id)
        return PropertyDetail.from_property(prop) if prop is not None else None

    def attestation_status(self, property_id: bytes) -> AttestationStatus:
        prop = self.store.get_property(property_id)
        return AttestationStatus.from_property(prop) if prop is not None else AttestationStatus()

    def account_exists(self, account_id: str) -> tuple[bool, bytes]:
        account = self.store.get_account(account_id)
        return (True, account.name) if account is not None else (False, b"")

    def ptype_documents(self, authority: str) -> list[PropertyType]:
        return self.store.get_authority_types(authority) or []

    def property_claims(self, type_id: bytes) -> list[bytes]:
        return self.store.get_claim_ids(type_id)

    def summary(self) -> dict[str, int]:
        return self.store.summary()
