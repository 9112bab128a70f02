"""Generators for accounts, property types and claims."""

import random

from delphi.generators.base import BaseGenerator
from delphi.models.registry import Account, Property, PropertyType

PROPERTY_CATEGORIES = (
    "residential",
    "agricultural",
    "commercial",
    "industrial",
    "leasehold",
    "freehold",
)


class AccountGenerator(BaseGenerator):
    """Generate registry accounts (claimants and authorities)."""

    def generate(self, is_authority: bool = False) -> Account:
        if is_authority:
            name = f"{self.fake.city()} Land Registry"
        else:
            name = self.fake.name()
        return Account(
            account_id=self.fake.uuid4(),
            name=name.encode("utf-8"),
            created_at=self.timestamp(),
            is_authority=is_authority,
        )


class PropertyTypeGenerator(BaseGenerator):
    """Generate property-type schemas for an authority."""

    def generate(self, authority: str) -> PropertyType:
        category = random.choice(PROPERTY_CATEGORIES)
        region = self.fake.state_abbr()
        return PropertyType(
            type_id=f"{category}-{region}".lower().encode("ascii"),
            requirements_addr=self.document_addr(),
            authority=authority,
        )


class ClaimGenerator(BaseGenerator):
    """Generate ownership claims against a property type."""

    def property_id(self) -> bytes:
        return self.fake.bothify("lot-####-??", letters="ABCDEFGHJKLMNPQRSTUVWXYZ").encode("ascii")

    def generate(self, claimer: str, type_id: bytes) -> Property:
        return Property(
            property_id=self.property_id(),
            claimer=claimer,
            claim_addr=self.document_addr(),
            type_id=type_id,
        )
