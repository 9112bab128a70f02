"""Registry tables and indexes over a key-value store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from delphi.exceptions import IndexConsistencyError
from delphi.models.registry import Account, Property, PropertyType
from delphi.store.kv import InMemoryKeyValueStore, KeyValueStore, WriteBatch

logger = logging.getLogger(__name__)

# Key namespaces
ACCOUNTS = "account"
PROPERTIES = "property"
PROPERTY_TYPES = "ptype"
CLAIM_INDEX = "claims"
AUTHORITY_INDEX = "authority"


class RegistryTables:
    """Typed access to the registry's tables over any get/set/delete backend.

    Owns the two record tables (properties and property types by id), the
    account table and the two derived indexes (type id -> live property ids,
    authority -> registered types). Nothing else writes these keys.
    """

    def __init__(self, backend: KeyValueStore | WriteBatch) -> None:
        self._backend = backend

    # Accounts
    def get_account(self, account_id: str) -> Account | None:
        return self._backend.get((ACCOUNTS, account_id))

    def put_account(self, account: Account) -> None:
        self._backend.set((ACCOUNTS, account.account_id), account)

    # Property types
    def get_property_type(self, type_id: bytes) -> PropertyType | None:
        return self._backend.get((PROPERTY_TYPES, type_id))

    def get_authority_types(self, authority: str) -> list[PropertyType] | None:
        """Return the authority's registered types, or None if it has no entry."""
        return self._backend.get((AUTHORITY_INDEX, authority))

    def add_property_type(self, ptype: PropertyType) -> None:
        """Record ``ptype`` under its id and append it to its authority's entry."""
        types = self.get_authority_types(ptype.authority) or []
        types.append(ptype)
        self._backend.set((AUTHORITY_INDEX, ptype.authority), types)
        self._backend.set((PROPERTY_TYPES, ptype.type_id), ptype)

    # Properties
    def get_property(self, property_id: bytes) -> Property | None:
        return self._backend.get((PROPERTIES, property_id))

    def put_property(self, prop: Property) -> None:
        self._backend.set((PROPERTIES, prop.property_id), prop)

    def delete_property(self, property_id: bytes) -> None:
        self._backend.delete((PROPERTIES, property_id))

    def iter_properties(self) -> Iterator[Property]:
        for _, prop in self._backend.scan(PROPERTIES):
            yield prop

    # Claim index
    def get_claim_ids(self, type_id: bytes) -> list[bytes]:
        return self._backend.get((CLAIM_INDEX, type_id)) or []

    def add_claim_id(self, type_id: bytes, property_id: bytes) -> bool:
        """Add ``property_id`` to the type's entry unless already present.

        Returns True when the entry changed.
        """
        ids = self.get_claim_ids(type_id)
        if property_id in ids:
            return False
        ids.append(property_id)
        self._backend.set((CLAIM_INDEX, type_id), ids)
        return True

    def remove_claim_id(self, type_id: bytes, property_id: bytes) -> bool:
        """Filter ``property_id`` out of the type's entry.

        An entry left empty is dropped; a later insert recreates it.
        """
        ids = self.get_claim_ids(type_id)
        remaining = [pid for pid in ids if pid != property_id]
        if len(remaining) == len(ids):
            return False
        if remaining:
            self._backend.set((CLAIM_INDEX, type_id), remaining)
        else:
            self._backend.delete((CLAIM_INDEX, type_id))
        return True

    def iter_claim_index(self) -> Iterator[tuple[bytes, list[bytes]]]:
        for (_, type_id), ids in self._backend.scan(CLAIM_INDEX):
            yield type_id, ids

    # Integrity
    def check_consistency(self) -> list[str]:
        """List every disagreement between the claim index and live records."""
        problems: list[str] = []
        live = {prop.property_id: prop for prop in self.iter_properties()}
        indexed: dict[bytes, list[bytes]] = {}

        for type_id, ids in self.iter_claim_index():
            if len(ids) != len(set(ids)):
                problems.append(f"claim index for {type_id!r} holds duplicate ids")
            for pid in ids:
                indexed.setdefault(pid, []).append(type_id)
                prop = live.get(pid)
                if prop is None:
                    problems.append(f"claim index for {type_id!r} references missing property {pid!r}")
                elif prop.type_id != type_id:
                    problems.append(
                        f"property {pid!r} indexed under {type_id!r} but has type {prop.type_id!r}"
                    )

        for pid, prop in live.items():
            entries = indexed.get(pid, [])
            if prop.type_id not in entries:
                problems.append(f"property {pid!r} missing from claim index for {prop.type_id!r}")
            elif len(entries) > 1:
                problems.append(f"property {pid!r} indexed under {len(entries)} types")

        return problems

    def assert_consistent(self) -> None:
        problems = self.check_consistency()
        if problems:
            raise IndexConsistencyError("; ".join(problems))

    def summary(self) -> dict[str, int]:
        """Return summary counts of all tables."""
        return {
            "accounts": sum(1 for _ in self._backend.scan(ACCOUNTS)),
            "property_types": sum(
                len(types) for _, types in self._backend.scan(AUTHORITY_INDEX)
            ),
            "authorities": sum(1 for _ in self._backend.scan(AUTHORITY_INDEX)),
            "properties": sum(1 for _ in self._backend.scan(PROPERTIES)),
            "claim_index_entries": sum(1 for _ in self._backend.scan(CLAIM_INDEX)),
        }


class RegistryStore(RegistryTables):
    """Registry tables bound to a backing store, with batched writes.

    Every mutating registry operation runs inside ``batch()``: its writes are
    buffered and reach the backing store in one ``apply`` when the block
    exits cleanly, or are dropped if it raises.
    """

    def __init__(self, kv: KeyValueStore | None = None) -> None:
        self.kv = kv if kv is not None else InMemoryKeyValueStore()
        super().__init__(self.kv)

    @contextmanager
    def batch(self) -> Iterator[RegistryTables]:
        pending = WriteBatch(self.kv)
        try:
            yield RegistryTables(pending)
        except BaseException:
            pending.discard()
            raise
        pending.commit()
