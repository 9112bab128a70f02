"""Property-type catalog kept per registering authority."""

import logging

from delphi.config import PolicyConfig
from delphi.exceptions import DuplicatePropertyTypeError
from delphi.models.base import CallerContext
from delphi.models.registry import EventType, PropertyType
from delphi.registry.codec import DelimitedCodec
from delphi.registry.notifications import Notifier
from delphi.store.registry import RegistryStore

logger = logging.getLogger(__name__)


class PropertyTypeCatalog:
    """Register property-type schemas and list them per authority.

    Type ids are caller-chosen. By default nothing stops an authority from
    registering the same id twice, or two authorities from sharing an id:
    the entries simply accumulate. ``PolicyConfig.reject_duplicate_type_ids``
    refuses a repeat within one authority's entry.
    """

    def __init__(
        self,
        store: RegistryStore,
        notifier: Notifier,
        codec: DelimitedCodec | None = None,
        policy: PolicyConfig | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.codec = codec or DelimitedCodec()
        self.policy = policy or PolicyConfig()

    def register_type(
        self,
        caller: CallerContext,
        type_id: bytes,
        requirements_addr: bytes,
    ) -> PropertyType:
        """Append a type to the caller's catalog entry.

        Raises
        ------
        DelimiterCollisionError
            ``type_id`` or ``requirements_addr`` contains a wire delimiter.
        DuplicatePropertyTypeError
            ``reject_duplicate_type_ids`` is set and the caller already
            registered ``type_id``.
        """
        ptype = PropertyType(
            type_id=self.codec.check(type_id),
            requirements_addr=self.codec.check(requirements_addr),
            authority=caller.account_id,
        )
        with self.store.batch() as tables:
            owned = tables.get_authority_types(caller.account_id) or []
            if any(existing.type_id == type_id for existing in owned):
                if self.policy.reject_duplicate_type_ids:
                    raise DuplicatePropertyTypeError(
                        f"{caller.account_id} already registered type {type_id!r}"
                    )
                logger.warning(
                    "Authority %s registered type %r again",
                    caller.account_id,
                    type_id,
                    extra={"caller": caller.account_id, "type_id": type_id},
                )
            tables.add_property_type(ptype)
            self.notifier.emit(
                EventType.PROPERTY_TYPE_REGISTERED,
                caller,
                subject=type_id,
                data={
                    "authority": caller.account_id,
                    "type_id": type_id,
                    "requirements_addr": requirements_addr,
                },
                source="catalog",
            )

        logger.info(
            "Registered property type %r for %s",
            type_id,
            caller.account_id,
            extra={"caller": caller.account_id, "type_id": type_id},
        )
        return ptype

    def types_for(self, authority: str) -> list[PropertyType]:
        return self.store.get_authority_types(authority) or []

    def get(self, type_id: bytes) -> PropertyType | None:
        """Latest registration of ``type_id`` across all authorities."""
        return self.store.get_property_type(type_id)

    def owns(self, authority: str, type_id: bytes) -> bool:
        return any(ptype.type_id == type_id for ptype in self.types_for(authority))

    def list_types(self, authority: str) -> bytes:
        """Delimited (type_id, requirements_addr) listing; b"" when unknown."""
        return self.codec.encode_property_types(self.types_for(authority))
