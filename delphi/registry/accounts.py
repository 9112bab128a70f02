"""Identity and account directory."""

import logging

from delphi.models.base import CallerContext
from delphi.models.registry import Account, EventType
from delphi.registry.notifications import Notifier
from delphi.store.registry import RegistryStore

logger = logging.getLogger(__name__)


class AccountDirectory:
    """Map caller identities to profile data."""

    def __init__(self, store: RegistryStore, notifier: Notifier) -> None:
        self.store = store
        self.notifier = notifier

    def register(
        self,
        caller: CallerContext,
        name: bytes,
        timestamp: int,
        is_authority: bool = False,
    ) -> Account:
        """Create or overwrite the caller's account.

        Names are not unique; re-registering replaces name and timestamp.
        """
        account = Account(
            account_id=caller.account_id,
            name=name,
            created_at=timestamp,
            is_authority=is_authority,
        )
        with self.store.batch() as tables:
            existed = tables.get_account(caller.account_id) is not None
            tables.put_account(account)
            self.notifier.emit(
                EventType.ACCOUNT_CREATED,
                caller,
                subject=caller.account_id,
                data={"account_id": caller.account_id, "name": name},
                source="accounts",
            )

        logger.info(
            "%s account %s",
            "Re-registered" if existed else "Registered",
            caller.account_id,
            extra={"caller": caller.account_id},
        )
        return account

    def get(self, account_id: str) -> Account | None:
        return self.store.get_account(account_id)

    def exists(self, account_id: str) -> tuple[bool, bytes]:
        """Return (found, name); an unknown account yields (False, b"")."""
        account = self.store.get_account(account_id)
        if account is None:
            return False, b""
        return True, account.name
