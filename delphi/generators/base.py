"""Base generator class for registry sample data."""

from __future__ import annotations

import random
from abc import ABC
from datetime import datetime

from faker import Faker

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class BaseGenerator(ABC):
    """Base class for all sample-data generators.

    Provides a seeded Faker instance and the helpers every generator needs:
    millisecond timestamps and IPFS-style document addresses.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def timestamp(self, start_date: str = "-5y", end_date: str = "now") -> int:
        """Random moment as milliseconds since the epoch."""
        moment: datetime = self.fake.date_time_between(start_date=start_date, end_date=end_date)
        return int(moment.timestamp() * 1000)

    def document_addr(self) -> bytes:
        """CIDv0-looking address of an off-ledger document."""
        return ("Qm" + self.fake.lexify("?" * 44, letters=BASE58_ALPHABET)).encode("ascii")
