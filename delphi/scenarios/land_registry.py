"""Land registry scenario: a populated ledger with provenance."""

import logging
import random
from typing import Any

from delphi.config import DelphiConfig
from delphi.generators import AccountGenerator, ClaimGenerator, PropertyTypeGenerator
from delphi.models.base import CallerContext
from delphi.models.registry import Account, PropertyType
from delphi.registry.ledger import Ledger

logger = logging.getLogger(__name__)


class LandRegistryScenario:
    """Drive a ``Ledger`` through a realistic sequence of operations.

    This scenario creates:
    - Authorities, each registering a handful of property types
    - Claimants registering claims against those types
    - Attestations by the owning authority
    - Whole transfers and splits between claimants

    Every step goes through the ledger's public operations, so the result
    carries the same events and invariants as live traffic.
    """

    def __init__(
        self,
        num_authorities: int = 3,
        types_per_authority: int = 2,
        num_claimants: int = 20,
        claims_per_claimant: tuple[int, int] = (1, 3),
        attestation_rate: float = 0.7,
        transfer_rate: float = 0.3,
        split_rate: float = 0.3,
        seed: int | None = None,
        config: DelphiConfig | None = None,
        sink: Any | None = None,
    ) -> None:
        """Initialize land registry scenario.

        Parameters
        ----------
        num_authorities : int
            Number of authorities registering property types.
        types_per_authority : int
            Property types registered by each authority.
        num_claimants : int
            Number of claimant accounts.
        claims_per_claimant : tuple[int, int]
            Min and max claims per claimant.
        attestation_rate : float
            Share of claims signed by their type's authority.
        transfer_rate : float
            Share of claims transferred to another claimant.
        split_rate : float
            Share of transfers that split the property instead.
        seed : int | None
            Random seed for reproducibility.
        config : DelphiConfig | None
            Ledger configuration.
        sink : Any | None
            Notification sink; a memory sink when omitted.
        """
        if num_claimants < 2 and transfer_rate > 0:
            raise ValueError("Transfers need at least two claimants")

        self.num_authorities = num_authorities
        self.types_per_authority = types_per_authority
        self.num_claimants = num_claimants
        self.claims_per_claimant = claims_per_claimant
        self.attestation_rate = attestation_rate
        self.transfer_rate = transfer_rate
        self.split_rate = split_rate
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.ledger = Ledger(sink=sink, config=config)
        self._account_gen = AccountGenerator(seed=seed)
        self._type_gen = PropertyTypeGenerator(seed=seed)
        self._claim_gen = ClaimGenerator(seed=seed)
        self._clock = 0
        self.stats = {"claims": 0, "attestations": 0, "transfers": 0, "splits": 0}

    def generate(self) -> Ledger:
        """Run the scenario and return the populated ledger."""
        logger.info(
            "Starting land registry scenario: %d authorities, %d claimants",
            self.num_authorities,
            self.num_claimants,
        )

        authorities = [self._register(is_authority=True) for _ in range(self.num_authorities)]
        claimants = [self._register() for _ in range(self.num_claimants)]

        types: list[PropertyType] = []
        for authority in authorities:
            for _ in range(self.types_per_authority):
                ptype = self._type_gen.generate(authority.account_id)
                types.append(
                    self.ledger.register_ptype(
                        CallerContext(authority.account_id), ptype.type_id, ptype.requirements_addr
                    )
                )

        for claimant in claimants:
            for _ in range(random.randint(*self.claims_per_claimant)):
                self._claim_and_trade(claimant, claimants, random.choice(types))

        self.ledger.store.assert_consistent()
        logger.info("Land registry scenario complete: %s", self.stats)
        return self.ledger

    def _tick(self) -> int:
        # Monotonic ledger clock in ms
        self._clock += random.randint(60_000, 86_400_000)
        return self._clock

    def _register(self, is_authority: bool = False) -> Account:
        account = self._account_gen.generate(is_authority=is_authority)
        self._clock = max(self._clock, account.created_at)
        return self.ledger.register_account(
            CallerContext(account.account_id), account.name, account.created_at, is_authority
        )

    def _claim_and_trade(self, claimant: Account, claimants: list[Account], ptype: PropertyType) -> None:
        caller = CallerContext(claimant.account_id)
        claim = self._claim_gen.generate(claimant.account_id, ptype.type_id)
        self.ledger.register_claim(caller, claim.type_id, claim.property_id, claim.claim_addr)
        self.stats["claims"] += 1

        if random.random() < self.attestation_rate:
            self.ledger.sign_document(
                CallerContext(ptype.authority), claim.property_id, ptype.type_id, self._tick()
            )
            self.stats["attestations"] += 1

        if random.random() >= self.transfer_rate:
            return

        recipient = random.choice([c for c in claimants if c.account_id != claimant.account_id])
        if random.random() < self.split_rate:
            self.ledger.transfer_property(
                caller,
                claim.property_id,
                recipient.account_id,
                self._claim_gen.document_addr(),
                senders_new_property_id=claim.property_id + b"-a",
                recipients_claim_addr=self._claim_gen.document_addr(),
                recipients_new_property_id=claim.property_id + b"-b",
                timestamp=self._tick(),
            )
            self.stats["splits"] += 1
        else:
            self.ledger.transfer_property(
                caller,
                claim.property_id,
                recipient.account_id,
                self._claim_gen.document_addr(),
                timestamp=self._tick(),
            )
            self.stats["transfers"] += 1
