"""
Entity Seed Registry

Declares, for every governance entity, the seed tuple its address is derived
from. A seed tuple is a domain tag followed by named fields; each field is
either another entity's address or a caller-supplied string. Adding an entity
means adding one SeedSpec to SEED_REGISTRY.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union

from solders.pubkey import Pubkey

from ..common.crypto import derive
from ..common.errors import MissingRequiredInput
from .constants import (
    ACCOUNT_GOVERNANCE_SEED,
    GOVERNANCE_SEED,
    NATIVE_TREASURY_SEED,
    PROPOSAL_DEPOSIT_SEED,
    REALM_CONFIG_SEED,
)

logger = logging.getLogger(__name__)

SeedValue = Union[Pubkey, str, bytes]


class EntityKind(Enum):
    REALM = "realm"
    GOVERNING_TOKEN_HOLDING = "governing_token_holding"
    REALM_CONFIG = "realm_config"
    TOKEN_OWNER_RECORD = "token_owner_record"
    GOVERNANCE = "governance"
    NATIVE_TREASURY = "native_treasury"
    PROPOSAL = "proposal"
    PROPOSAL_DEPOSIT = "proposal_deposit"


@dataclass(frozen=True)
class SeedSpec:
    domain_tag: bytes
    fields: Tuple[str, ...]


SEED_REGISTRY: Dict[EntityKind, SeedSpec] = {
    EntityKind.REALM: SeedSpec(GOVERNANCE_SEED, ("name",)),
    EntityKind.GOVERNING_TOKEN_HOLDING: SeedSpec(
        GOVERNANCE_SEED, ("realm", "governing_token_mint")
    ),
    EntityKind.REALM_CONFIG: SeedSpec(REALM_CONFIG_SEED, ("realm",)),
    EntityKind.TOKEN_OWNER_RECORD: SeedSpec(
        GOVERNANCE_SEED, ("realm", "governing_token_mint", "governing_token_owner")
    ),
    EntityKind.GOVERNANCE: SeedSpec(ACCOUNT_GOVERNANCE_SEED, ("realm", "governed_account")),
    EntityKind.NATIVE_TREASURY: SeedSpec(NATIVE_TREASURY_SEED, ("governance",)),
    EntityKind.PROPOSAL: SeedSpec(
        GOVERNANCE_SEED, ("governance", "governing_token_mint", "proposal_seed")
    ),
    EntityKind.PROPOSAL_DEPOSIT: SeedSpec(PROPOSAL_DEPOSIT_SEED, ("proposal", "deposit_payer")),
}


@dataclass(frozen=True)
class Pda:
    """A derived address together with the bump that produced it."""
    address: Pubkey
    bump: int


def seed_bytes(value: SeedValue) -> bytes:
    """Encode one seed field: addresses as their 32 raw bytes, strings as UTF-8."""
    if isinstance(value, Pubkey):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"Unsupported seed value type: {type(value).__name__}")


def resolve_seeds(kind: EntityKind, inputs: Dict[str, SeedValue]) -> List[bytes]:
    """Order the caller's inputs by the entity's seed spec (domain tag excluded)."""
    spec = SEED_REGISTRY[kind]
    seeds = []
    for name in spec.fields:
        value = inputs.get(name)
        if value is None:
            raise MissingRequiredInput(name, operation=f"{kind.value} address")
        seeds.append(seed_bytes(value))
    return seeds


def derive_entity(kind: EntityKind, program_id: Pubkey, **inputs: SeedValue) -> Pda:
    """Derive the address of any registered entity."""
    seeds = resolve_seeds(kind, inputs)
    address, bump = derive(SEED_REGISTRY[kind].domain_tag, seeds, program_id)
    return Pda(address, bump)


class PdaClient:
    """Per-entity derivation entry points bound to one governance program."""

    def __init__(self, program_id: Pubkey):
        self.program_id = program_id

    def derive(self, kind: EntityKind, **inputs: SeedValue) -> Pda:
        return derive_entity(kind, self.program_id, **inputs)

    def realm_account(self, name: str) -> Pda:
        return self.derive(EntityKind.REALM, name=name)

    def governing_token_holding_account(self, realm: Pubkey, governing_token_mint: Pubkey) -> Pda:
        return self.derive(
            EntityKind.GOVERNING_TOKEN_HOLDING,
            realm=realm,
            governing_token_mint=governing_token_mint,
        )

    def community_token_holding_account(self, realm: Pubkey, community_mint: Pubkey) -> Pda:
        return self.governing_token_holding_account(realm, community_mint)

    def council_token_holding_account(self, realm: Pubkey, council_mint: Pubkey) -> Pda:
        return self.governing_token_holding_account(realm, council_mint)

    def realm_config_account(self, realm: Pubkey) -> Pda:
        return self.derive(EntityKind.REALM_CONFIG, realm=realm)

    def token_owner_record_account(
        self, realm: Pubkey, governing_token_mint: Pubkey, governing_token_owner: Pubkey
    ) -> Pda:
        return self.derive(
            EntityKind.TOKEN_OWNER_RECORD,
            realm=realm,
            governing_token_mint=governing_token_mint,
            governing_token_owner=governing_token_owner,
        )

    def governance_account(self, realm: Pubkey, governed_account: Pubkey) -> Pda:
        return self.derive(EntityKind.GOVERNANCE, realm=realm, governed_account=governed_account)

    def native_treasury_account(self, governance: Pubkey) -> Pda:
        return self.derive(EntityKind.NATIVE_TREASURY, governance=governance)

    def proposal_account(
        self, governance: Pubkey, governing_token_mint: Pubkey, proposal_seed: Pubkey
    ) -> Pda:
        return self.derive(
            EntityKind.PROPOSAL,
            governance=governance,
            governing_token_mint=governing_token_mint,
            proposal_seed=proposal_seed,
        )

    def proposal_deposit_account(self, proposal: Pubkey, deposit_payer: Pubkey) -> Pda:
        return self.derive(EntityKind.PROPOSAL_DEPOSIT, proposal=proposal, deposit_payer=deposit_payer)
