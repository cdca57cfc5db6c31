"""
Instruction Descriptors

Positional account schemas for each governance instruction, the descriptor
the compiler emits, and the post-processor that tags it with the program's
instruction discriminant before it is handed to a transport.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ..common.errors import MissingRequiredInput
from .constants import GovernanceInstruction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountSlot:
    """One position of an instruction's account list."""
    role: str
    is_signer: bool = False
    is_writable: bool = False
    optional: bool = False


def _slot(role: str, flags: str = "", optional: bool = False) -> AccountSlot:
    return AccountSlot(role, is_signer="s" in flags, is_writable="w" in flags, optional=optional)


ACCOUNT_SCHEMAS: Dict[str, Tuple[AccountSlot, ...]] = {
    "createRealm": (
        _slot("realm", "w"),
        _slot("realm_authority"),
        _slot("community_token_mint"),
        _slot("community_token_holding", "w"),
        _slot("payer", "sw"),
        _slot("system_program"),
        _slot("token_program"),
        _slot("rent"),
        _slot("council_token_mint", optional=True),
        _slot("council_token_holding", "w", optional=True),
        _slot("realm_config", "w"),
        _slot("community_voter_weight_addin", optional=True),
        _slot("max_community_voter_weight_addin", optional=True),
        _slot("council_voter_weight_addin", optional=True),
        _slot("max_council_voter_weight_addin", optional=True),
    ),
    "createTokenOwnerRecord": (
        _slot("realm"),
        _slot("governing_token_owner"),
        _slot("token_owner_record", "w"),
        _slot("governing_token_mint"),
        _slot("payer", "sw"),
        _slot("system_program"),
    ),
    "depositGoverningTokens": (
        _slot("realm"),
        _slot("governing_token_holding", "w"),
        _slot("governing_token_source", "w"),
        _slot("governing_token_owner", "s"),
        _slot("governing_token_source_authority", "s"),
        _slot("token_owner_record", "w"),
        _slot("payer", "sw"),
        _slot("system_program"),
        _slot("token_program"),
        _slot("realm_config"),
    ),
    "createGovernance": (
        _slot("realm"),
        _slot("governance", "w"),
        _slot("governed_account"),
        _slot("token_owner_record"),
        _slot("payer", "sw"),
        _slot("system_program"),
        _slot("governance_authority", "s"),
        _slot("realm_config"),
        _slot("voter_weight_record", optional=True),
    ),
    "createNativeTreasury": (
        _slot("governance"),
        _slot("native_treasury", "w"),
        _slot("payer", "sw"),
        _slot("system_program"),
    ),
    "setRealmAuthority": (
        _slot("realm", "w"),
        _slot("realm_authority", "s"),
        _slot("new_realm_authority", optional=True),
    ),
    "createProposal": (
        _slot("realm"),
        _slot("proposal", "w"),
        _slot("governance", "w"),
        _slot("token_owner_record", "w"),
        _slot("governing_token_mint"),
        _slot("governance_authority", "s"),
        _slot("payer", "sw"),
        _slot("system_program"),
        _slot("realm_config"),
        _slot("voter_weight_record", optional=True),
        _slot("proposal_deposit", "w"),
    ),
}

# Instruction name -> program discriminant
DISCRIMINANTS: Dict[str, GovernanceInstruction] = {
    "createRealm": GovernanceInstruction.CREATE_REALM,
    "depositGoverningTokens": GovernanceInstruction.DEPOSIT_GOVERNING_TOKENS,
    "createGovernance": GovernanceInstruction.CREATE_GOVERNANCE,
    "createProposal": GovernanceInstruction.CREATE_PROPOSAL,
    "setRealmAuthority": GovernanceInstruction.SET_REALM_AUTHORITY,
    "createTokenOwnerRecord": GovernanceInstruction.CREATE_TOKEN_OWNER_RECORD,
    "createNativeTreasury": GovernanceInstruction.CREATE_NATIVE_TREASURY,
}


@dataclass(frozen=True)
class InstructionDescriptor:
    """
    A fully specified governance instruction.

    `data` holds the Borsh-encoded arguments only; the one-byte discriminant
    is attached by `attach_discriminant` and prefixed by `to_instruction`.
    """
    name: str
    program_id: Pubkey
    accounts: Tuple[AccountMeta, ...]
    data: bytes
    discriminant: Optional[int] = None

    def account(self, role: str) -> Pubkey:
        """Address at the position the schema assigns to `role`."""
        for slot, meta in zip(ACCOUNT_SCHEMAS[self.name], self.accounts):
            if slot.role == role:
                return meta.pubkey
        raise KeyError(f"{self.name} has no account role '{role}'")

    @property
    def keys(self) -> Tuple[Pubkey, ...]:
        return tuple(meta.pubkey for meta in self.accounts)

    def encoded_data(self) -> bytes:
        if self.discriminant is None:
            raise ValueError(f"{self.name} has no discriminant attached")
        return bytes([self.discriminant]) + self.data

    def to_instruction(self) -> Instruction:
        return Instruction(self.program_id, self.encoded_data(), list(self.accounts))


def build_account_metas(
    name: str,
    addresses: Dict[str, Optional[Pubkey]],
    absent: Pubkey,
) -> Tuple[AccountMeta, ...]:
    """
    Lay out `addresses` in the schema order of instruction `name`.

    Missing optional roles become `absent` (read-only, not a signer); missing
    required roles raise MissingRequiredInput.
    """
    schema = ACCOUNT_SCHEMAS[name]
    unknown = set(addresses) - {slot.role for slot in schema}
    if unknown:
        raise ValueError(f"Unknown account roles for {name}: {sorted(unknown)}")

    metas = []
    for slot in schema:
        address = addresses.get(slot.role)
        if address is None:
            if not slot.optional:
                raise MissingRequiredInput(slot.role, operation=name)
            metas.append(AccountMeta(absent, is_signer=False, is_writable=False))
        else:
            metas.append(AccountMeta(address, is_signer=slot.is_signer, is_writable=slot.is_writable))
    return tuple(metas)


def attach_discriminant(descriptor: InstructionDescriptor) -> InstructionDescriptor:
    """Tag a compiled descriptor with its instruction discriminant."""
    tag = int(DISCRIMINANTS[descriptor.name])
    logger.debug(
        f"{descriptor.name}: discriminant={tag}, {len(descriptor.accounts)} accounts, "
        f"{len(descriptor.data)} argument bytes"
    )
    return replace(descriptor, discriminant=tag)
