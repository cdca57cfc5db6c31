"""
Governance Account Decoding

Deserializes raw account data fetched from the chain into typed records.
Only the records a caller needs after the supported operations are covered.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from solders.pubkey import Pubkey

from ..common.borsh import BorshReader
from .constants import GovernanceAccountType
from .types import MintMaxVoterWeightSource


@dataclass(frozen=True)
class RealmConfig:
    min_community_weight_to_create_governance: int
    community_mint_max_voter_weight_source: MintMaxVoterWeightSource
    council_mint: Optional[Pubkey]


@dataclass(frozen=True)
class RealmV2:
    account_type: GovernanceAccountType
    community_mint: Pubkey
    config: RealmConfig
    authority: Optional[Pubkey]
    name: str


@dataclass(frozen=True)
class TokenOwnerRecordV2:
    account_type: GovernanceAccountType
    realm: Pubkey
    governing_token_mint: Pubkey
    governing_token_owner: Pubkey
    governing_token_deposit_amount: int
    unrelinquished_votes_count: int
    outstanding_proposal_count: int
    version: int
    governance_delegate: Optional[Pubkey]


def _read_account_type(reader: BorshReader, expected: GovernanceAccountType) -> GovernanceAccountType:
    account_type = reader.u8()
    if account_type != expected:
        raise ValueError(
            f"Expected account type {expected.name} ({int(expected)}), got {account_type}"
        )
    return expected


def decode_realm(data: bytes) -> RealmV2:
    reader = BorshReader(data)
    account_type = _read_account_type(reader, GovernanceAccountType.REALM_V2)
    community_mint = reader.pubkey()

    # RealmConfig: two legacy bytes and six reserved bytes lead the struct
    reader.skip(8)
    min_weight = reader.u64()
    source_tag = reader.u8()
    if source_tag >= len(MintMaxVoterWeightSource.KINDS):
        raise ValueError(f"Invalid max voter weight source tag {source_tag}")
    source = MintMaxVoterWeightSource(MintMaxVoterWeightSource.KINDS[source_tag], reader.u64())
    council_mint = reader.option(BorshReader.pubkey)
    config = RealmConfig(min_weight, source, council_mint)

    # reserved [u8; 6] + legacy u16
    reader.skip(8)
    authority = reader.option(BorshReader.pubkey)
    name = reader.string()

    return RealmV2(account_type, community_mint, config, authority, name)


def decode_token_owner_record(data: bytes) -> TokenOwnerRecordV2:
    reader = BorshReader(data)
    account_type = _read_account_type(reader, GovernanceAccountType.TOKEN_OWNER_RECORD_V2)
    realm = reader.pubkey()
    mint = reader.pubkey()
    owner = reader.pubkey()
    deposit_amount = reader.u64()
    unrelinquished_votes = reader.u64()
    outstanding_proposals = reader.u8()
    version = reader.u8()
    reader.skip(6)
    delegate = reader.option(BorshReader.pubkey)

    return TokenOwnerRecordV2(
        account_type=account_type,
        realm=realm,
        governing_token_mint=mint,
        governing_token_owner=owner,
        governing_token_deposit_amount=deposit_amount,
        unrelinquished_votes_count=unrelinquished_votes,
        outstanding_proposal_count=outstanding_proposals,
        version=version,
        governance_delegate=delegate,
    )


DECODERS: Dict[str, Callable[[bytes], object]] = {
    "realmV2": decode_realm,
    "tokenOwnerRecordV2": decode_token_owner_record,
}


def decode(entity_type: str, data: bytes) -> object:
    """Decode raw account bytes for the named record type."""
    decoder = DECODERS.get(entity_type)
    if decoder is None:
        raise ValueError(
            f"Unknown account type '{entity_type}'; expected one of {', '.join(DECODERS)}"
        )
    return decoder(data)
