"""
Governance Program Constants

Well-known program ids, the supported program version and the instruction
discriminants of the SPL Governance program.
"""

from enum import IntEnum
from typing import Final

from solders.pubkey import Pubkey

DEFAULT_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "GovER5Lthms3bLBqWub97yVrMmEogzX7xNjdXpPPCVZw"
)
DEFAULT_PROGRAM_VERSION: Final[int] = 3
SUPPORTED_PROGRAM_VERSIONS = frozenset([3])

SYSTEM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
RENT_SYSVAR_ID: Final[Pubkey] = Pubkey.from_string(
    "SysvarRent111111111111111111111111111111111"
)

# Denominator of MintMaxVoterWeightSource.supply_fraction; this value means 100%
SUPPLY_FRACTION_BASE: Final[int] = 10_000_000_000

# Seed prefixes
GOVERNANCE_SEED: Final[bytes] = b"governance"
REALM_CONFIG_SEED: Final[bytes] = b"realm-config"
ACCOUNT_GOVERNANCE_SEED: Final[bytes] = b"account-governance"
NATIVE_TREASURY_SEED: Final[bytes] = b"native-treasury"
PROPOSAL_DEPOSIT_SEED: Final[bytes] = b"proposal-deposit"


class GovernanceInstruction(IntEnum):
    """Variant index of each instruction in the program's instruction enum."""
    CREATE_REALM = 0
    DEPOSIT_GOVERNING_TOKENS = 1
    CREATE_GOVERNANCE = 4
    CREATE_PROPOSAL = 6
    SET_REALM_AUTHORITY = 21
    CREATE_TOKEN_OWNER_RECORD = 23
    CREATE_NATIVE_TREASURY = 25


class GovernanceAccountType(IntEnum):
    """Leading type byte of the governance accounts splgov decodes."""
    REALM_V2 = 16
    TOKEN_OWNER_RECORD_V2 = 17
