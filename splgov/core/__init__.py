"""splgov Core Compiler Components"""

from .accounts import RealmV2, TokenOwnerRecordV2, decode
from .compiler import (
    compile_create_governance,
    compile_create_native_treasury,
    compile_create_proposal,
    compile_create_realm,
    compile_create_token_owner_record,
    compile_deposit_governing_tokens,
    compile_operation,
    compile_set_realm_authority,
)
from .constants import DEFAULT_PROGRAM_ID, DEFAULT_PROGRAM_VERSION, SYSTEM_PROGRAM_ID
from .context import GovernanceContext, NetworkConfig, load_context
from .instructions import InstructionDescriptor, attach_discriminant
from .pda import EntityKind, Pda, PdaClient, derive_entity
from .types import (
    CreateGovernanceOptions,
    CreateNativeTreasuryOptions,
    CreateProposalOptions,
    CreateRealmOptions,
    CreateTokenOwnerRecordOptions,
    DepositGoverningTokensOptions,
    GovernanceConfig,
    GoverningTokenType,
    MintMaxVoterWeightSource,
    MultiChoiceType,
    SetRealmAuthorityAction,
    SetRealmAuthorityOptions,
    VoteThreshold,
    VoteTipping,
    VoteType,
)

__all__ = [
    "RealmV2",
    "TokenOwnerRecordV2",
    "decode",
    "compile_create_governance",
    "compile_create_native_treasury",
    "compile_create_proposal",
    "compile_create_realm",
    "compile_create_token_owner_record",
    "compile_deposit_governing_tokens",
    "compile_operation",
    "compile_set_realm_authority",
    "DEFAULT_PROGRAM_ID",
    "DEFAULT_PROGRAM_VERSION",
    "SYSTEM_PROGRAM_ID",
    "GovernanceContext",
    "NetworkConfig",
    "load_context",
    "InstructionDescriptor",
    "attach_discriminant",
    "EntityKind",
    "Pda",
    "PdaClient",
    "derive_entity",
    # Types and operation options
    "CreateGovernanceOptions",
    "CreateNativeTreasuryOptions",
    "CreateProposalOptions",
    "CreateRealmOptions",
    "CreateTokenOwnerRecordOptions",
    "DepositGoverningTokensOptions",
    "GovernanceConfig",
    "GoverningTokenType",
    "MintMaxVoterWeightSource",
    "MultiChoiceType",
    "SetRealmAuthorityAction",
    "SetRealmAuthorityOptions",
    "VoteThreshold",
    "VoteTipping",
    "VoteType",
]
