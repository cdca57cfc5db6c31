"""
Operation Compiler

Turns a governance operation into one InstructionDescriptor: derives every
account, substitutes the absent-account sentinel for omitted optional
accounts, encodes the arguments and lays the accounts out in the program's
positional order. Compilation is pure: no I/O and no state between calls.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from solders.pubkey import Pubkey

from ..common.borsh import BorshWriter
from ..common.errors import MissingRequiredInput
from .constants import RENT_SYSVAR_ID, SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from .context import GovernanceContext
from .instructions import InstructionDescriptor, attach_discriminant, build_account_metas
from .pda import PdaClient
from .types import (
    FULL_SUPPLY_FRACTION,
    CreateGovernanceOptions,
    CreateNativeTreasuryOptions,
    CreateProposalOptions,
    CreateRealmOptions,
    CreateTokenOwnerRecordOptions,
    DepositGoverningTokensOptions,
    GoverningTokenType,
    SetRealmAuthorityAction,
    SetRealmAuthorityOptions,
)

logger = logging.getLogger(__name__)


def _require(options: object, fields: Iterable[str], operation: str) -> None:
    for name in fields:
        if getattr(options, name) is None:
            raise MissingRequiredInput(name, operation=operation)


def _default(value, fallback):
    return fallback if value is None else value


def _emit(
    ctx: GovernanceContext,
    name: str,
    addresses: Dict[str, Optional[Pubkey]],
    data: bytes,
) -> InstructionDescriptor:
    # Absent optional accounts are represented by the program id itself
    accounts = build_account_metas(name, addresses, absent=ctx.program_id)
    descriptor = InstructionDescriptor(name, ctx.program_id, accounts, data)
    logger.debug(f"Compiled {name} with {len(accounts)} accounts")
    return attach_discriminant(descriptor)


def _write_token_config(
    writer: BorshWriter,
    voter_weight_addin: Optional[Pubkey],
    max_voter_weight_addin: Optional[Pubkey],
    token_type: GoverningTokenType,
) -> None:
    writer.boolean(voter_weight_addin is not None)
    writer.boolean(max_voter_weight_addin is not None)
    token_type.encode(writer)


def compile_create_realm(ctx: GovernanceContext, options: CreateRealmOptions) -> InstructionDescriptor:
    _require(
        options,
        ("name", "community_token_mint", "min_community_weight_to_create_governance"),
        "createRealm",
    )
    community_type = GoverningTokenType.parse(
        _default(options.community_token_type, GoverningTokenType.LIQUID), "community_token_type"
    )
    council_type = GoverningTokenType.parse(
        _default(options.council_token_type, GoverningTokenType.MEMBERSHIP), "council_token_type"
    )
    max_voter_weight_source = _default(
        options.community_mint_max_voter_weight_source, FULL_SUPPLY_FRACTION
    )
    council_mint = options.council_token_mint

    pda = PdaClient(ctx.program_id)
    realm = pda.realm_account(options.name).address
    council_holding = None
    if council_mint is not None:
        council_holding = pda.council_token_holding_account(realm, council_mint).address

    writer = BorshWriter().string(options.name)
    writer.boolean(council_mint is not None)
    writer.u64(options.min_community_weight_to_create_governance)
    max_voter_weight_source.encode(writer)
    _write_token_config(
        writer,
        options.community_voter_weight_addin,
        options.max_community_voter_weight_addin,
        community_type,
    )
    _write_token_config(
        writer,
        options.council_voter_weight_addin,
        options.max_council_voter_weight_addin,
        council_type,
    )

    return _emit(ctx, "createRealm", {
        "realm": realm,
        "realm_authority": _default(options.realm_authority, ctx.payer),
        "community_token_mint": options.community_token_mint,
        "community_token_holding": pda.community_token_holding_account(
            realm, options.community_token_mint
        ).address,
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
        "token_program": TOKEN_PROGRAM_ID,
        "rent": RENT_SYSVAR_ID,
        "council_token_mint": council_mint,
        "council_token_holding": council_holding,
        "realm_config": pda.realm_config_account(realm).address,
        "community_voter_weight_addin": options.community_voter_weight_addin,
        "max_community_voter_weight_addin": options.max_community_voter_weight_addin,
        "council_voter_weight_addin": options.council_voter_weight_addin,
        "max_council_voter_weight_addin": options.max_council_voter_weight_addin,
    }, writer.getvalue())


def compile_create_token_owner_record(
    ctx: GovernanceContext, options: CreateTokenOwnerRecordOptions
) -> InstructionDescriptor:
    _require(options, ("realm", "governing_token_mint"), "createTokenOwnerRecord")
    owner = _default(options.governing_token_owner, ctx.payer)
    record = PdaClient(ctx.program_id).token_owner_record_account(
        options.realm, options.governing_token_mint, owner
    )

    return _emit(ctx, "createTokenOwnerRecord", {
        "realm": options.realm,
        "governing_token_owner": owner,
        "token_owner_record": record.address,
        "governing_token_mint": options.governing_token_mint,
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
    }, b"")


def compile_deposit_governing_tokens(
    ctx: GovernanceContext, options: DepositGoverningTokensOptions
) -> InstructionDescriptor:
    _require(
        options,
        (
            "realm",
            "governing_token_mint",
            "governing_token_source",
            "governing_token_owner",
            "governing_token_source_authority",
            "amount",
        ),
        "depositGoverningTokens",
    )
    pda = PdaClient(ctx.program_id)

    return _emit(ctx, "depositGoverningTokens", {
        "realm": options.realm,
        "governing_token_holding": pda.governing_token_holding_account(
            options.realm, options.governing_token_mint
        ).address,
        "governing_token_source": options.governing_token_source,
        "governing_token_owner": options.governing_token_owner,
        "governing_token_source_authority": options.governing_token_source_authority,
        "token_owner_record": pda.token_owner_record_account(
            options.realm, options.governing_token_mint, options.governing_token_owner
        ).address,
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
        "token_program": TOKEN_PROGRAM_ID,
        "realm_config": pda.realm_config_account(options.realm).address,
    }, BorshWriter().u64(options.amount).getvalue())


def compile_create_governance(
    ctx: GovernanceContext, options: CreateGovernanceOptions
) -> InstructionDescriptor:
    _require(options, ("config", "realm", "create_authority"), "createGovernance")
    governed_account = options.governed_account
    if governed_account is None:
        governed_account = ctx.fresh_seed()
    pda = PdaClient(ctx.program_id)

    writer = BorshWriter()
    options.config.encode(writer)

    return _emit(ctx, "createGovernance", {
        "realm": options.realm,
        "governance": pda.governance_account(options.realm, governed_account).address,
        "governed_account": governed_account,
        "token_owner_record": _default(options.token_owner_record, SYSTEM_PROGRAM_ID),
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
        "governance_authority": options.create_authority,
        "realm_config": pda.realm_config_account(options.realm).address,
        "voter_weight_record": options.voter_weight_record,
    }, writer.getvalue())


def compile_create_native_treasury(
    ctx: GovernanceContext, options: CreateNativeTreasuryOptions
) -> InstructionDescriptor:
    _require(options, ("governance",), "createNativeTreasury")
    treasury = PdaClient(ctx.program_id).native_treasury_account(options.governance)

    return _emit(ctx, "createNativeTreasury", {
        "governance": options.governance,
        "native_treasury": treasury.address,
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
    }, b"")


def compile_set_realm_authority(
    ctx: GovernanceContext, options: SetRealmAuthorityOptions
) -> InstructionDescriptor:
    _require(options, ("realm", "action"), "setRealmAuthority")
    action = SetRealmAuthorityAction.parse(options.action, "set_realm_authority_action")

    new_authority = options.new_realm_authority
    if action is SetRealmAuthorityAction.REMOVE:
        new_authority = None
    elif new_authority is None:
        raise MissingRequiredInput("new_realm_authority", operation="setRealmAuthority")

    writer = BorshWriter()
    action.encode(writer)

    return _emit(ctx, "setRealmAuthority", {
        "realm": options.realm,
        "realm_authority": _default(options.realm_authority, ctx.payer),
        "new_realm_authority": new_authority,
    }, writer.getvalue())


def compile_create_proposal(
    ctx: GovernanceContext, options: CreateProposalOptions
) -> InstructionDescriptor:
    _require(
        options,
        (
            "name",
            "description_link",
            "vote_type",
            "options",
            "use_deny_option",
            "realm",
            "governance",
            "token_owner_record",
            "governing_token_mint",
            "governance_authority",
        ),
        "createProposal",
    )
    proposal_seed = options.proposal_seed
    if proposal_seed is None:
        proposal_seed = ctx.fresh_seed()
    deposit_payer = _default(options.deposit_payer, ctx.payer)

    pda = PdaClient(ctx.program_id)
    proposal = pda.proposal_account(
        options.governance, options.governing_token_mint, proposal_seed
    ).address

    writer = BorshWriter()
    writer.string(options.name).string(options.description_link)
    options.vote_type.encode(writer)
    writer.vec(options.options, BorshWriter.string)
    writer.boolean(options.use_deny_option)
    writer.pubkey(proposal_seed)

    return _emit(ctx, "createProposal", {
        "realm": options.realm,
        "proposal": proposal,
        "governance": options.governance,
        "token_owner_record": options.token_owner_record,
        "governing_token_mint": options.governing_token_mint,
        "governance_authority": options.governance_authority,
        "payer": ctx.payer,
        "system_program": SYSTEM_PROGRAM_ID,
        "realm_config": pda.realm_config_account(options.realm).address,
        "voter_weight_record": options.voter_weight_record,
        "proposal_deposit": pda.proposal_deposit_account(proposal, deposit_payer).address,
    }, writer.getvalue())


COMPILERS: Dict[type, Callable[[GovernanceContext, object], InstructionDescriptor]] = {
    CreateRealmOptions: compile_create_realm,
    CreateTokenOwnerRecordOptions: compile_create_token_owner_record,
    DepositGoverningTokensOptions: compile_deposit_governing_tokens,
    CreateGovernanceOptions: compile_create_governance,
    CreateNativeTreasuryOptions: compile_create_native_treasury,
    SetRealmAuthorityOptions: compile_set_realm_authority,
    CreateProposalOptions: compile_create_proposal,
}


def compile_operation(ctx: GovernanceContext, options: object) -> InstructionDescriptor:
    """Dispatch on the options type to the matching compiler."""
    compiler = COMPILERS.get(type(options))
    if compiler is None:
        raise TypeError(f"No compiler for {type(options).__name__}")
    return compiler(ctx, options)
