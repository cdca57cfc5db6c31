#!/usr/bin/env python3
"""
splgov Governance Walkthrough

Compiles (and optionally submits) the full governance flow:
1. Create a realm with a community and a council mint
2. Create a token owner record and deposit governing tokens
3. Create a governance
4. Create its native treasury
5. Hand the realm authority to the governance
6. Create a proposal

Run with: python demo.py                      (compile only, random mints)
          python demo.py --keypair ~/.config/solana/id.json \
              --community-mint <MINT> --council-mint <MINT> --submit
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from splgov import GovernanceClient, SolanaRPC, load_context
from splgov.core import (
    CreateGovernanceOptions,
    CreateNativeTreasuryOptions,
    CreateProposalOptions,
    CreateRealmOptions,
    CreateTokenOwnerRecordOptions,
    DepositGoverningTokensOptions,
    GovernanceConfig,
    MintMaxVoterWeightSource,
    NetworkConfig,
    SetRealmAuthorityOptions,
    VoteThreshold,
    VoteType,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("splgov_demo")


def load_keypair(path: str) -> Keypair:
    """Load a keypair stored as a JSON array of 64 secret-key bytes."""
    with open(Path(path).expanduser()) as f:
        return Keypair.from_bytes(bytes(json.load(f)))


def demo_config() -> GovernanceConfig:
    return GovernanceConfig(
        community_vote_threshold=VoteThreshold.yes_vote_percentage(60),
        min_community_weight_to_create_proposal=4000,
        min_transaction_hold_up_time=0,
        voting_base_time=21600,
        community_vote_tipping="disabled",
        council_vote_threshold=VoteThreshold.yes_vote_percentage(40),
        council_veto_vote_threshold=VoteThreshold.yes_vote_percentage(40),
        min_council_weight_to_create_proposal=1_000_000,
        council_vote_tipping="strict",
        community_veto_vote_threshold=VoteThreshold.disabled(),
        voting_cool_off_time=43200,
        deposit_exempt_proposal_count=10,
    )


def run(client: GovernanceClient, args, community_mint: Pubkey, council_mint: Pubkey) -> None:
    owner = client.context.payer
    act = args.submit

    def step(label, build, options, role):
        descriptor = build(options)
        if act:
            print(f"      signature: {client.send(descriptor)}")
        address = descriptor.account(role)
        print(f"    {label}: {address}")
        print(f"      {len(descriptor.accounts)} accounts, data={descriptor.encoded_data().hex()}")
        return address

    print("\n[1/6] Creating realm...")
    realm = step(
        "Realm", client.build_create_realm,
        CreateRealmOptions(
            name=args.realm_name,
            community_token_mint=community_mint,
            min_community_weight_to_create_governance=1_000_000,
            community_mint_max_voter_weight_source=MintMaxVoterWeightSource.absolute(5_000_000),
            council_token_mint=council_mint,
            community_token_type="liquid",
            council_token_type="membership",
        ),
        "realm",
    )

    print("\n[2/6] Creating token owner record and depositing 7 tokens...")
    token_owner_record = step(
        "Token owner record", client.build_create_token_owner_record,
        CreateTokenOwnerRecordOptions(realm, community_mint, owner),
        "token_owner_record",
    )
    step(
        "Holding account", client.build_deposit_governing_tokens,
        DepositGoverningTokensOptions(
            realm=realm,
            governing_token_mint=community_mint,
            governing_token_source=args.token_source or community_mint,
            governing_token_owner=owner,
            governing_token_source_authority=owner,
            amount=7_000_000,
        ),
        "governing_token_holding",
    )

    print("\n[3/6] Creating governance...")
    governance = step(
        "Governance", client.build_create_governance,
        CreateGovernanceOptions(
            config=demo_config(),
            realm=realm,
            create_authority=owner,
            governed_account=client.context.fresh_seed(),
            token_owner_record=token_owner_record,
        ),
        "governance",
    )

    print("\n[4/6] Creating native treasury...")
    step(
        "Native treasury", client.build_create_native_treasury,
        CreateNativeTreasuryOptions(governance), "native_treasury",
    )

    print("\n[5/6] Setting realm authority to the governance...")
    step(
        "New authority", client.build_set_realm_authority,
        SetRealmAuthorityOptions(realm, governance, "SetChecked"), "new_realm_authority",
    )

    print("\n[6/6] Creating proposal...")
    step(
        "Proposal", client.build_create_proposal,
        CreateProposalOptions(
            name="Is SPL Governance the best Solana Program?",
            description_link="N/A",
            vote_type=VoteType.single_choice(),
            options=["Yes"],
            use_deny_option=True,
            realm=realm,
            governance=governance,
            token_owner_record=token_owner_record,
            governing_token_mint=community_mint,
            governance_authority=owner,
            proposal_seed=client.context.fresh_seed(),
        ),
        "proposal",
    )

    if act:
        realm_data = client.get_realm(realm)
        print(f"\n    On-chain realm: {realm_data}")


def main():
    parser = argparse.ArgumentParser(description="splgov governance walkthrough")
    parser.add_argument("--keypair", help="Path to a JSON keypair file (random if omitted)")
    parser.add_argument("--rpc-url", help="JSON-RPC endpoint (default: SPLGOV_RPC_URL or devnet)")
    parser.add_argument("--program-id", help="Governance program id override")
    parser.add_argument("--realm-name", default="SDK TEST ##14", help="Name of the realm")
    parser.add_argument("--community-mint", help="Community token mint (random if omitted)")
    parser.add_argument("--council-mint", help="Council token mint (random if omitted)")
    parser.add_argument("--token-source", help="Token account to deposit from")
    parser.add_argument("--submit", action="store_true", help="Sign and submit each instruction")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    signer = load_keypair(args.keypair) if args.keypair else Keypair()
    if args.submit and not (args.keypair and args.community_mint and args.council_mint):
        parser.error("--submit needs --keypair, --community-mint and --council-mint")

    context = load_context(signer.pubkey(), program_id=args.program_id)
    transport = SolanaRPC.from_config(NetworkConfig.from_env(rpc_url=args.rpc_url))
    client = GovernanceClient(context, transport=transport, signer=signer)

    community_mint = Pubkey.from_string(args.community_mint) if args.community_mint else Keypair().pubkey()
    council_mint = Pubkey.from_string(args.council_mint) if args.council_mint else Keypair().pubkey()
    if args.token_source:
        args.token_source = Pubkey.from_string(args.token_source)

    print("=" * 60)
    print(f"Program: {context.program_id}")
    print(f"Payer:   {context.payer}")
    print(f"Mode:    {'submit' if args.submit else 'compile only'}")
    print("=" * 60)

    if args.submit:
        if not transport.is_connected():
            logger.error(f"RPC node at {transport.rpc_url} is not healthy")
            return 1
        print(f"Balance: {transport.get_balance(context.payer) / 1e9:.4f} SOL")

    try:
        run(client, args, community_mint, council_mint)
    except Exception as e:
        logger.error(f"Walkthrough failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
