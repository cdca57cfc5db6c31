"""
Governance Client

High-level accessors over the compiler: `build_*` methods return instruction
descriptors without touching the network, the matching action methods submit
them through a transport and return the address the operation created or
targeted, and `get_*` methods fetch and decode on-chain records.
"""

import logging
from typing import Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .common.blockchain import SolanaRPC
from .common.errors import AccountNotFound, TransportError
from .core.accounts import RealmV2, TokenOwnerRecordV2, decode
from .core.compiler import (
    compile_create_governance,
    compile_create_native_treasury,
    compile_create_proposal,
    compile_create_realm,
    compile_create_token_owner_record,
    compile_deposit_governing_tokens,
    compile_set_realm_authority,
)
from .core.context import GovernanceContext
from .core.instructions import InstructionDescriptor
from .core.pda import PdaClient
from .core.types import (
    CreateGovernanceOptions,
    CreateNativeTreasuryOptions,
    CreateProposalOptions,
    CreateRealmOptions,
    CreateTokenOwnerRecordOptions,
    DepositGoverningTokensOptions,
    SetRealmAuthorityOptions,
)

logger = logging.getLogger(__name__)


class GovernanceClient:
    """
    Builds, submits and reads governance state for one program deployment.

    The context is passed in explicitly; the client adds a transport and a
    signer on top of it and keeps no other state.
    """

    def __init__(
        self,
        context: GovernanceContext,
        transport: Optional[SolanaRPC] = None,
        signer: Optional[Keypair] = None,
    ):
        if signer is not None and signer.pubkey() != context.payer:
            raise ValueError(
                f"Signer {signer.pubkey()} does not match context payer {context.payer}"
            )
        self.context = context
        self.transport = transport
        self.signer = signer

    @property
    def pda(self) -> PdaClient:
        return PdaClient(self.context.program_id)

    def send(self, descriptor: InstructionDescriptor) -> str:
        """Submit an already compiled descriptor and return its signature."""
        if self.transport is None or self.signer is None:
            raise TransportError("A transport and a signer are required to submit instructions")

        result = self.transport.submit(descriptor.to_instruction(), self.signer)
        if not result.success:
            sent = f" (signature {result.signature})" if result.signature else ""
            raise TransportError(f"{descriptor.name} failed{sent}: {result.error}")

        logger.info(f"{descriptor.name} confirmed: {result.signature}")
        return result.signature

    # =========================================================================
    # Fetch
    # =========================================================================

    def _fetch(self, address: Pubkey, entity_type: str):
        if self.transport is None:
            raise TransportError("A transport is required to fetch accounts")
        account = self.transport.get_account_info(address)
        if account is None:
            raise AccountNotFound(address)
        return decode(entity_type, account.data)

    def get_realm(self, realm: Pubkey) -> RealmV2:
        return self._fetch(realm, "realmV2")

    def get_token_owner_record(self, token_owner_record: Pubkey) -> TokenOwnerRecordV2:
        return self._fetch(token_owner_record, "tokenOwnerRecordV2")

    # =========================================================================
    # Build and submit
    # =========================================================================

    # --- Realm ---

    def build_create_realm(self, options: CreateRealmOptions) -> InstructionDescriptor:
        return compile_create_realm(self.context, options)

    def create_realm(self, options: CreateRealmOptions) -> Pubkey:
        """Create a realm and return its address."""
        descriptor = self.build_create_realm(options)
        self.send(descriptor)
        realm = descriptor.account("realm")
        logger.info(f"Realm '{options.name}' created at {realm}")
        return realm

    def build_set_realm_authority(self, options: SetRealmAuthorityOptions) -> InstructionDescriptor:
        return compile_set_realm_authority(self.context, options)

    def set_realm_authority(self, options: SetRealmAuthorityOptions) -> Pubkey:
        """Change the realm authority and return the new authority."""
        descriptor = self.build_set_realm_authority(options)
        self.send(descriptor)
        return descriptor.account("new_realm_authority")

    # --- Members ---

    def build_create_token_owner_record(
        self, options: CreateTokenOwnerRecordOptions
    ) -> InstructionDescriptor:
        return compile_create_token_owner_record(self.context, options)

    def create_token_owner_record(self, options: CreateTokenOwnerRecordOptions) -> Pubkey:
        """Create a token owner record and return its address."""
        descriptor = self.build_create_token_owner_record(options)
        self.send(descriptor)
        return descriptor.account("token_owner_record")

    def build_deposit_governing_tokens(
        self, options: DepositGoverningTokensOptions
    ) -> InstructionDescriptor:
        return compile_deposit_governing_tokens(self.context, options)

    def deposit_governing_tokens(self, options: DepositGoverningTokensOptions) -> Pubkey:
        """Deposit governing tokens and return the holding account."""
        descriptor = self.build_deposit_governing_tokens(options)
        self.send(descriptor)
        return descriptor.account("governing_token_holding")

    # --- Governance ---

    def build_create_governance(self, options: CreateGovernanceOptions) -> InstructionDescriptor:
        return compile_create_governance(self.context, options)

    def create_governance(self, options: CreateGovernanceOptions) -> Pubkey:
        """Create a governance and return its address."""
        descriptor = self.build_create_governance(options)
        self.send(descriptor)
        return descriptor.account("governance")

    def build_create_native_treasury(
        self, options: CreateNativeTreasuryOptions
    ) -> InstructionDescriptor:
        return compile_create_native_treasury(self.context, options)

    def create_native_treasury(self, options: CreateNativeTreasuryOptions) -> Pubkey:
        """Create the native treasury of a governance and return its address."""
        descriptor = self.build_create_native_treasury(options)
        self.send(descriptor)
        return descriptor.account("native_treasury")

    # --- Proposals ---

    def build_create_proposal(self, options: CreateProposalOptions) -> InstructionDescriptor:
        return compile_create_proposal(self.context, options)

    def create_proposal(self, options: CreateProposalOptions) -> Pubkey:
        """Create a proposal and return its address."""
        descriptor = self.build_create_proposal(options)
        self.send(descriptor)
        return descriptor.account("proposal")
