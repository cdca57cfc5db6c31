"""
Governance Types

Friendly labels for the program's tagged unions, the governance
configuration record, and one structured options value per operation.
Every type knows how to write itself in the program's Borsh layout.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Type, TypeVar, Union

from solders.pubkey import Pubkey

from ..common.borsh import BorshWriter
from ..common.errors import UnrecognizedEnumLabel
from .constants import SUPPLY_FRACTION_BASE

E = TypeVar("E", bound="LabeledEnum")


class LabeledEnum(Enum):
    """Enum whose value is the caller-facing label and whose position is the wire tag."""

    @property
    def tag(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def parse(cls: Type[E], value: Union[str, E], field_name: str) -> E:
        """Resolve a label (or an existing member) to a member, failing fast."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        raise UnrecognizedEnumLabel(field_name, value, [m.value for m in cls])

    def encode(self, writer: BorshWriter) -> None:
        writer.u8(self.tag)


class GoverningTokenType(LabeledEnum):
    LIQUID = "liquid"
    MEMBERSHIP = "membership"
    DORMANT = "dormant"


class SetRealmAuthorityAction(LabeledEnum):
    SET_UNCHECKED = "SetUnchecked"
    SET_CHECKED = "SetChecked"
    REMOVE = "Remove"


class VoteTipping(LabeledEnum):
    STRICT = "strict"
    EARLY = "early"
    DISABLED = "disabled"


class MultiChoiceType(LabeledEnum):
    FULL_WEIGHT = "full_weight"
    WEIGHTED = "weighted"


@dataclass(frozen=True)
class MintMaxVoterWeightSource:
    """Max voter weight as a fraction of mint supply or an absolute amount."""
    kind: str
    value: int

    KINDS = ("supply_fraction", "absolute")

    def __post_init__(self):
        if self.kind not in self.KINDS:
            raise UnrecognizedEnumLabel("mint_max_voter_weight_source", self.kind, self.KINDS)

    @classmethod
    def supply_fraction(cls, fraction: int = SUPPLY_FRACTION_BASE) -> "MintMaxVoterWeightSource":
        return cls("supply_fraction", fraction)

    @classmethod
    def absolute(cls, amount: int) -> "MintMaxVoterWeightSource":
        return cls("absolute", amount)

    def encode(self, writer: BorshWriter) -> None:
        writer.u8(self.KINDS.index(self.kind)).u64(self.value)


FULL_SUPPLY_FRACTION = MintMaxVoterWeightSource.supply_fraction()


@dataclass(frozen=True)
class VoteThreshold:
    kind: str
    value: Optional[int] = None

    KINDS = ("yes_vote_percentage", "quorum_percentage", "disabled")

    def __post_init__(self):
        if self.kind not in self.KINDS:
            raise UnrecognizedEnumLabel("vote_threshold", self.kind, self.KINDS)
        if self.kind != "disabled" and self.value is None:
            raise ValueError(f"Vote threshold '{self.kind}' needs a percentage")

    @classmethod
    def yes_vote_percentage(cls, percentage: int) -> "VoteThreshold":
        return cls("yes_vote_percentage", percentage)

    @classmethod
    def quorum_percentage(cls, percentage: int) -> "VoteThreshold":
        return cls("quorum_percentage", percentage)

    @classmethod
    def disabled(cls) -> "VoteThreshold":
        return cls("disabled")

    def encode(self, writer: BorshWriter) -> None:
        writer.u8(self.KINDS.index(self.kind))
        if self.kind != "disabled":
            writer.u8(self.value)


@dataclass(frozen=True)
class VoteType:
    """Single choice, or multi choice with its voter/winner limits."""
    kind: str = "single_choice"
    choice_type: MultiChoiceType = MultiChoiceType.FULL_WEIGHT
    min_voter_options: int = 1
    max_voter_options: int = 1
    max_winning_options: int = 1

    KINDS = ("single_choice", "multi_choice")

    def __post_init__(self):
        if self.kind not in self.KINDS:
            raise UnrecognizedEnumLabel("vote_type", self.kind, self.KINDS)

    @classmethod
    def single_choice(cls) -> "VoteType":
        return cls()

    @classmethod
    def multi_choice(
        cls,
        choice_type: Union[str, MultiChoiceType] = MultiChoiceType.FULL_WEIGHT,
        min_voter_options: int = 1,
        max_voter_options: int = 1,
        max_winning_options: int = 1,
    ) -> "VoteType":
        return cls(
            "multi_choice",
            MultiChoiceType.parse(choice_type, "multi_choice_type"),
            min_voter_options,
            max_voter_options,
            max_winning_options,
        )

    def encode(self, writer: BorshWriter) -> None:
        writer.u8(self.KINDS.index(self.kind))
        if self.kind == "multi_choice":
            self.choice_type.encode(writer)
            writer.u8(self.min_voter_options)
            writer.u8(self.max_voter_options)
            writer.u8(self.max_winning_options)


@dataclass(frozen=True)
class GovernanceConfig:
    """Voting rules of a governance, in program field order."""
    community_vote_threshold: VoteThreshold
    min_community_weight_to_create_proposal: int
    min_transaction_hold_up_time: int
    voting_base_time: int
    community_vote_tipping: Union[str, VoteTipping]
    council_vote_threshold: VoteThreshold
    council_veto_vote_threshold: VoteThreshold
    min_council_weight_to_create_proposal: int
    council_vote_tipping: Union[str, VoteTipping]
    community_veto_vote_threshold: VoteThreshold
    voting_cool_off_time: int
    deposit_exempt_proposal_count: int

    def encode(self, writer: BorshWriter) -> None:
        self.community_vote_threshold.encode(writer)
        writer.u64(self.min_community_weight_to_create_proposal)
        writer.u32(self.min_transaction_hold_up_time)
        writer.u32(self.voting_base_time)
        VoteTipping.parse(self.community_vote_tipping, "community_vote_tipping").encode(writer)
        self.council_vote_threshold.encode(writer)
        self.council_veto_vote_threshold.encode(writer)
        writer.u64(self.min_council_weight_to_create_proposal)
        VoteTipping.parse(self.council_vote_tipping, "council_vote_tipping").encode(writer)
        self.community_veto_vote_threshold.encode(writer)
        writer.u32(self.voting_cool_off_time)
        writer.u8(self.deposit_exempt_proposal_count)


# =============================================================================
# Operation options
# =============================================================================

@dataclass(frozen=True)
class CreateRealmOptions:
    """
    Inputs of realm creation. Omitted add-ins and council mint become the
    absent-account sentinel; token types default to liquid (community) and
    membership (council); max voter weight defaults to the full supply.
    """
    name: str
    community_token_mint: Pubkey
    min_community_weight_to_create_governance: int
    community_mint_max_voter_weight_source: Optional[MintMaxVoterWeightSource] = None
    council_token_mint: Optional[Pubkey] = None
    community_token_type: Optional[Union[str, GoverningTokenType]] = None
    council_token_type: Optional[Union[str, GoverningTokenType]] = None
    community_voter_weight_addin: Optional[Pubkey] = None
    max_community_voter_weight_addin: Optional[Pubkey] = None
    council_voter_weight_addin: Optional[Pubkey] = None
    max_council_voter_weight_addin: Optional[Pubkey] = None
    realm_authority: Optional[Pubkey] = None


@dataclass(frozen=True)
class CreateTokenOwnerRecordOptions:
    realm: Pubkey
    governing_token_mint: Pubkey
    governing_token_owner: Optional[Pubkey] = None


@dataclass(frozen=True)
class DepositGoverningTokensOptions:
    realm: Pubkey
    governing_token_mint: Pubkey
    governing_token_source: Pubkey
    governing_token_owner: Pubkey
    governing_token_source_authority: Pubkey
    amount: int


@dataclass(frozen=True)
class CreateGovernanceOptions:
    """`governed_account` defaults to a fresh seed from the context."""
    config: GovernanceConfig
    realm: Pubkey
    create_authority: Pubkey
    governed_account: Optional[Pubkey] = None
    token_owner_record: Optional[Pubkey] = None
    voter_weight_record: Optional[Pubkey] = None


@dataclass(frozen=True)
class CreateNativeTreasuryOptions:
    governance: Pubkey


@dataclass(frozen=True)
class SetRealmAuthorityOptions:
    realm: Pubkey
    new_realm_authority: Optional[Pubkey]
    action: Union[str, SetRealmAuthorityAction] = SetRealmAuthorityAction.SET_CHECKED
    realm_authority: Optional[Pubkey] = None


@dataclass(frozen=True)
class CreateProposalOptions:
    """`proposal_seed` defaults to a fresh seed from the context."""
    name: str
    description_link: str
    vote_type: VoteType
    options: List[str]
    use_deny_option: bool
    realm: Pubkey
    governance: Pubkey
    token_owner_record: Pubkey
    governing_token_mint: Pubkey
    governance_authority: Pubkey
    voter_weight_record: Optional[Pubkey] = None
    proposal_seed: Optional[Pubkey] = None
    deposit_payer: Optional[Pubkey] = None
