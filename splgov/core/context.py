"""
Governance Context

The explicit configuration value every compilation receives. It replaces a
long-lived client object: nothing here holds a connection or mutable state.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from solders.pubkey import Pubkey

from ..common.crypto import generate_seed
from ..common.errors import MissingRequiredInput
from .constants import DEFAULT_PROGRAM_ID, DEFAULT_PROGRAM_VERSION, SUPPORTED_PROGRAM_VERSIONS

NETWORK_DEFAULTS = {
    "rpc_url": "https://api.devnet.solana.com",
    "commitment": "confirmed",
    "timeout_seconds": 30,
    "confirm_timeout_seconds": 60,
    "retries": 3,
    "retry_delay": 2.0,
}

ENV_PROGRAM_ID = "SPLGOV_PROGRAM_ID"
ENV_RPC_URL = "SPLGOV_RPC_URL"
ENV_COMMITMENT = "SPLGOV_COMMITMENT"


@dataclass(frozen=True)
class GovernanceContext:
    """
    Root program id, protocol version and payer for a compilation.

    `payer` is the invoking authority: it pays rent, and stands in for the
    realm authority and the governing token owner when those are omitted.
    `seed_factory` produces fresh seeds for governances and proposals whose
    identity is not supplied by the caller.
    """
    payer: Pubkey
    program_id: Pubkey = DEFAULT_PROGRAM_ID
    program_version: int = DEFAULT_PROGRAM_VERSION
    seed_factory: Callable[[], Pubkey] = field(default=generate_seed, compare=False)

    def __post_init__(self):
        if self.payer is None:
            raise MissingRequiredInput("payer")
        if self.program_version not in SUPPORTED_PROGRAM_VERSIONS:
            raise ValueError(
                f"Unsupported governance program version {self.program_version}; "
                f"supported: {sorted(SUPPORTED_PROGRAM_VERSIONS)}"
            )

    def fresh_seed(self) -> Pubkey:
        return self.seed_factory()


@dataclass(frozen=True)
class NetworkConfig:
    """Connection settings for the RPC transport."""
    rpc_url: str = NETWORK_DEFAULTS["rpc_url"]
    commitment: str = NETWORK_DEFAULTS["commitment"]
    timeout_seconds: float = NETWORK_DEFAULTS["timeout_seconds"]
    confirm_timeout_seconds: float = NETWORK_DEFAULTS["confirm_timeout_seconds"]
    retries: int = NETWORK_DEFAULTS["retries"]
    retry_delay: float = NETWORK_DEFAULTS["retry_delay"]

    @classmethod
    def from_env(cls, **overrides) -> "NetworkConfig":
        """Build from SPLGOV_* environment variables; keyword overrides win."""
        values = {}
        if os.environ.get(ENV_RPC_URL):
            values["rpc_url"] = os.environ[ENV_RPC_URL]
        if os.environ.get(ENV_COMMITMENT):
            values["commitment"] = os.environ[ENV_COMMITMENT]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _as_pubkey(value: Union[str, Pubkey]) -> Pubkey:
    return value if isinstance(value, Pubkey) else Pubkey.from_string(value)


def load_context(
    payer: Union[str, Pubkey],
    program_id: Optional[Union[str, Pubkey]] = None,
    program_version: Optional[int] = None,
    seed_factory: Optional[Callable[[], Pubkey]] = None,
) -> GovernanceContext:
    """
    Build a GovernanceContext, falling back to SPLGOV_PROGRAM_ID and then to
    the default program id when `program_id` is not given.
    """
    if program_id is None:
        program_id = os.environ.get(ENV_PROGRAM_ID) or DEFAULT_PROGRAM_ID

    kwargs = {
        "payer": _as_pubkey(payer),
        "program_id": _as_pubkey(program_id),
        "program_version": DEFAULT_PROGRAM_VERSION if program_version is None else program_version,
    }
    if seed_factory is not None:
        kwargs["seed_factory"] = seed_factory
    return GovernanceContext(**kwargs)
