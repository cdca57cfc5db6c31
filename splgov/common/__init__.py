"""Common utilities for splgov."""

from .blockchain import AccountInfo, SolanaRPC, TransactionResult
from .borsh import BorshReader, BorshWriter
from .crypto import create_program_address, derive, generate_seed
from .errors import (
    AccountNotFound,
    DerivationError,
    DerivationExhausted,
    GovernanceError,
    InvalidSeedError,
    MissingRequiredInput,
    TransportError,
    UnrecognizedEnumLabel,
)

__all__ = [
    "AccountInfo",
    "SolanaRPC",
    "TransactionResult",
    "BorshReader",
    "BorshWriter",
    "create_program_address",
    "derive",
    "generate_seed",
    # Errors
    "AccountNotFound",
    "DerivationError",
    "DerivationExhausted",
    "GovernanceError",
    "InvalidSeedError",
    "MissingRequiredInput",
    "TransportError",
    "UnrecognizedEnumLabel",
]
