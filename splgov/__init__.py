"""
splgov

Client-side instruction compiler for the SPL Governance program: derives
every account a governance operation touches and encodes the instruction the
program expects.
"""

__version__ = "0.1.0"

from .client import GovernanceClient
from .common import (
    AccountNotFound,
    DerivationExhausted,
    GovernanceError,
    MissingRequiredInput,
    SolanaRPC,
    UnrecognizedEnumLabel,
    derive,
)
from .core import (
    DEFAULT_PROGRAM_ID,
    GovernanceContext,
    InstructionDescriptor,
    PdaClient,
    compile_operation,
    load_context,
)

__all__ = [
    "GovernanceClient",
    "AccountNotFound",
    "DerivationExhausted",
    "GovernanceError",
    "MissingRequiredInput",
    "SolanaRPC",
    "UnrecognizedEnumLabel",
    "derive",
    "DEFAULT_PROGRAM_ID",
    "GovernanceContext",
    "InstructionDescriptor",
    "PdaClient",
    "compile_operation",
    "load_context",
]
