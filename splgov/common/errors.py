"""
Error taxonomy for the governance compiler.

Everything raised by the compiler is synchronous and fatal to the call that
raised it: the compiler holds no state, so there is nothing to roll back.
"""

from typing import Optional, Sequence


class GovernanceError(Exception):
    """Base class for every error raised by splgov."""


class DerivationError(GovernanceError):
    """An address could not be derived from the given seeds."""


class DerivationExhausted(DerivationError):
    """No off-curve address was found within the bump budget."""

    def __init__(self, seeds: Sequence[bytes], program_id: object, attempts: int):
        self.seeds = list(seeds)
        self.program_id = program_id
        self.attempts = attempts
        super().__init__(
            f"Unable to find an off-curve address for {len(self.seeds)} seeds "
            f"under program {program_id} after {attempts} attempts"
        )


class InvalidSeedError(DerivationError):
    """Seeds violate the runtime limits (count or per-seed length)."""


class MissingRequiredInput(GovernanceError, ValueError):
    """A required identifier was not supplied by the caller."""

    def __init__(self, field: str, operation: Optional[str] = None):
        self.field = field
        self.operation = operation
        where = f" for {operation}" if operation else ""
        super().__init__(f"Missing required input '{field}'{where}")


class UnrecognizedEnumLabel(GovernanceError, ValueError):
    """A friendly label does not map to any variant of a tagged field."""

    def __init__(self, field: str, label: object, allowed: Sequence[str]):
        self.field = field
        self.label = label
        self.allowed = tuple(allowed)
        super().__init__(
            f"Unrecognized {field} label {label!r}; expected one of {', '.join(self.allowed)}"
        )


class AccountNotFound(GovernanceError):
    """The fetched account does not exist on-chain."""

    def __init__(self, address: object):
        self.address = address
        super().__init__(f"Couldn't find the account {address}")


class TransportError(GovernanceError):
    """Submission or RPC failure reported by the transport collaborator."""
