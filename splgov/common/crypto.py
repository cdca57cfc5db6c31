"""
Cryptographic utilities for program-derived addresses.

A derived address is sha256(seeds || bump || program_id || marker) for the
first bump, counting down from 255, whose digest is not a valid ed25519
point. Nobody holds a private key for such an address, so only the program
can sign for it.
"""

import hashlib
import logging
from typing import Sequence, Tuple

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import DerivationExhausted, InvalidSeedError

logger = logging.getLogger(__name__)

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEEDS = 16
MAX_SEED_LEN = 32
MAX_BUMP_ATTEMPTS = 256


def hash_seeds(seeds: Sequence[bytes], bump: int, program_id: Pubkey) -> bytes:
    """Compute the sha256 candidate for one bump value."""
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(bytes([bump]))
    digest.update(bytes(program_id))
    digest.update(PDA_MARKER)
    return digest.digest()


def _check_seeds(seeds: Sequence[bytes]) -> None:
    # The bump occupies one seed slot
    if len(seeds) >= MAX_SEEDS:
        raise InvalidSeedError(f"Too many seeds: {len(seeds)} (max {MAX_SEEDS - 1})")
    for i, seed in enumerate(seeds):
        if not isinstance(seed, (bytes, bytearray)):
            raise InvalidSeedError(f"Seed {i} is {type(seed).__name__}, expected bytes")
        if len(seed) > MAX_SEED_LEN:
            raise InvalidSeedError(
                f"Seed {i} is {len(seed)} bytes long (max {MAX_SEED_LEN})"
            )


def create_program_address(seeds: Sequence[bytes], bump: int, program_id: Pubkey) -> Pubkey:
    """Derive the address for a single, known bump."""
    _check_seeds(seeds)
    candidate = Pubkey(hash_seeds(seeds, bump, program_id))
    if candidate.is_on_curve():
        raise DerivationExhausted(seeds, program_id, attempts=1)
    return candidate


def derive(
    domain_tag: bytes,
    seeds: Sequence[bytes],
    program_id: Pubkey,
    max_attempts: int = MAX_BUMP_ATTEMPTS,
) -> Tuple[Pubkey, int]:
    """
    Derive (address, bump) for a domain tag and seed tuple under a program.

    The domain tag is the first seed. Deterministic and side-effect free.
    Raises DerivationExhausted when every bump in the budget lands on-curve.
    """
    full_seeds = [domain_tag, *seeds]
    _check_seeds(full_seeds)

    attempts = min(max_attempts, MAX_BUMP_ATTEMPTS)
    for bump in range(255, 255 - attempts, -1):
        candidate = Pubkey(hash_seeds(full_seeds, bump, program_id))
        if not candidate.is_on_curve():
            logger.debug(f"Derived {candidate} (bump={bump}) from tag {domain_tag!r}")
            return candidate, bump

    raise DerivationExhausted(full_seeds, program_id, attempts)


def generate_seed() -> Pubkey:
    """Return a fresh, never-before-seen 32-byte seed."""
    return Keypair().pubkey()
