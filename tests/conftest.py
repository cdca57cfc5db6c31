"""
Shared fixtures for splgov tests.

Addresses are fixed byte patterns so that every derivation is reproducible,
and the seed factory is a counter so fresh seeds are predictable.
"""

import itertools

import pytest
from solders.pubkey import Pubkey

from splgov.core.constants import DEFAULT_PROGRAM_ID
from splgov.core.context import GovernanceContext


def make_pubkey(n: int) -> Pubkey:
    return Pubkey(bytes([n]) * 32)


@pytest.fixture
def program_id() -> Pubkey:
    return DEFAULT_PROGRAM_ID


@pytest.fixture
def payer() -> Pubkey:
    return make_pubkey(7)


@pytest.fixture
def community_mint() -> Pubkey:
    return make_pubkey(11)


@pytest.fixture
def council_mint() -> Pubkey:
    return make_pubkey(12)


@pytest.fixture
def seed_factory():
    counter = itertools.count(100)
    return lambda: make_pubkey(next(counter))


@pytest.fixture
def ctx(payer, seed_factory) -> GovernanceContext:
    return GovernanceContext(payer=payer, seed_factory=seed_factory)
