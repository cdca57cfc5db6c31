"""Tests for program-derived address derivation."""

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from splgov.common import crypto
from splgov.common.crypto import create_program_address, derive, generate_seed
from splgov.common.errors import DerivationError, DerivationExhausted, InvalidSeedError

from .conftest import make_pubkey


class TestDerive:
    """Tests for derive()."""

    def test_is_deterministic(self, program_id: Pubkey) -> None:
        first = derive(b"governance", [b"SDK TEST ##14"], program_id)
        second = derive(b"governance", [b"SDK TEST ##14"], program_id)
        assert first == second

    def test_matches_runtime_derivation(self, program_id: Pubkey) -> None:
        mint = make_pubkey(11)
        realm, _ = derive(b"governance", [b"SDK TEST ##14"], program_id)

        assert derive(b"governance", [b"SDK TEST ##14"], program_id) == \
            Pubkey.find_program_address([b"governance", b"SDK TEST ##14"], program_id)
        assert derive(b"governance", [bytes(realm), bytes(mint)], program_id) == \
            Pubkey.find_program_address([b"governance", bytes(realm), bytes(mint)], program_id)

    def test_result_is_off_curve(self, program_id: Pubkey) -> None:
        for i in range(20):
            address, _ = derive(b"native-treasury", [bytes(make_pubkey(i))], program_id)
            assert not address.is_on_curve()

    def test_distinct_seeds_give_distinct_addresses(self, program_id: Pubkey) -> None:
        addresses = {
            derive(b"governance", [f"realm-{i}".encode()], program_id)[0] for i in range(50)
        }
        assert len(addresses) == 50

    def test_domain_tag_separates_addresses(self, program_id: Pubkey) -> None:
        seed = bytes(make_pubkey(3))
        assert derive(b"realm-config", [seed], program_id)[0] != \
            derive(b"native-treasury", [seed], program_id)[0]

    def test_program_id_separates_addresses(self) -> None:
        a, _ = derive(b"governance", [b"name"], make_pubkey(1))
        b, _ = derive(b"governance", [b"name"], make_pubkey(2))
        assert a != b

    def test_rejects_long_seed(self, program_id: Pubkey) -> None:
        with pytest.raises(InvalidSeedError):
            derive(b"governance", [b"x" * 33], program_id)

    def test_rejects_too_many_seeds(self, program_id: Pubkey) -> None:
        with pytest.raises(InvalidSeedError):
            derive(b"governance", [b"x"] * 15, program_id)

    def test_rejects_non_bytes_seed(self, program_id: Pubkey) -> None:
        with pytest.raises(InvalidSeedError):
            derive(b"governance", ["text"], program_id)

    def test_exhaustion_is_fatal(self, program_id: Pubkey, monkeypatch) -> None:
        class AlwaysOnCurve:
            def __init__(self, raw: bytes):
                self.raw = raw

            def is_on_curve(self) -> bool:
                return True

        monkeypatch.setattr(crypto, "Pubkey", AlwaysOnCurve)

        with pytest.raises(DerivationExhausted) as exc_info:
            derive(b"governance", [b"name"], program_id)

        assert exc_info.value.attempts == 256
        assert isinstance(exc_info.value, DerivationError)

    def test_attempt_budget_is_respected(self, program_id: Pubkey, monkeypatch) -> None:
        calls = []

        class CountingOnCurve:
            def __init__(self, raw: bytes):
                calls.append(raw)

            def is_on_curve(self) -> bool:
                return True

        monkeypatch.setattr(crypto, "Pubkey", CountingOnCurve)

        with pytest.raises(DerivationExhausted):
            derive(b"governance", [b"name"], program_id, max_attempts=4)
        assert len(calls) == 4


class TestCreateProgramAddress:
    """Tests for create_program_address()."""

    def test_reproduces_derived_address(self, program_id: Pubkey) -> None:
        address, bump = derive(b"governance", [b"name"], program_id)
        assert create_program_address([b"governance", b"name"], bump, program_id) == address


class TestGenerateSeed:
    def test_seeds_are_fresh(self) -> None:
        assert generate_seed() != generate_seed()

    def test_keypair_keys_are_on_curve(self) -> None:
        # Sanity check for the off-curve test above
        assert Keypair().pubkey().is_on_curve()
