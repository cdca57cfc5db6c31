"""Tests for the governance context and network configuration."""

import pytest
from solders.pubkey import Pubkey

from splgov.common.errors import MissingRequiredInput
from splgov.core.constants import DEFAULT_PROGRAM_ID
from splgov.core.context import GovernanceContext, NetworkConfig, load_context

from .conftest import make_pubkey


class TestGovernanceContext:
    def test_defaults(self, payer: Pubkey) -> None:
        ctx = GovernanceContext(payer=payer)
        assert ctx.program_id == DEFAULT_PROGRAM_ID
        assert ctx.program_version == 3
        assert ctx.fresh_seed() != ctx.fresh_seed()

    def test_rejects_unsupported_version(self, payer: Pubkey) -> None:
        with pytest.raises(ValueError):
            GovernanceContext(payer=payer, program_version=2)

    def test_requires_payer(self) -> None:
        with pytest.raises(MissingRequiredInput):
            GovernanceContext(payer=None)

    def test_is_immutable(self, payer: Pubkey) -> None:
        ctx = GovernanceContext(payer=payer)
        with pytest.raises(Exception):
            ctx.program_id = make_pubkey(1)


class TestLoadContext:
    def test_accepts_base58_strings(self, payer: Pubkey) -> None:
        ctx = load_context(str(payer), program_id=str(make_pubkey(77)))
        assert ctx.payer == payer
        assert ctx.program_id == make_pubkey(77)

    def test_program_id_from_environment(self, payer: Pubkey, monkeypatch) -> None:
        monkeypatch.setenv("SPLGOV_PROGRAM_ID", str(make_pubkey(78)))
        assert load_context(payer).program_id == make_pubkey(78)

    def test_explicit_program_id_wins(self, payer: Pubkey, monkeypatch) -> None:
        monkeypatch.setenv("SPLGOV_PROGRAM_ID", str(make_pubkey(78)))
        assert load_context(payer, program_id=make_pubkey(79)).program_id == make_pubkey(79)

    def test_explicit_zero_version_is_rejected(self, payer: Pubkey) -> None:
        with pytest.raises(ValueError):
            load_context(payer, program_version=0)

    def test_default_program_id(self, payer: Pubkey, monkeypatch) -> None:
        monkeypatch.delenv("SPLGOV_PROGRAM_ID", raising=False)
        assert load_context(payer).program_id == DEFAULT_PROGRAM_ID

    def test_custom_seed_factory(self, payer: Pubkey) -> None:
        ctx = load_context(payer, seed_factory=lambda: make_pubkey(5))
        assert ctx.fresh_seed() == make_pubkey(5)


class TestNetworkConfig:
    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("SPLGOV_RPC_URL", "http://localhost:8899")
        monkeypatch.setenv("SPLGOV_COMMITMENT", "finalized")
        config = NetworkConfig.from_env()
        assert config.rpc_url == "http://localhost:8899"
        assert config.commitment == "finalized"

    def test_overrides_win(self, monkeypatch) -> None:
        monkeypatch.setenv("SPLGOV_RPC_URL", "http://localhost:8899")
        config = NetworkConfig.from_env(rpc_url="http://other:8899", retries=None)
        assert config.rpc_url == "http://other:8899"
        assert config.retries == 3
