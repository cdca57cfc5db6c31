"""Tests for on-chain account decoding."""

import pytest

from splgov.common.borsh import BorshWriter
from splgov.core.accounts import decode, decode_realm, decode_token_owner_record
from splgov.core.constants import GovernanceAccountType

from .conftest import make_pubkey


def realm_bytes(council=True, authority=True, account_type=16) -> bytes:
    writer = BorshWriter().u8(account_type).pubkey(make_pubkey(11))
    writer.raw(bytes(8)).u64(1_000_000).u8(1).u64(5_000_000)
    writer.boolean(council)
    if council:
        writer.pubkey(make_pubkey(12))
    writer.raw(bytes(6)).u16(0)
    writer.boolean(authority)
    if authority:
        writer.pubkey(make_pubkey(7))
    writer.string("SDK TEST ##14").raw(bytes(128))
    return writer.getvalue()


class TestDecodeRealm:
    def test_decodes_fields(self) -> None:
        realm = decode_realm(realm_bytes())
        assert realm.account_type == GovernanceAccountType.REALM_V2
        assert realm.community_mint == make_pubkey(11)
        assert realm.config.min_community_weight_to_create_governance == 1_000_000
        assert realm.config.community_mint_max_voter_weight_source.kind == "absolute"
        assert realm.config.community_mint_max_voter_weight_source.value == 5_000_000
        assert realm.config.council_mint == make_pubkey(12)
        assert realm.authority == make_pubkey(7)
        assert realm.name == "SDK TEST ##14"

    def test_optional_fields(self) -> None:
        realm = decode_realm(realm_bytes(council=False, authority=False))
        assert realm.config.council_mint is None
        assert realm.authority is None

    def test_wrong_account_type(self) -> None:
        with pytest.raises(ValueError):
            decode_realm(realm_bytes(account_type=17))

    def test_truncated_data(self) -> None:
        with pytest.raises(ValueError):
            decode_realm(realm_bytes()[:40])


class TestDecodeTokenOwnerRecord:
    def test_decodes_fields(self) -> None:
        data = (
            BorshWriter().u8(17)
            .pubkey(make_pubkey(1)).pubkey(make_pubkey(11)).pubkey(make_pubkey(30))
            .u64(7_000_000).u64(2).u8(1).u8(1).raw(bytes(6))
            .boolean(True).pubkey(make_pubkey(31))
            .raw(bytes(128))
            .getvalue()
        )
        record = decode_token_owner_record(data)
        assert record.realm == make_pubkey(1)
        assert record.governing_token_mint == make_pubkey(11)
        assert record.governing_token_owner == make_pubkey(30)
        assert record.governing_token_deposit_amount == 7_000_000
        assert record.unrelinquished_votes_count == 2
        assert record.outstanding_proposal_count == 1
        assert record.governance_delegate == make_pubkey(31)


class TestDecode:
    def test_dispatches_by_type_name(self) -> None:
        assert decode("realmV2", realm_bytes()).name == "SDK TEST ##14"

    def test_unknown_type_name(self) -> None:
        with pytest.raises(ValueError):
            decode("proposalV2", b"")
