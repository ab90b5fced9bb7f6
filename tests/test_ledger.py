from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from config.settings import LedgerConfig
from ledger.contract_client import (
    AMOUNT_SCALE,
    LedgerClient,
    LedgerError,
    hash_field,
    scale_amount,
)

ADMIN = "0x" + "11" * 20
CONTRACT = "0x" + "22" * 20


@pytest.fixture
def w3():
    return MagicMock()


@pytest.fixture
def client(w3):
    settings = LedgerConfig(
        gateway_url="http://localhost:8545",
        admin_private_key="0x" + "ab" * 32,
        admin_account_address=ADMIN,
        contract_address=CONTRACT,
    )
    return LedgerClient(settings, w3=w3)


def _functions(w3):
    return w3.eth.contract.return_value.functions


def test_hash_field_is_keccak_bytes32():
    digest = hash_field("sr-1")

    assert len(digest) == 32
    assert digest == bytes(Web3.keccak(text="sr-1"))
    assert digest != hash_field("sr-2")


def test_scale_amount_has_no_float_rounding():
    assert scale_amount(2.5) == 2_500_000_000_000_000_000
    assert scale_amount(0.1) == 100_000_000_000_000_000
    assert scale_amount("3") == 3 * 10 ** 18


@pytest.mark.parametrize("amount", [-1, "not-a-number", float("nan"), float("inf"), float("-inf")])
def test_scale_amount_rejects_bad_values(amount):
    with pytest.raises(LedgerError):
        scale_amount(amount)


def test_commit_service_request_signs_and_sends(client, w3):
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.send_raw_transaction.return_value = b"\x12" * 32
    function = _functions(w3).commit_service_request.return_value

    handle = client.commit_service_request("sr-1", "u-1", "p-1", 2.5, "2024-02-01T10:00:00Z")

    _functions(w3).commit_service_request.assert_called_once_with(
        hash_field("sr-1"),
        hash_field("u-1"),
        hash_field("p-1"),
        2_500_000_000_000_000_000,
        hash_field("2024-02-01T10:00:00Z"),
    )
    function.build_transaction.assert_called_once_with(
        {"from": Web3.to_checksum_address(ADMIN), "nonce": 7}
    )
    signed = w3.eth.account.sign_transaction.return_value
    w3.eth.send_raw_transaction.assert_called_once_with(signed.raw_transaction)
    assert handle.transaction_hash == "0x" + "12" * 32
    w3.eth.wait_for_transaction_receipt.assert_not_called()


def test_commit_service_request_wraps_transport_errors(client, w3):
    w3.eth.get_transaction_count.side_effect = ConnectionError("gateway down")

    with pytest.raises(LedgerError, match="gateway down"):
        client.commit_service_request("sr-1", "u-1", "p-1", 1, "t")


def test_get_commitment_of_parses_positional_result(client, w3):
    call = _functions(w3).get_commitment_of.return_value.call
    call.return_value = (b"\xaa" * 32, b"\xbb" * 32, 2_500_000_000_000_000_000, 1)

    commitment = client.get_commitment_of("sr-1")

    _functions(w3).get_commitment_of.assert_called_once_with(hash_field("sr-1"))
    assert commitment.requestor == "0x" + "aa" * 32
    assert commitment.provider == "0x" + "bb" * 32
    assert commitment.amount == 2.5
    assert commitment.is_completed is True


def test_get_commitment_of_flag_other_than_one_is_not_completed(client, w3):
    _functions(w3).get_commitment_of.return_value.call.return_value = (b"\x00" * 32, b"\x00" * 32, 0, 2)

    assert client.get_commitment_of("sr-1").is_completed is False


def test_get_commitment_of_short_result(client, w3):
    _functions(w3).get_commitment_of.return_value.call.return_value = (b"\x00" * 32,)

    with pytest.raises(LedgerError):
        client.get_commitment_of("sr-1")


def test_amount_scale():
    assert AMOUNT_SCALE == Decimal(10) ** 18


def test_commit_service_request_rejects_non_finite_amount(client, w3):
    with pytest.raises(LedgerError, match="non-finite"):
        client.commit_service_request("sr-1", "u-1", "p-1", float("nan"), "t")

    w3.eth.send_raw_transaction.assert_not_called()
