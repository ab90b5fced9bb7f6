"""
Commitment Ledger Client
========================

Mirrors completed service requests onto the commitment contract.

  - commit_service_request: one signed contract call from the admin account.
    Returns as soon as the node accepts the transaction (no receipt wait).
  - get_commitment_of: read-only call returning the stored commitment.

String identifiers are keccak-256 hashed into bytes32 before they reach the
chain; amounts are fixed-point with 18 decimals.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from web3 import Web3

from config.settings import LedgerConfig, get_config
from ledger.abi import COMMITMENT_CONTRACT_ABI
from proto.service_request_pb2 import ServiceCommitmentData

logger = logging.getLogger(__name__)

AMOUNT_DECIMALS = 18
AMOUNT_SCALE = Decimal(10) ** AMOUNT_DECIMALS


class LedgerError(Exception):
    """Any failure talking to the ledger."""


@dataclass
class LedgerTransaction:
    transaction_hash: str


def hash_field(value: str) -> bytes:
    """keccak-256 of the UTF-8 string, as a bytes32 contract argument."""
    return bytes(Web3.keccak(text=value))


def scale_amount(amount: Union[float, int, str]) -> int:
    """Convert a credit amount into the contract's fixed-point integer."""
    try:
        scaled = Decimal(str(amount)) * AMOUNT_SCALE
    except InvalidOperation as exc:
        raise LedgerError(f"invalid amount: {amount!r}") from exc
    if not scaled.is_finite():
        raise LedgerError(f"non-finite amount: {amount!r}")
    if scaled < 0:
        raise LedgerError(f"negative amount: {amount!r}")
    return int(scaled)


class LedgerClient:
    """Admin-signed client for the commitment contract."""

    def __init__(self, settings: Optional[LedgerConfig] = None, w3: Optional[Web3] = None) -> None:
        settings = settings or get_config().ledger
        self.w3 = w3 or Web3(Web3.HTTPProvider(settings.gateway_url))
        self.admin_address = Web3.to_checksum_address(settings.admin_account_address)
        self._private_key = settings.admin_private_key
        self.contract_address = Web3.to_checksum_address(settings.contract_address)
        self.contract = self.w3.eth.contract(
            address=self.contract_address, abi=COMMITMENT_CONTRACT_ABI
        )
        logger.info("Ledger client initialized for contract %s", self.contract_address)

    def commit_service_request(
        self,
        request_id: str,
        requestor: str,
        provider: str,
        amount: float,
        timestamp: str,
    ) -> LedgerTransaction:
        try:
            amount_units = scale_amount(amount)
            calldata = [
                hash_field(request_id),
                hash_field(requestor),
                hash_field(provider),
                amount_units,
                hash_field(timestamp),
            ]
            function = self.contract.functions.commit_service_request(*calldata)
            nonce = self.w3.eth.get_transaction_count(self.admin_address)
            transaction = function.build_transaction({
                "from": self.admin_address,
                "nonce": nonce,
            })
            signed = self.w3.eth.account.sign_transaction(transaction, self._private_key)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except LedgerError:
            raise
        except Exception as exc:
            raise LedgerError(f"commit_service_request failed: {exc}") from exc

        handle = LedgerTransaction(transaction_hash=Web3.to_hex(tx_hash))
        logger.info(
            "Commitment submitted: request=%s amount=%s tx=%s",
            request_id,
            amount_units,
            handle.transaction_hash,
        )
        return handle

    def get_commitment_of(self, request_id: str) -> ServiceCommitmentData:
        try:
            result = self.contract.functions.get_commitment_of(hash_field(request_id)).call()
        except Exception as exc:
            raise LedgerError(f"get_commitment_of failed: {exc}") from exc

        if len(result) < 4:
            raise LedgerError(f"get_commitment_of returned {len(result)} values, expected 4")

        requestor, provider, amount, flag = result[:4]
        return ServiceCommitmentData(
            requestor=Web3.to_hex(requestor),
            provider=Web3.to_hex(provider),
            amount=float(Decimal(int(amount)) / AMOUNT_SCALE),
            is_completed=str(flag) == "1",
        )
