"""
Blockchain Interface for splgov

Handles signing, submission and account fetches against a Solana JSON-RPC
endpoint. This is the only place that performs I/O or retries.
"""

import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .errors import TransportError

logger = logging.getLogger(__name__)

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


@dataclass
class TransactionResult:
    success: bool
    signature: Optional[str] = None
    error: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


@dataclass
class AccountInfo:
    address: Pubkey
    owner: Pubkey
    lamports: int
    data: bytes
    executable: bool = False


class SolanaRPC:
    """JSON-RPC client that signs and submits single-instruction transactions."""

    def __init__(
        self,
        rpc_url: str = "https://api.devnet.solana.com",
        commitment: str = "confirmed",
        timeout_seconds: float = 30,
        confirm_timeout_seconds: float = 60,
        retries: int = 3,
        retry_delay: float = 2.0,
        session: Optional[requests.Session] = None,
    ):
        if commitment not in COMMITMENT_LEVELS:
            raise ValueError(f"Unknown commitment '{commitment}'")
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.timeout_seconds = timeout_seconds
        self.confirm_timeout_seconds = confirm_timeout_seconds
        self.retries = retries
        self.retry_delay = retry_delay
        self.session = session or requests.Session()
        self._request_id = 0

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> "SolanaRPC":
        """Create from a NetworkConfig."""
        return cls(
            rpc_url=config.rpc_url,
            commitment=config.commitment,
            timeout_seconds=config.timeout_seconds,
            confirm_timeout_seconds=config.confirm_timeout_seconds,
            retries=config.retries,
            retry_delay=config.retry_delay,
            session=session,
        )

    def _request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }
        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout_seconds)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise TransportError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"{method} returned invalid JSON: {e}") from e

        if body.get("error"):
            error = body["error"]
            raise TransportError(f"{method} error {error.get('code')}: {error.get('message')}")
        return body.get("result")

    def is_connected(self) -> bool:
        """Check whether the RPC node reports itself healthy."""
        try:
            return self._request("getHealth") == "ok"
        except TransportError as e:
            logger.warning(f"RPC node unhealthy: {e}")
            return False

    def get_balance(self, address: Pubkey) -> int:
        """Get the balance of an address in lamports."""
        result = self._request("getBalance", [str(address), {"commitment": self.commitment}])
        return result["value"]

    def get_latest_blockhash(self) -> Hash:
        result = self._request("getLatestBlockhash", [{"commitment": self.commitment}])
        return Hash.from_string(result["value"]["blockhash"])

    def get_account_info(self, address: Pubkey) -> Optional[AccountInfo]:
        """Fetch an account; None when it does not exist."""
        result = self._request(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self.commitment}],
        )
        value = result["value"] if result else None
        if value is None:
            return None

        encoded, _encoding = value["data"]
        return AccountInfo(
            address=address,
            owner=Pubkey.from_string(value["owner"]),
            lamports=value["lamports"],
            data=base64.b64decode(encoded),
            executable=value.get("executable", False),
        )

    def send_transaction(self, transaction: Transaction) -> str:
        """Send a signed transaction and return its signature."""
        encoded = base64.b64encode(bytes(transaction)).decode("ascii")
        return self._request(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": self.commitment}],
        )

    def confirm_transaction(self, signature: str, poll_interval: float = 0.5) -> None:
        """Poll until the signature reaches the configured commitment."""
        target = COMMITMENT_LEVELS.index(self.commitment)
        deadline = time.monotonic() + self.confirm_timeout_seconds

        while time.monotonic() < deadline:
            result = self._request(
                "getSignatureStatuses", [[signature], {"searchTransactionHistory": True}]
            )
            status = result["value"][0] if result and result["value"] else None
            if status is not None:
                if status.get("err"):
                    raise TransportError(f"Transaction {signature} failed: {status['err']}")
                reached = status.get("confirmationStatus") or "processed"
                if COMMITMENT_LEVELS.index(reached) >= target:
                    return
            time.sleep(poll_interval)

        raise TransportError(
            f"Transaction {signature} not {self.commitment} after {self.confirm_timeout_seconds}s"
        )

    def build_transaction(self, instruction: Instruction, signer: Keypair) -> Transaction:
        message = Message([instruction], signer.pubkey())
        return Transaction([signer], message, self.get_latest_blockhash())

    def submit(self, instruction: Instruction, signer: Keypair) -> TransactionResult:
        """
        Sign, send and confirm one instruction.

        Only building and sending are retried, each time with a fresh
        blockhash. Once the node has returned a signature the transaction is
        never resent: a failed or unconfirmed transaction comes back as an
        unsuccessful result that carries its signature.
        """
        signature = None
        error = "No attempts made"

        for attempt in range(self.retries):
            try:
                transaction = self.build_transaction(instruction, signer)
                signature = self.send_transaction(transaction)
                break
            except TransportError as e:
                error = str(e)
                logger.warning(
                    f"Submission failed (attempt {attempt + 1}/{self.retries}): {e}"
                )
            if attempt < self.retries - 1:
                time.sleep(self.retry_delay * (attempt + 1))

        if signature is None:
            return TransactionResult(success=False, error=error)

        try:
            self.confirm_transaction(signature)
        except TransportError as e:
            logger.error(f"Transaction {signature} sent but not confirmed: {e}")
            return TransactionResult(success=False, signature=signature, error=str(e))

        logger.info(f"Transaction confirmed: {signature}")
        return TransactionResult(success=True, signature=signature)
