"""Shared pytest fixtures for coininu-deploy tests."""

import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest
import structlog
from eth_account import Account
from eth_utils import keccak
from pydantic import SecretStr
from web3 import Web3
from web3.providers import BaseProvider

from coininu_deploy.config import DeployerSettings
from coininu_deploy.reporter import Reporter
from coininu_deploy.submitter import predict_contract_address

# Well-known Hardhat development account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

SCROLL_CHAIN_ID = 534354
START_BLOCK = 100


class FakeRPCProvider(BaseProvider):
    """
    In-process JSON-RPC endpoint.

    The deployment transaction is included in block ``START_BLOCK + 1`` on the
    ``confirm_after_polls``-th receipt poll; every later poll mines one more
    block. ``confirm_after_polls=None`` never includes it.
    """

    def __init__(
        self,
        balance: int = 10**18,
        gas_price: int = 10**9,
        gas_estimate: int = 1_200_000,
        nonce: int = 7,
        chain_id: int = SCROLL_CHAIN_ID,
        confirm_after_polls: Optional[int] = 1,
        status: int = 1,
        contract_address: Optional[str] = None,
        errors: Optional[Dict[str, Dict[str, Any]]] = None,
        raises: Optional[Dict[str, Exception]] = None,
    ):
        super().__init__()
        self.balance = balance
        self.gas_price = gas_price
        self.gas_estimate = gas_estimate
        self.nonce = nonce
        self.chain_id = chain_id
        self.confirm_after_polls = confirm_after_polls
        self.status = status
        self.contract_address = contract_address
        self.errors = errors or {}
        self.raises = raises or {}

        self.head = START_BLOCK
        self.calls: List[Tuple[str, Any]] = []
        self.sent: List[str] = []
        self.receipt_polls = 0
        self.included_block: Optional[int] = None
        self._sender: Optional[str] = None
        self._tx_hash: Optional[str] = None
        self._request_id = 0

    def is_connected(self, show_traceback: bool = False) -> bool:
        return True

    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]

    def make_request(self, method, params):
        self.calls.append((method, params))
        self._request_id += 1

        if method in self.raises:
            raise self.raises[method]
        if method in self.errors:
            return {"jsonrpc": "2.0", "id": self._request_id, "error": self.errors[method]}

        handler = getattr(self, f"_{method}", None)
        if handler is None:
            return {
                "jsonrpc": "2.0",
                "id": self._request_id,
                "error": {"code": -32601, "message": f"method {method} not supported"},
            }
        return {"jsonrpc": "2.0", "id": self._request_id, "result": handler(params)}

    def _eth_chainId(self, params):
        return hex(self.chain_id)

    def _eth_getTransactionCount(self, params):
        return hex(self.nonce)

    def _eth_gasPrice(self, params):
        return hex(self.gas_price)

    def _eth_estimateGas(self, params):
        return hex(self.gas_estimate)

    def _eth_getBalance(self, params):
        return hex(self.balance)

    def _eth_blockNumber(self, params):
        return hex(self.head)

    def _eth_sendRawTransaction(self, params):
        raw = params[0]
        self.sent.append(raw)
        self._sender = Account.recover_transaction(raw)
        self._tx_hash = Web3.to_hex(keccak(hexstr=raw))
        return self._tx_hash

    def _eth_getTransactionReceipt(self, params):
        self.receipt_polls += 1

        if self.included_block is None:
            if self.confirm_after_polls is None or self.receipt_polls < self.confirm_after_polls:
                return None
            self.head += 1
            self.included_block = self.head
        else:
            self.head += 1

        contract_address = self.contract_address or predict_contract_address(self._sender, self.nonce)
        return {
            "transactionHash": params[0],
            "transactionIndex": "0x0",
            "blockHash": "0x" + "11" * 32,
            "blockNumber": hex(self.included_block),
            "from": self._sender,
            "to": None,
            "cumulativeGasUsed": hex(self.gas_estimate),
            "gasUsed": hex(self.gas_estimate),
            "effectiveGasPrice": hex(self.gas_price),
            "contractAddress": contract_address,
            "logs": [],
            "logsBloom": "0x" + "00" * 256,
            "status": hex(self.status),
            "type": "0x0",
        }


class FakeClock:
    """Monotonic clock whose ``sleep`` advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop any logging configuration a test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the Hardhat artifacts tree used by the tests."""
    return fixtures_dir / "artifacts" / "contracts"


@pytest.fixture
def provider() -> FakeRPCProvider:
    return FakeRPCProvider()


@pytest.fixture
def w3(provider: FakeRPCProvider) -> Web3:
    return Web3(provider)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def credential() -> SecretStr:
    return SecretStr(TEST_PRIVATE_KEY)


@pytest.fixture
def settings(artifacts_dir: Path) -> DeployerSettings:
    """Settings for a ScrollL2 run against the fixture artifacts."""
    return DeployerSettings(
        network="scrollL2",
        private_key=TEST_PRIVATE_KEY,
        artifacts_dir=artifacts_dir,
        confirmation_timeout=30,
        poll_interval=2,
        confirmations=1,
    )


@pytest.fixture
def reporter_streams():
    """Reporter writing into in-memory streams, returned as (reporter, out, err)."""
    out = io.StringIO()
    err = io.StringIO()
    return Reporter(out=out, err=err), out, err
