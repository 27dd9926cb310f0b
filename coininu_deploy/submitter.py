"""
Contract-creation transaction submission.

Builds, signs and broadcasts a single deployment transaction. Broadcasting
consumes one nonce of the sender and, once mined, a gas fee; nothing in this
module ever resubmits.
"""

import re
from typing import Any, Dict

import rlp
import structlog
from eth_account import Account
from eth_utils import keccak, to_canonical_address, to_checksum_address
from pydantic import SecretStr
from web3 import Web3
from web3.exceptions import Web3Exception

from .contracts.factory import ContractFactory
from .exceptions import SubmissionError
from .types import DeploymentRequest, PendingDeployment

logger = structlog.get_logger()

_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

# Errors raised by web3 and its HTTP transport when the endpoint misbehaves
ENDPOINT_ERRORS = (Web3Exception, ValueError, OSError)


def predict_contract_address(sender: str, nonce: int) -> str:
    """
    Compute the address a contract created by ``sender`` at ``nonce`` will get.

    Args:
        sender: Deployer address
        nonce: Transaction count of the deployer at submission time

    Returns:
        Checksummed contract address
    """
    encoded = rlp.encode([to_canonical_address(sender), nonce])
    return to_checksum_address(keccak(encoded)[12:])


def load_signer(credential):
    """
    Turn the configured credential into an eth_account ``LocalAccount``.

    Raises:
        SubmissionError: If the credential is absent or malformed
    """
    if credential is None:
        raise SubmissionError(
            "No signing key configured; set PRIVATE_KEY in the environment or .env file",
            reason="credential",
        )

    secret = credential.get_secret_value() if isinstance(credential, SecretStr) else credential
    secret = secret.strip()
    if not _PRIVATE_KEY_RE.match(secret):
        raise SubmissionError(
            "Signing key is malformed; expected 32 bytes of hex",
            reason="credential",
        )

    try:
        return Account.from_key(secret)
    except (ValueError, TypeError) as e:
        raise SubmissionError("Signing key is not a valid private key", reason="credential") from e


def _build_transaction(w3: Web3, factory: ContractFactory, request: DeploymentRequest, sender: str) -> Dict[str, Any]:
    args = factory.get_deployment_data(*request.constructor_args)["constructor_args"]
    constructor = factory.bind(w3).constructor(*args)

    nonce = w3.eth.get_transaction_count(sender)
    gas_price = w3.eth.gas_price
    chain_id = w3.eth.chain_id

    gas = request.gas_limit
    if gas is None:
        gas = constructor.estimate_gas({"from": sender})

    balance = w3.eth.get_balance(sender)
    cost = gas * gas_price
    if balance == 0 or balance < cost:
        raise SubmissionError(
            f"Insufficient funds for gas: account {sender} has {balance} wei, "
            f"deployment needs up to {cost} wei",
            reason="balance",
        )

    return constructor.build_transaction(
        {
            "from": sender,
            "nonce": nonce,
            "gas": gas,
            "gasPrice": gas_price,
            "chainId": chain_id,
            "value": 0,
        }
    )


def submit_deployment(w3: Web3, factory: ContractFactory, request: DeploymentRequest) -> PendingDeployment:
    """
    Sign and broadcast the contract-creation transaction.

    Args:
        w3: Web3 instance connected to the target endpoint
        factory: Handle of the contract to deploy
        request: Deployment parameters, including the signing credential

    Returns:
        Handle of the broadcast transaction; does not wait for it to be mined

    Raises:
        SubmissionError: If the credential is unusable, the balance cannot
            cover gas, or the endpoint rejects or fails the request
    """
    signer = load_signer(request.credential)
    sender = signer.address

    try:
        factory.get_deployment_data(*request.constructor_args)
    except ValueError as e:
        raise SubmissionError(str(e), reason="request") from e

    try:
        transaction = _build_transaction(w3, factory, request, sender)
    except ENDPOINT_ERRORS as e:
        raise SubmissionError(
            f"Endpoint {request.endpoint_url} failed while preparing the deployment: {e}",
            reason="endpoint",
        ) from e

    signed = signer.sign_transaction(transaction)

    try:
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    except ENDPOINT_ERRORS as e:
        raise SubmissionError(
            f"Endpoint {request.endpoint_url} rejected the deployment transaction: {e}",
            reason="endpoint",
        ) from e

    pending = PendingDeployment(
        tx_hash=Web3.to_hex(tx_hash),
        sender=sender,
        nonce=transaction["nonce"],
        expected_address=predict_contract_address(sender, transaction["nonce"]),
    )
    logger.info(
        "deployment_submitted",
        contract=factory.contract_name,
        tx_hash=pending.tx_hash,
        sender=sender,
        nonce=pending.nonce,
        expected_address=pending.expected_address,
    )
    return pending
