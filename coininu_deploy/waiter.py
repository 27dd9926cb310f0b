"""
Confirmation waiting for broadcast deployment transactions.

The wait is bounded: inclusion latency is decided by the network, so every
wait carries an explicit timeout after which the outcome is reported as
unknown rather than failed.
"""

import time
from typing import Callable

import requests
import structlog
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from .exceptions import ConfirmationError, DeploymentReverted
from .types import DeploymentResult, PendingDeployment

logger = structlog.get_logger()


def _fetch_receipt(w3: Web3, pending: PendingDeployment):
    """Return the receipt, or None while the transaction is not mined or the request timed out."""
    try:
        return w3.eth.get_transaction_receipt(pending.tx_hash)
    except TransactionNotFound:
        return None
    except requests.Timeout as e:
        logger.warning("receipt_request_timed_out", tx_hash=pending.tx_hash, error=str(e))
        return None
    except (Web3Exception, ValueError, OSError) as e:
        raise ConfirmationError(
            f"Lost connection while waiting for transaction {pending.tx_hash}: {e}",
            tx_hash=pending.tx_hash,
            expected_address=pending.expected_address,
        ) from e


def _confirmation_count(w3: Web3, pending: PendingDeployment, receipt_block: int) -> int:
    try:
        head = w3.eth.block_number
    except (Web3Exception, ValueError, OSError) as e:
        raise ConfirmationError(
            f"Lost connection while waiting for transaction {pending.tx_hash}: {e}",
            tx_hash=pending.tx_hash,
            expected_address=pending.expected_address,
        ) from e
    return head - receipt_block + 1


def _to_result(pending: PendingDeployment, receipt) -> DeploymentResult:
    block_number = receipt["blockNumber"]

    if receipt.get("status", 1) == 0:
        raise DeploymentReverted(
            f"Deployment transaction {pending.tx_hash} reverted in block {block_number}",
            tx_hash=pending.tx_hash,
            block_number=block_number,
        )

    contract_address = receipt.get("contractAddress")
    if not contract_address:
        raise DeploymentReverted(
            f"Transaction {pending.tx_hash} was mined in block {block_number} "
            f"but created no contract",
            tx_hash=pending.tx_hash,
            block_number=block_number,
        )

    contract_address = Web3.to_checksum_address(contract_address)
    if contract_address != pending.expected_address:
        logger.warning(
            "contract_address_mismatch",
            tx_hash=pending.tx_hash,
            expected=pending.expected_address,
            actual=contract_address,
        )

    return DeploymentResult(
        contract_address=contract_address,
        tx_hash=pending.tx_hash,
        block_number=block_number,
        status=receipt.get("status", 1),
        gas_used=receipt.get("gasUsed"),
    )


def wait_for_deployment(
    w3: Web3,
    pending: PendingDeployment,
    timeout: float = 120.0,
    poll_interval: float = 2.0,
    confirmations: int = 1,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> DeploymentResult:
    """
    Block until the creation transaction is mined and confirmed.

    Args:
        w3: Web3 instance connected to the endpoint the transaction went to
        pending: Handle returned by ``submit_deployment``
        timeout: Seconds to wait before giving up
        poll_interval: Seconds between receipt polls
        confirmations: Number of blocks, counting the inclusion block, that
            must exist before the deployment is considered confirmed
        clock: Monotonic time source
        sleep: Sleep function

    Returns:
        The deployment result with the created contract address

    Raises:
        ConfirmationError: If the timeout elapses, the connection drops, or
            the wait is interrupted. The transaction may still be mined.
        DeploymentReverted: If the transaction was mined but reverted
    """
    deadline = clock() + timeout
    polls = 0

    try:
        while True:
            receipt = _fetch_receipt(w3, pending)
            polls += 1

            if receipt is not None:
                if receipt.get("status", 1) == 0:
                    return _to_result(pending, receipt)
                seen = _confirmation_count(w3, pending, receipt["blockNumber"])
                if seen >= confirmations:
                    result = _to_result(pending, receipt)
                    logger.info(
                        "deployment_confirmed",
                        tx_hash=pending.tx_hash,
                        address=result.contract_address,
                        block=result.block_number,
                        polls=polls,
                    )
                    return result
                logger.debug("awaiting_confirmations", tx_hash=pending.tx_hash, seen=seen, needed=confirmations)
            else:
                logger.debug("receipt_pending", tx_hash=pending.tx_hash, polls=polls)

            remaining = deadline - clock()
            if remaining <= 0:
                raise ConfirmationError(
                    f"Transaction {pending.tx_hash} was not confirmed within {timeout:g} seconds; "
                    f"its outcome is unknown",
                    tx_hash=pending.tx_hash,
                    expected_address=pending.expected_address,
                )
            sleep(min(poll_interval, remaining))
    except KeyboardInterrupt as e:
        logger.warning("confirmation_wait_cancelled", tx_hash=pending.tx_hash)
        raise ConfirmationError(
            f"Wait for transaction {pending.tx_hash} was cancelled; its outcome is unknown",
            tx_hash=pending.tx_hash,
            expected_address=pending.expected_address,
        ) from e
