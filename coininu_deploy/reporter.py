"""Operator-facing status output for deployment runs."""

import sys
from typing import Optional, TextIO

from .constants import PROGRESS_MESSAGE
from .exceptions import ConfirmationError, DeploymentError
from .types import DeploymentResult


class Reporter:
    """
    Single sink for the outcome of a deployment run.

    Status lines go to ``out``; errors go to ``err``. Each terminal method
    returns the process exit status.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def progress(self) -> None:
        print(PROGRESS_MESSAGE, file=self.out)

    def success(self, result: DeploymentResult, network_name: str) -> int:
        print(
            f"The smart contract was deployed at: {result.contract_address} on {network_name}!",
            file=self.out,
        )
        return 0

    def failure(self, error: DeploymentError) -> int:
        message = f"Error: {type(error).__name__}: {error}"
        if isinstance(error, ConfirmationError) and error.tx_hash:
            message += f" (check transaction {error.tx_hash}"
            if error.expected_address:
                message += f", expected contract address {error.expected_address}"
            message += " before deploying again)"
        print(message, file=self.err)
        return 1
