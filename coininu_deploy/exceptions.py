"""Custom exception classes for the coininu-deploy workflow."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment workflow errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when the requested network or settings are not usable."""

    pass


class ArtifactNotFound(DeploymentError, FileNotFoundError):
    """Raised when no compiled artifact matches the requested contract name."""

    pass


class SubmissionError(DeploymentError):
    """
    Raised when the contract-creation transaction cannot be broadcast.

    Args:
        message: Human-readable description
        reason: "credential", "balance", "endpoint", or "request" for
            constructor arguments that do not fit the artifact
    """

    def __init__(self, message: str, reason: str = "endpoint"):
        super().__init__(message)
        self.reason = reason


class ConfirmationError(DeploymentError, TimeoutError):
    """
    Raised when the outcome of a broadcast transaction could not be observed.

    The transaction may still be mined later; ``tx_hash`` and
    ``expected_address`` tell the operator where to look.
    """

    def __init__(
        self,
        message: str,
        tx_hash: Optional[str] = None,
        expected_address: Optional[str] = None,
    ):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.expected_address = expected_address


class DeploymentReverted(DeploymentError):
    """Raised when the creation transaction was mined but failed on-chain."""

    def __init__(self, message: str, tx_hash: Optional[str] = None, block_number: Optional[int] = None):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.block_number = block_number
