"""
Build-and-deploy workflow.

Runs the loader, submitter, waiter and reporter in sequence:

    Idle -> Loading -> Submitting -> AwaitingConfirmation -> Confirmed | Failed

Every error reaches the reporter; no stage retries or recovers on its own.
"""

import time
from enum import Enum
from typing import Callable, Optional

import structlog
from web3 import Web3

from .config import DeployerSettings
from .contracts.factory import ContractFactory, get_contract_factory
from .exceptions import DeploymentError
from .reporter import Reporter
from .submitter import submit_deployment
from .types import DeploymentRequest, DeploymentResult, PendingDeployment
from .waiter import wait_for_deployment

logger = structlog.get_logger()


class WorkflowState(Enum):
    """Stages of a deployment run."""

    IDLE = "idle"
    LOADING = "loading"
    SUBMITTING = "submitting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({WorkflowState.CONFIRMED, WorkflowState.FAILED})


class DeploymentWorkflow:
    """
    One deployment run against one network.

    A workflow instance runs at most once; a failed run needs a fresh
    invocation.
    """

    def __init__(
        self,
        settings: DeployerSettings,
        w3: Optional[Web3] = None,
        reporter: Optional[Reporter] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self._w3 = w3
        self.reporter = reporter or Reporter()
        self._clock = clock
        self._sleep = sleep
        self.state = WorkflowState.IDLE
        self.pending: Optional[PendingDeployment] = None
        self.result: Optional[DeploymentResult] = None
        self.error: Optional[DeploymentError] = None

    @property
    def w3(self) -> Web3:
        if self._w3 is None:
            # Single attempt per request; no request outlives request_timeout.
            timeout = min(self.settings.request_timeout, self.settings.confirmation_timeout)
            self._w3 = Web3(
                Web3.HTTPProvider(
                    self.settings.endpoint_url,
                    request_kwargs={"timeout": timeout},
                    exception_retry_configuration=None,
                )
            )
        return self._w3

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("workflow_state", previous=self.state.value, state=state.value)
        self.state = state

    def _load(self, contract_name: str) -> ContractFactory:
        factory = get_contract_factory(contract_name, self.settings.artifacts_dir)

        compiler = factory.artifact.compiler or {}
        version = compiler.get("version")
        if version and str(version).split("+")[0] != self.settings.solidity_version:
            logger.warning(
                "compiler_version_mismatch",
                contract=contract_name,
                artifact_version=version,
                expected_version=self.settings.solidity_version,
            )
        return factory

    def _execute(self, contract_name: str) -> DeploymentResult:
        self._transition(WorkflowState.LOADING)
        factory = self._load(contract_name)

        self._transition(WorkflowState.SUBMITTING)
        request = DeploymentRequest(
            contract_name=contract_name,
            endpoint_url=self.settings.endpoint_url,
            credential=self.settings.private_key,
            gas_limit=self.settings.gas_limit,
        )
        self.pending = submit_deployment(self.w3, factory, request)
        self.reporter.progress()

        self._transition(WorkflowState.AWAITING_CONFIRMATION)
        return wait_for_deployment(
            self.w3,
            self.pending,
            timeout=self.settings.confirmation_timeout,
            poll_interval=self.settings.poll_interval,
            confirmations=self.settings.confirmations,
            clock=self._clock,
            sleep=self._sleep,
        )

    def run(self, contract_name: Optional[str] = None) -> int:
        """
        Deploy a contract and report the outcome.

        Args:
            contract_name: Artifact to deploy; defaults to the configured one

        Returns:
            Process exit status: 0 on success, 1 on any failure
        """
        if self.state is not WorkflowState.IDLE:
            raise RuntimeError(f"Workflow already ran (state: {self.state.value})")

        contract_name = contract_name or self.settings.contract_name
        logger.info(
            "deployment_started",
            contract=contract_name,
            network=self.settings.network,
        )

        try:
            network_name = self.settings.network_display_name
            self.result = self._execute(contract_name)
        except DeploymentError as e:
            self.error = e
            self._transition(WorkflowState.FAILED)
            logger.error("deployment_failed", contract=contract_name, error_type=type(e).__name__)
            return self.reporter.failure(e)

        self._transition(WorkflowState.CONFIRMED)
        return self.reporter.success(self.result, network_name)


def run_deployment(
    settings: Optional[DeployerSettings] = None,
    contract_name: Optional[str] = None,
    w3: Optional[Web3] = None,
    reporter: Optional[Reporter] = None,
) -> int:
    """Convenience wrapper: build a workflow and run it once."""
    workflow = DeploymentWorkflow(settings or DeployerSettings(), w3=w3, reporter=reporter)
    return workflow.run(contract_name)
