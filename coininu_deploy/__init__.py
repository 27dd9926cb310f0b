"""
CoinInu Deployment Package

Loads Hardhat-compiled contract artifacts and deploys them to an EVM
network, reporting the address of the created contract.
"""

__version__ = "1.0.0"
__author__ = "CoinInu"

from .artifacts.loader import (
    get_abi,
    get_bytecode,
    load_artifact,
    load_contract_artifact,
    get_contract_metadata,
    list_available_contracts,
)

from .contracts.factory import ContractFactory, get_contract_factory
from .config import DeployerSettings
from .exceptions import (
    ArtifactNotFound,
    ConfigurationError,
    ConfirmationError,
    DeploymentError,
    DeploymentReverted,
    SubmissionError,
)
from .reporter import Reporter
from .submitter import predict_contract_address, submit_deployment
from .types import ContractArtifact, DeploymentRequest, DeploymentResult, PendingDeployment
from .waiter import wait_for_deployment
from .workflow import DeploymentWorkflow, WorkflowState, run_deployment

__all__ = [
    'get_abi',
    'get_bytecode',
    'load_artifact',
    'load_contract_artifact',
    'get_contract_metadata',
    'list_available_contracts',
    'ContractFactory',
    'get_contract_factory',
    'DeployerSettings',
    'ArtifactNotFound',
    'ConfigurationError',
    'ConfirmationError',
    'DeploymentError',
    'DeploymentReverted',
    'SubmissionError',
    'Reporter',
    'predict_contract_address',
    'submit_deployment',
    'ContractArtifact',
    'DeploymentRequest',
    'DeploymentResult',
    'PendingDeployment',
    'wait_for_deployment',
    'DeploymentWorkflow',
    'WorkflowState',
    'run_deployment',
]
