"""Type definitions for the coininu-deploy workflow."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import SecretStr


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as produced by the Hardhat compiler."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str
    source_name: Optional[str] = None
    deployed_bytecode: str = "0x"
    compiler: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class DeploymentRequest:
    """Everything needed to build and sign a contract-creation transaction."""

    contract_name: str
    endpoint_url: str
    credential: Optional[SecretStr]
    constructor_args: Tuple[Any, ...] = ()
    gas_limit: Optional[int] = None


@dataclass(frozen=True)
class PendingDeployment:
    """A creation transaction accepted by the endpoint but not yet mined."""

    tx_hash: str
    sender: str
    nonce: int
    expected_address: str


@dataclass(frozen=True)
class DeploymentResult:
    """Observed outcome of a mined creation transaction."""

    contract_address: str
    tx_hash: str
    block_number: int
    status: int = 1
    gas_used: Optional[int] = field(default=None, compare=False)
