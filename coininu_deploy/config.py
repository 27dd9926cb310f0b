"""
Settings for the deployment workflow.

Values are loaded with pydantic-settings, highest priority first:
    1. Constructor arguments: DeployerSettings(network="localhost")
    2. Environment variables: DEPLOY_NETWORK=localhost
    3. A ``.env`` file in the working directory
    4. The defaults below

The signing key is read from ``PRIVATE_KEY`` (or ``DEPLOY_PRIVATE_KEY``) and
kept as a ``SecretStr``, so it is masked in ``repr()`` and log output.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings

from .constants import DEFAULT_CONTRACT_NAME, DEFAULT_NETWORK, NETWORK_CONFIG, SOLIDITY_VERSION
from .exceptions import ConfigurationError


class DeployerSettings(BaseSettings):
    """
    Configuration for a single deployment run.

    Attributes:
        network: Hardhat network name (see ``NETWORK_CONFIG``)
        rpc_url: Endpoint override; defaults to the network's configured URL
        private_key: Hex-encoded signing key of the deployer account
        contract_name: Artifact to deploy
        artifacts_dir: Root of the Hardhat artifacts tree
        confirmation_timeout: Upper bound (seconds) on waiting for a receipt
        poll_interval: Seconds between receipt polls
        confirmations: Blocks (including the inclusion block) to wait for
        request_timeout: Seconds a single JSON-RPC request may take
        gas_limit: Fixed gas limit; estimated from the endpoint when unset
        solidity_version: Compiler version the artifacts are expected to use
        log_level: Logging level for structlog output on stderr
    """

    network: str = Field(default=DEFAULT_NETWORK)
    rpc_url: Optional[str] = Field(default=None)
    private_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("private_key", "PRIVATE_KEY", "DEPLOY_PRIVATE_KEY"),
    )
    contract_name: str = Field(default=DEFAULT_CONTRACT_NAME)
    artifacts_dir: Path = Field(default=Path("artifacts") / "contracts")
    confirmation_timeout: float = Field(default=120.0, gt=0)
    poll_interval: float = Field(default=2.0, gt=0)
    confirmations: int = Field(default=1, ge=1)
    request_timeout: float = Field(default=10.0, gt=0)
    gas_limit: Optional[int] = Field(default=None, gt=0)
    solidity_version: str = Field(default=SOLIDITY_VERSION)
    log_level: str = Field(default="INFO")

    model_config = {
        "env_prefix": "DEPLOY_",
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
        "populate_by_name": True,
    }

    @property
    def network_config(self) -> Dict[str, Any]:
        """
        Get the static configuration of the selected network.

        Raises:
            ConfigurationError: If the network is not known
        """
        if self.network not in NETWORK_CONFIG:
            available = ", ".join(NETWORK_CONFIG.keys())
            raise ConfigurationError(
                f"Unknown network: {self.network}. Available networks: {available}"
            )
        return NETWORK_CONFIG[self.network]

    @property
    def endpoint_url(self) -> str:
        return self.rpc_url or self.network_config["rpc_url"]

    @property
    def network_display_name(self) -> str:
        return self.network_config["display_name"]
