"""
Contract factory wrapper for deployment.

This module provides a high-level handle over a compiled contract artifact
that knows its constructor signature and can produce deployable web3
contract classes.
"""

from typing import Any, Dict, List, Optional

from web3 import Web3

from ..artifacts.loader import PathLike, load_contract_artifact
from ..types import ContractArtifact


class ContractFactory:
    """
    Wrapper for deploying a compiled contract.

    Built from a ``ContractArtifact``; use ``get_contract_factory`` to load
    one by name from the artifacts tree.
    """

    def __init__(self, artifact: ContractArtifact):
        """Initialize the factory from a loaded artifact."""
        self.artifact = artifact
        self.abi = artifact.abi
        self.bytecode = artifact.bytecode

    @property
    def contract_name(self) -> str:
        return self.artifact.name

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        """ABI inputs of the constructor; empty when none is declared."""
        for item in self.abi:
            if item.get("type") == "constructor":
                return list(item.get("inputs", []))
        return []

    @property
    def constructor_arity(self) -> int:
        return len(self.constructor_inputs)

    @property
    def is_deployable(self) -> bool:
        """Interfaces and abstract contracts compile to empty bytecode."""
        return bool(self.bytecode) and self.bytecode != "0x"

    def encode_constructor_params(self, *args: Any) -> List[Any]:
        """
        Validate constructor arguments against the ABI.

        Args:
            *args: Constructor arguments, in declaration order

        Returns:
            The arguments as a list

        Raises:
            ValueError: If the number of arguments does not match the constructor
        """
        if len(args) != self.constructor_arity:
            raise ValueError(
                f"{self.contract_name} constructor takes {self.constructor_arity} "
                f"argument(s), got {len(args)}"
            )
        return list(args)

    def get_deployment_data(self, *args: Any) -> Dict[str, Any]:
        """
        Get complete deployment data for the contract.

        Args:
            *args: Constructor arguments

        Returns:
            Dictionary with bytecode, ABI and validated constructor args

        Raises:
            ValueError: If the artifact has no bytecode or the arguments are invalid
        """
        if not self.is_deployable:
            raise ValueError(f"{self.contract_name} has no bytecode and cannot be deployed")

        constructor_args = self.encode_constructor_params(*args)

        return {
            "bytecode": self.bytecode,
            "abi": self.abi,
            "constructor_args": constructor_args,
            "contract_name": self.contract_name,
        }

    def bind(self, w3: Web3):
        """Return a web3 contract class for this artifact bound to ``w3``."""
        return w3.eth.contract(abi=self.abi, bytecode=self.bytecode)

    def __repr__(self) -> str:
        return f"ContractFactory({self.contract_name!r}, arity={self.constructor_arity})"


def get_contract_factory(
    contract_name: str, artifacts_dir: Optional[PathLike] = None
) -> ContractFactory:
    """
    Load a contract by name and wrap it in a ``ContractFactory``.

    Raises:
        ArtifactNotFound: If no compiled artifact matches the name
    """
    return ContractFactory(load_contract_artifact(contract_name, artifacts_dir))
