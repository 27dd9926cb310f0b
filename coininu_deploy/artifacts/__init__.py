"""Artifact loading utilities for compiled smart contracts."""
from .loader import get_abi, get_bytecode, load_artifact, load_contract_artifact

__all__ = ["get_abi", "get_bytecode", "load_artifact", "load_contract_artifact"]
