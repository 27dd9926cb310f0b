"""Deployable contract handles built from compiled artifacts."""
from .factory import ContractFactory, get_contract_factory

__all__ = ["ContractFactory", "get_contract_factory"]
