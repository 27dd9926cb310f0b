"""
Artifact loader for compiled smart contracts.

This module provides functions to load ABI, bytecode, and other metadata
from the Hardhat-compiled contract artifacts. Hardhat writes one JSON file
per contract under ``artifacts/contracts/<Source>.sol/<Name>.json``.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from ..exceptions import ArtifactNotFound
from ..types import ContractArtifact

logger = structlog.get_logger()

# Default location relative to the Hardhat project root
DEFAULT_ARTIFACTS_DIR = Path("artifacts") / "contracts"

PathLike = Union[str, Path]


def _resolve_artifacts_dir(artifacts_dir: Optional[PathLike]) -> Path:
    if artifacts_dir is None:
        return DEFAULT_ARTIFACTS_DIR
    return Path(artifacts_dir)


def _iter_artifact_files(artifacts_dir: Path):
    """Yield contract artifact files, skipping debug files and build info."""
    if not artifacts_dir.is_dir():
        return
    for path in sorted(artifacts_dir.rglob("*.json")):
        if path.name.endswith(".dbg.json") or "build-info" in path.parts:
            continue
        yield path


def _read_json(path: Path) -> Any:
    """Read a JSON file, mapping unreadable or undecodable files to ArtifactNotFound."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArtifactNotFound(f"Artifact file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ArtifactNotFound(f"Artifact file {path} could not be read: {e}") from e


def _source_of(path: Path, root: Path) -> str:
    """Source path of an artifact relative to the tree, e.g. 'interfaces/IERC20.sol'."""
    return path.parent.relative_to(root).as_posix()


def _matches_source(path: Path, root: Path, wanted: str) -> bool:
    # Accept the Hardhat source name too: "contracts/CoinInu.sol" under artifacts/contracts
    source = _source_of(path, root)
    return wanted in (source, f"{root.name}/{source}")


def find_artifact_path(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> Path:
    """
    Locate the artifact file for a contract.

    Args:
        contract_name: Name of the contract (e.g., 'CoinInu'), or a fully
            qualified name (e.g., 'contracts/CoinInu.sol:CoinInu') when
            several sources define a contract with the same name
        artifacts_dir: Root of the artifacts tree

    Returns:
        Path to ``<contract_name>.json``

    Raises:
        ArtifactNotFound: If no artifact file matches the name, or if more
            than one does
    """
    root = _resolve_artifacts_dir(artifacts_dir)

    source, _, name = contract_name.rpartition(":")
    matches = [
        path
        for path in _iter_artifact_files(root)
        if path.stem == name and (not source or _matches_source(path, root, source))
    ]

    if len(matches) == 1:
        return matches[0]

    if len(matches) > 1:
        candidates = ", ".join(f"{_source_of(path, root)}:{name}" for path in matches)
        raise ArtifactNotFound(
            f"Contract name '{contract_name}' is ambiguous in {root}. "
            f"Use a fully qualified name: {candidates}"
        )

    available = ", ".join(list_available_contracts(root)) or "none"
    raise ArtifactNotFound(
        f"Artifact for contract '{contract_name}' not found in {root}. "
        f"Available contracts: {available}. "
        f"Make sure the contracts have been compiled with 'npx hardhat compile'"
    )


def load_artifact(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Load the complete artifact JSON for a contract.

    Args:
        contract_name: Name of the contract (e.g., 'CoinInu')
        artifacts_dir: Root of the artifacts tree

    Returns:
        Complete artifact dictionary including ABI, bytecode, and metadata

    Raises:
        ArtifactNotFound: If the artifact is missing, unreadable, or is not
            valid artifact JSON
    """
    artifact_path = find_artifact_path(contract_name, artifacts_dir)
    artifact = _read_json(artifact_path)

    if not isinstance(artifact, dict) or "abi" not in artifact or "bytecode" not in artifact:
        raise ArtifactNotFound(
            f"Artifact file {artifact_path} is missing 'abi' or 'bytecode'"
        )

    return artifact


def load_compiler_info(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> Optional[Dict[str, Any]]:
    """
    Get the solc version a contract was compiled with.

    Hardhat keeps it out of the artifact itself: ``<Name>.dbg.json`` points to
    a ``build-info`` file that records ``solcVersion``.

    Returns:
        ``{"version": ..., "long_version": ...}``, or None when the debug or
        build-info file is absent or unusable
    """
    artifact_path = find_artifact_path(contract_name, artifacts_dir)
    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
    if not dbg_path.exists():
        return None

    try:
        build_info_ref = _read_json(dbg_path).get("buildInfo")
        if not build_info_ref:
            return None
        build_info_path = (dbg_path.parent / build_info_ref).resolve()
        build_info = _read_json(build_info_path)
    except (ArtifactNotFound, AttributeError) as e:
        logger.warning("build_info_unreadable", contract=contract_name, path=str(dbg_path), error=str(e))
        return None

    version = build_info.get("solcVersion") if isinstance(build_info, dict) else None
    if not version:
        return None
    return {"version": version, "long_version": build_info.get("solcLongVersion")}


def load_contract_artifact(
    contract_name: str, artifacts_dir: Optional[PathLike] = None
) -> ContractArtifact:
    """
    Load a contract artifact as a ``ContractArtifact``.

    Raises:
        ArtifactNotFound: If the artifact is missing or malformed
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    contract_artifact = ContractArtifact(
        name=artifact.get("contractName", contract_name),
        abi=artifact["abi"],
        bytecode=artifact["bytecode"],
        source_name=artifact.get("sourceName"),
        deployed_bytecode=artifact.get("deployedBytecode", "0x"),
        compiler=artifact.get("compiler") or load_compiler_info(contract_name, artifacts_dir),
    )
    logger.debug(
        "artifact_loaded",
        contract=contract_artifact.name,
        source=contract_artifact.source_name,
        abi_items=len(contract_artifact.abi),
        solc=(contract_artifact.compiler or {}).get("version"),
    )
    return contract_artifact


def get_abi(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> list:
    """
    Get the ABI for a specific contract.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Root of the artifacts tree

    Returns:
        Contract ABI as a list
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("abi", [])


def get_bytecode(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> str:
    """
    Get the deployment bytecode for a specific contract.

    Returns:
        Bytecode as a hex string (with '0x' prefix)
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("bytecode", "0x")


def get_deployed_bytecode(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> str:
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("deployedBytecode", "0x")


def get_contract_metadata(contract_name: str, artifacts_dir: Optional[PathLike] = None) -> Dict[str, Any]:
    """
    Get metadata about the contract compilation.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Root of the artifacts tree

    Returns:
        Dictionary containing the artifact format, source and compiler info
    """
    artifact = load_artifact(contract_name, artifacts_dir)

    return {
        "contractName": artifact.get("contractName"),
        "sourceName": artifact.get("sourceName"),
        "format": artifact.get("_format"),
        "compiler": artifact.get("compiler") or load_compiler_info(contract_name, artifacts_dir),
    }


def list_available_contracts(artifacts_dir: Optional[PathLike] = None) -> List[str]:
    """
    List all contracts that have an artifact in the artifacts tree.

    Returns:
        Sorted list of contract names
    """
    root = _resolve_artifacts_dir(artifacts_dir)
    return sorted({path.stem for path in _iter_artifact_files(root)})


def validate_artifacts(artifacts_dir: Optional[PathLike] = None) -> Dict[str, bool]:
    """
    Validate that every artifact in the tree can be loaded.

    Returns:
        Dictionary mapping contract names to availability status. Names
        defined in more than one source are keyed by their qualified name.
    """
    root = _resolve_artifacts_dir(artifacts_dir)
    paths = list(_iter_artifact_files(root))
    counts = Counter(path.stem for path in paths)

    status = {}
    for path in paths:
        contract_name = path.stem
        if counts[contract_name] > 1:
            contract_name = f"{_source_of(path, root)}:{contract_name}"
        try:
            load_artifact(contract_name, artifacts_dir)
            status[contract_name] = True
        except ArtifactNotFound:
            status[contract_name] = False

    return status
