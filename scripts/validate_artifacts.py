#!/usr/bin/env python3
"""Validate that compiled artifacts are loadable and deployable"""

import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from coininu_deploy.artifacts.loader import validate_artifacts
from coininu_deploy.contracts.factory import get_contract_factory


def validate(artifacts_dir=None):
    """Validate that every artifact in the tree loads and has an ABI"""
    print("Validating artifacts...")

    status = validate_artifacts(artifacts_dir)
    print(f"\nFound {len(status)} compiled contracts:")
    if not status:
        print("❌ No artifacts found; run 'npx hardhat compile' first")
        return 1

    all_valid = all(status.values())
    for name, loadable in status.items():
        if not loadable:
            print(f"  ❌ {name}: artifact could not be loaded")
            continue

        factory = get_contract_factory(name, artifacts_dir)
        if not factory.abi:
            print(f"  ⚠️  {name}: No ABI found")
            all_valid = False
        elif not factory.is_deployable:
            # Interfaces and abstract contracts have no bytecode
            print(f"  ✅ {name}: {len(factory.abi)} ABI items (not deployable)")
        else:
            print(
                f"  ✅ {name}: {len(factory.abi)} ABI items, "
                f"{len(factory.bytecode)} bytecode chars, "
                f"constructor takes {factory.constructor_arity} argument(s)"
            )

    print()
    if all_valid:
        print("✅ All artifacts valid!")
        return 0
    else:
        print("❌ Some artifacts failed validation")
        return 1


if __name__ == "__main__":
    sys.exit(validate(sys.argv[1] if len(sys.argv) > 1 else None))
