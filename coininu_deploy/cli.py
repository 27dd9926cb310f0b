#!/usr/bin/env python3
"""
Command-line entry point: deploy a compiled contract to a configured network.

    coininu-deploy --network scrollL2

Exit status is 0 when the contract is confirmed and 1 on any failure.
"""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import DeployerSettings
from .constants import NETWORK_CONFIG
from .log import configure_logging
from .reporter import Reporter
from .workflow import DeploymentWorkflow


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="coininu-deploy",
        description="Deploy a Hardhat-compiled contract and print its address.",
    )
    ap.add_argument("--network", help="network name (default: scrollL2)")
    ap.add_argument("--contract", help="contract name (default: CoinInu)")
    ap.add_argument("--artifacts-dir", help="root of the Hardhat artifacts tree")
    ap.add_argument("--rpc-url", help="override the network's RPC endpoint")
    ap.add_argument("--timeout", type=float, help="seconds to wait for confirmation")
    ap.add_argument("--poll-interval", type=float, help="seconds between receipt polls")
    ap.add_argument("--request-timeout", type=float, help="seconds a single RPC request may take")
    ap.add_argument("--confirmations", type=int, help="blocks to wait for, counting the inclusion block")
    ap.add_argument("--gas-limit", type=int, help="fixed gas limit instead of estimating")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    ap.add_argument("--list-networks", action="store_true", help="print known networks and exit")
    return ap


def _settings_from_args(args: argparse.Namespace) -> DeployerSettings:
    overrides = {
        "network": args.network,
        "contract_name": args.contract,
        "artifacts_dir": args.artifacts_dir,
        "rpc_url": args.rpc_url,
        "confirmation_timeout": args.timeout,
        "poll_interval": args.poll_interval,
        "request_timeout": args.request_timeout,
        "confirmations": args.confirmations,
        "gas_limit": args.gas_limit,
        "log_level": args.log_level,
    }
    return DeployerSettings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_networks:
        for name, network in NETWORK_CONFIG.items():
            print(f"{name}\t{network['display_name']}\t{network['rpc_url']}")
        return 0

    reporter = Reporter()
    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=reporter.err)
        return 1

    configure_logging(settings.log_level)
    return DeploymentWorkflow(settings, reporter=reporter).run()


if __name__ == "__main__":
    sys.exit(main())
