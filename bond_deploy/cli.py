#!/usr/bin/env python3
"""
bond-deploy command line

Usage:
    bond-deploy migrate --network alfajores
    bond-deploy migrate --network ropsten --reset
    bond-deploy account
    bond-deploy compiler-settings
"""

import sys
import json
import logging
import argparse

from .accounts import bootstrap
from .config import Settings, configure_logging
from .deployer import Deployer
from .exceptions import BondDeployError
from .migrations import run_migrations
from .networks import NETWORKS, compiler_settings, connect, get_network, signer_for
from .registry import DeploymentRegistry

logger = logging.getLogger(__name__)


def cmd_migrate(args, settings: Settings) -> int:
    accounts = bootstrap(settings)
    network = get_network(args.network)
    identity = signer_for(network, accounts)
    logger.info(f"Deploying from {identity.address} on {network.name}")

    w3 = connect(network, settings)
    registry = DeploymentRegistry(settings.deployments_dir, network.name, network.network_id)
    deployer = Deployer(
        w3,
        network,
        identity.to_account(),
        settings.contracts_build_dir,
        registry,
        poll_interval=settings.poll_interval,
        timeout=settings.deploy_timeout,
    )

    ran = run_migrations(deployer, registry, reset=args.reset, from_step=args.from_step, to_step=args.to_step)
    print(f"Ran {len(ran)} migration(s) on {network.name}")
    for name, entry in sorted(registry.data["contracts"].items()):
        print(f"  {name}: {entry['address']}")
    return 0


def cmd_account(args, settings: Settings) -> int:
    accounts = bootstrap(settings)
    print(f"Celo Account address: {accounts.celo.address}")
    if not accounts.celo.persisted:
        print(f"Warning: key could not be saved to {settings.secret_file}")
    if accounts.ethereum is not None:
        print(f"Ethereum Account address: {accounts.ethereum.address}")
    else:
        print(f"Ethereum Account: none ({settings.eth_secret_file} not found)")
    return 0


def cmd_compiler_settings(args, settings: Settings) -> int:
    print(json.dumps(compiler_settings(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bond-deploy", description="Deploy the bond token contracts")
    sub = parser.add_subparsers(dest="command", required=True)

    migrate = sub.add_parser("migrate", help="Run pending migrations against a network")
    migrate.add_argument("--network", required=True, choices=sorted(NETWORKS), help="Target network")
    migrate.add_argument("--reset", action="store_true", help="Run all migrations from the beginning")
    migrate.add_argument("--from", dest="from_step", type=int, help="First migration number to run")
    migrate.add_argument("--to", dest="to_step", type=int, help="Last migration number to run")
    migrate.set_defaults(func=cmd_migrate)

    account = sub.add_parser("account", help="Show (and on first use create) the deployment accounts")
    account.set_defaults(func=cmd_account)

    solc = sub.add_parser("compiler-settings", help="Print the solc settings as JSON")
    solc.set_defaults(func=cmd_compiler_settings)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings)

    try:
        return args.func(args, settings)
    except BondDeployError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
