#!/usr/bin/env python3
"""
Contract deployer: signs and broadcasts constructor transactions and waits
until the network has confirmed them.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from web3 import Web3
from web3.exceptions import TransactionNotFound

from .artifacts import load_artifact, contract_name
from .exceptions import DeploymentError
from .networks import Network
from .registry import DeploymentRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeployedContract:
    name: str
    address: str
    abi: List[Any] = field(repr=False)
    transaction_hash: Optional[str] = None


class Deployer:
    def __init__(self, w3: Web3, network: Network, account, artifacts_dir,
                 registry: DeploymentRegistry, poll_interval: float = 2.0, timeout: float = 750.0):
        """
        Args:
            w3: Connection to the target network
            network: Network table entry (gas, confirmations, timeouts)
            account: eth_account LocalAccount that signs every transaction
            artifacts_dir: Directory holding the compiled contract JSON files
            registry: Where deployed addresses are recorded
            poll_interval: Seconds between receipt/block polls
            timeout: Seconds to wait for a receipt or for confirmations before giving up
        """
        self.w3 = w3
        self.network = network
        self.account = account
        self.artifacts_dir = artifacts_dir
        self.registry = registry
        self.poll_interval = poll_interval
        self.timeout = timeout

    def deploy(self, name: str, *args) -> DeployedContract:
        """Deploy ``name`` with constructor ``args`` and record its address."""
        artifact = load_artifact(self.artifacts_dir, name)
        logger.info(f"Deploying '{artifact.name}' to {self.network.name}")

        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx_params = {
            'chainId': self.network.network_id,
            'from': self.account.address,
            'nonce': self.w3.eth.get_transaction_count(self.account.address, 'pending'),
            'gasPrice': self.w3.eth.gas_price,
        }
        if self.network.gas is not None:
            tx_params['gas'] = self.network.gas
        tx = factory.constructor(*args).build_transaction(tx_params)

        signed_tx = self.account.sign_transaction(tx)
        tx_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed_tx.raw_transaction))
        logger.info(f"> transaction hash: {tx_hash}")

        receipt = self._wait_for_receipt(tx_hash)
        if receipt['status'] != 1:
            raise DeploymentError(f"Deployment of {artifact.name} reverted (transaction {tx_hash})")

        address = receipt['contractAddress']
        logger.info(f"> contract address: {address} (block {receipt['blockNumber']}, "
                    f"gas used {receipt.get('gasUsed')})")
        self._wait_for_confirmations(receipt['blockNumber'])

        self.registry.record(artifact.name, address, tx_hash, receipt['blockNumber'])
        return DeployedContract(artifact.name, address, artifact.abi, tx_hash)

    def deployed(self, name: str) -> DeployedContract:
        """The instance of ``name`` recorded for this network."""
        name = contract_name(name)
        address = self.registry.address_of(name)
        artifact = load_artifact(self.artifacts_dir, name)
        return DeployedContract(name, address, artifact.abi)

    def _wait_for_receipt(self, tx_hash: str):
        start_block = self.w3.eth.get_block_number()
        deadline = time.monotonic() + self.timeout
        while True:
            try:
                return self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                pass

            waited = self.w3.eth.get_block_number() - start_block
            if waited >= self.network.timeout_blocks:
                raise DeploymentError(
                    f"Transaction {tx_hash} was not mined within {self.network.timeout_blocks} blocks"
                )
            if time.monotonic() >= deadline:
                raise DeploymentError(f"Transaction {tx_hash} was not mined within {self.timeout:.0f} seconds")
            time.sleep(self.poll_interval)

    def _wait_for_confirmations(self, block_number: int):
        if self.network.confirmations <= 0:
            return
        logger.info(f"Waiting for {self.network.confirmations} confirmations...")
        deadline = time.monotonic() + self.timeout
        while True:
            confirmed = self.w3.eth.get_block_number() - block_number
            if confirmed >= self.network.confirmations:
                return
            if time.monotonic() >= deadline:
                raise DeploymentError(
                    f"Only {max(confirmed, 0)} of {self.network.confirmations} confirmations for block "
                    f"{block_number} after {self.timeout:.0f} seconds"
                )
            time.sleep(self.poll_interval)
