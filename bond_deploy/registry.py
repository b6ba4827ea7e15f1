import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ContractNotDeployedError, RegistryError

logger = logging.getLogger(__name__)


class DeploymentRegistry:
    """
    Addresses of deployed contracts on one network, kept in
    ``<deployments_dir>/<network>.json``.

    Layout::

        {
          "network": "alfajores",
          "network_id": 44787,
          "last_completed_migration": 4,
          "contracts": {
            "BondToken": {"address": "0x...", "transaction_hash": "0x...", "block_number": 123}
          }
        }
    """

    def __init__(self, deployments_dir, network: str, network_id: int):
        self.path = Path(deployments_dir) / f"{network}.json"
        self.network = network
        self.network_id = network_id
        self.data: Dict[str, Any] = self._empty()
        self.load()

    def _empty(self) -> Dict[str, Any]:
        return {
            "network": self.network,
            "network_id": self.network_id,
            "last_completed_migration": 0,
            "contracts": {},
        }

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise RegistryError(f"Could not read deployment registry {self.path}: {e}") from e
            if not isinstance(data, dict):
                raise RegistryError(f"Deployment registry {self.path} does not hold a JSON object")
            self.data = data
            self.data.setdefault("contracts", {})
            self.data.setdefault("last_completed_migration", 0)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self.data, f, indent=2)

    @property
    def last_completed_migration(self) -> int:
        return int(self.data["last_completed_migration"])

    def mark_completed(self, number: int):
        self.data["last_completed_migration"] = number
        self.save()

    def record(self, name: str, address: str, transaction_hash: str, block_number: Optional[int]):
        self.data["contracts"][name] = {
            "address": address,
            "transaction_hash": transaction_hash,
            "block_number": block_number,
        }
        self.save()
        logger.info(f"Recorded {name} at {address} on {self.network}")

    def address_of(self, name: str) -> str:
        entry = self.data["contracts"].get(name)
        if not entry:
            raise ContractNotDeployedError(f"{name} has not been deployed to {self.network}")
        return entry["address"]

    def reset(self):
        self.data = self._empty()
        self.save()
