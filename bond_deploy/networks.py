"""
Network and compiler configuration.

Each network names its RPC endpoint, chain id, and which local account signs
for it. Ethereum testnets go through Infura and sign with the key from
``ethereum.secret``; Celo networks use the public Forno nodes and the project
account from ``.secret``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .accounts import Accounts, SigningIdentity
from .exceptions import ConfigurationError, MissingSecretError, NetworkConnectionError

logger = logging.getLogger(__name__)

CELO = "celo"
ETHEREUM = "ethereum"


@dataclass(frozen=True)
class Network:
    name: str
    network_id: int
    url: str
    signer: str
    gas: Optional[int] = None           # None: estimate per transaction
    confirmations: int = 0              # blocks to wait after the receipt
    timeout_blocks: int = 50            # blocks to wait for the receipt
    poa: bool = False

    def endpoint(self, settings) -> str:
        """RPC URL for this network, honouring the RPC_URL override."""
        if settings.rpc_url:
            return settings.rpc_url
        if "{infura_project_id}" in self.url:
            if not settings.infura_project_id:
                raise ConfigurationError(f"INFURA_PROJECT_ID is required for network '{self.name}'")
            return self.url.format(infura_project_id=settings.infura_project_id)
        return self.url


NETWORKS: Dict[str, Network] = {
    "ropsten": Network(
        name="ropsten",
        network_id=3,
        url="https://ropsten.infura.io/v3/{infura_project_id}",
        signer=ETHEREUM,
        gas=5500000,  # Ropsten has a lower block limit than mainnet
        confirmations=5,
        timeout_blocks=200,
    ),
    "rinkeby": Network(
        name="rinkeby",
        network_id=4,
        url="https://rinkeby.infura.io/v3/{infura_project_id}",
        signer=ETHEREUM,
        gas=5500000,
        confirmations=2,
        timeout_blocks=200,
    ),
    "alfajores": Network(
        name="alfajores",
        network_id=44787,
        url="https://alfajores-forno.celo-testnet.org",
        signer=CELO,
        poa=True,
    ),
    "mainnet": Network(
        name="mainnet",
        network_id=42220,
        url="https://forno.celo.org",
        signer=CELO,
        poa=True,
    ),
}

COMPILERS: Dict[str, Dict[str, Any]] = {
    "solc": {
        "version": "0.8.0",
        "settings": {
            "optimizer": {
                "enabled": True,
                "runs": 2000,
            },
            "evmVersion": "byzantium",
        },
    },
}


def get_network(name: str) -> Network:
    try:
        return NETWORKS[name]
    except KeyError:
        known = ", ".join(sorted(NETWORKS))
        raise ConfigurationError(f"Unknown network '{name}' (known networks: {known})") from None


def compiler_settings() -> Dict[str, Any]:
    """The solc standard-JSON ``settings`` object used to build the artifacts."""
    solc = COMPILERS["solc"]["settings"]
    return {
        "optimizer": dict(solc["optimizer"]),
        "evmVersion": solc["evmVersion"],
    }


def signer_for(network: Network, accounts: Accounts) -> SigningIdentity:
    if network.signer == CELO:
        return accounts.celo
    if accounts.ethereum is None:
        raise MissingSecretError(
            f"Network '{network.name}' signs with the Ethereum key, but no ethereum.secret file was found"
        )
    return accounts.ethereum


def connect(network: Network, settings) -> Web3:
    """Open a Web3 connection to ``network`` and check it is the chain we expect."""
    url = network.endpoint(settings)
    w3 = Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": 30}))
    if network.poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    if not w3.is_connected():
        raise NetworkConnectionError(f"Could not connect to RPC URL: {url}")

    chain_id = w3.eth.chain_id
    if chain_id != network.network_id:
        raise ConfigurationError(
            f"Node at {url} reports chain id {chain_id}, expected {network.network_id} for '{network.name}'"
        )

    logger.info(f"Connected to {network.name} (chain id {chain_id})")
    return w3
