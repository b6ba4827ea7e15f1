import json

import pytest

from .config import Settings

ENV_KEYS = [
    "SECRET_FILE", "ETH_SECRET_FILE", "INFURA_PROJECT_ID", "RPC_URL",
    "CONTRACTS_BUILD_DIR", "DEPLOYMENTS_DIR", "LOG_LEVEL", "LOG_FILE", "POLL_INTERVAL", "DEPLOY_TIMEOUT",
]

GOLDEN_KEY = "0x" + "01" * 32
GOLDEN_ADDRESS = "0x1a642f0E3c3aF545E7AcBD38b07251B3990914F1"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove toolkit variables for the test and restore whatever was there after."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "unset")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def settings(tmp_path):
    return Settings(
        secret_file=tmp_path / ".secret",
        eth_secret_file=tmp_path / "ethereum.secret",
        contracts_build_dir=tmp_path / "src" / "contracts",
        deployments_dir=tmp_path / "deployments",
        log_file=str(tmp_path / "bond_deploy.log"),
        poll_interval=0,
    )


def write_artifact(build_dir, name, abi=None, bytecode="0x6080604052", compiler_version="0.8.0+commit.c7dfd78e"):
    build_dir.mkdir(parents=True, exist_ok=True)
    artifact = {
        "contractName": name,
        "abi": abi if abi is not None else [{"type": "constructor", "inputs": [], "stateMutability": "nonpayable"}],
        "bytecode": bytecode,
        "compiler": {"name": "solc", "version": compiler_version},
    }
    path = build_dir / f"{name}.json"
    path.write_text(json.dumps(artifact), encoding="utf-8")
    return path
