import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Settings:
    """Runtime configuration read from the environment (and ``.env``)."""
    secret_file: Path
    eth_secret_file: Path
    contracts_build_dir: Path
    deployments_dir: Path
    infura_project_id: Optional[str] = None
    rpc_url: Optional[str] = None
    log_level: str = "INFO"
    log_file: str = "bond_deploy.log"
    poll_interval: float = 2.0
    deploy_timeout: float = 750.0

    @classmethod
    def from_env(cls, base_dir: Optional[Path] = None) -> "Settings":
        root = Path(base_dir) if base_dir is not None else Path.cwd()
        load_dotenv(dotenv_path=root / ".env")

        return cls(
            secret_file=Path(os.getenv("SECRET_FILE", root / ".secret")),
            eth_secret_file=Path(os.getenv("ETH_SECRET_FILE", root / "ethereum.secret")),
            contracts_build_dir=Path(os.getenv("CONTRACTS_BUILD_DIR", root / "src" / "contracts")),
            deployments_dir=Path(os.getenv("DEPLOYMENTS_DIR", root / "deployments")),
            infura_project_id=os.getenv("INFURA_PROJECT_ID") or None,
            rpc_url=os.getenv("RPC_URL") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE", "bond_deploy.log"),
            poll_interval=float(os.getenv("POLL_INTERVAL", "2")),
            deploy_timeout=float(os.getenv("DEPLOY_TIMEOUT", "750")),
        )


def configure_logging(settings: Settings):
    """Send log records to the console and to ``settings.log_file``."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file),
            logging.StreamHandler()
        ]
    )
