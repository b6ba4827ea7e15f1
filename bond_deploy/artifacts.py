import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from .exceptions import ArtifactError
from .networks import COMPILERS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of one compiled contract."""
    name: str
    abi: List[Any]
    bytecode: str
    compiler_version: Optional[str] = None


def contract_name(name: str) -> str:
    """``BondToken.sol`` and ``BondToken`` both refer to the BondToken artifact."""
    return name[:-len(".sol")] if name.endswith(".sol") else name


def load_artifact(build_dir, name: str) -> ContractArtifact:
    """Loads a contract's ABI and bytecode from its JSON build artifact."""
    name = contract_name(name)
    path = Path(build_dir) / f"{name}.json"
    if not path.exists():
        raise ArtifactError(f"Artifact for {name} not found at {path}. Compile the contracts first.")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ArtifactError(f"Could not read artifact {path}: {e}") from e

    abi = data.get("abi")
    bytecode = data.get("bytecode")
    if not abi or not bytecode or bytecode == "0x":
        raise ArtifactError(f"Artifact {path} is missing abi or bytecode")

    compiler_version = (data.get("compiler") or {}).get("version")
    expected = COMPILERS["solc"]["version"]
    if compiler_version and not compiler_version.startswith(expected):
        logger.warning(f"{name} was compiled with solc {compiler_version}, configured compiler is {expected}")

    return ContractArtifact(name=name, abi=abi, bytecode=bytecode, compiler_version=compiler_version)
