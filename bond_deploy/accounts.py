"""
Signing identities for deployment runs.

The project account lives in a plaintext secret file next to the project. The
first run generates a key and writes it there; every later run reads the same
key back, so the deploying address stays stable across runs.
"""

import os
import re
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .exceptions import MalformedKeyError, PersistenceError, SecretFileError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_HEX_KEY = re.compile(r'^(0x)?[0-9a-fA-F]{64}$')
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


@dataclass(frozen=True)
class SigningIdentity:
    """Private key plus the checksummed address derived from it."""
    private_key: str = field(repr=False)
    address: str
    source: str = field(default="file", compare=False)
    persisted: bool = field(default=True, compare=False)

    def to_account(self) -> LocalAccount:
        return Account.from_key(self.private_key)


@dataclass(frozen=True)
class Accounts:
    celo: SigningIdentity
    ethereum: Optional[SigningIdentity] = None


def identity_from_key(key_text: str) -> SigningIdentity:
    """
    Derive an identity from hex key material.

    Args:
        key_text: 64 hex characters, optionally 0x-prefixed

    Raises:
        MalformedKeyError: if the text is not a valid secp256k1 private key
    """
    key_text = key_text.strip()
    if not _HEX_KEY.match(key_text):
        raise MalformedKeyError("Key material must be 32 bytes of hex (64 characters, optional 0x prefix)")

    key_hex = key_text[2:] if key_text.startswith("0x") else key_text
    if not 0 < int(key_hex, 16) < SECP256K1_N:
        raise MalformedKeyError("Key material is outside the secp256k1 private key range")

    private_key = "0x" + key_hex.lower()
    account = Account.from_key(private_key)
    return SigningIdentity(private_key=private_key, address=account.address)


def _read_identity(path: Path) -> SigningIdentity:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = f.read()
    except UnicodeDecodeError:
        raise MalformedKeyError(f"{path}: key material is not UTF-8 text") from None
    except OSError as e:
        raise SecretFileError(f"Could not read secret file {path}: {e.strerror or e}") from e

    try:
        identity = identity_from_key(data)
    except MalformedKeyError as e:
        raise MalformedKeyError(f"{path}: {e}") from None
    logger.debug(f"Loaded account {identity.address} from {path}")
    return identity


def _persist(path: Path, private_key: str):
    # O_EXCL: an existing secret file is never overwritten
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(private_key)
    except OSError:
        # a partial file would be read back as a malformed key on the next run
        os.unlink(path)
        raise


def obtain_identity(secret_file_path: PathLike, strict: bool = False) -> SigningIdentity:
    """
    Load the identity stored at ``secret_file_path``, creating it on first use.

    A missing file gets a freshly generated key written to it. If that write
    fails the new identity is still returned with ``persisted=False`` (it
    will not survive a restart) unless ``strict`` is set, in which case the
    PersistenceError is raised.
    """
    path = Path(secret_file_path)
    if path.exists():
        return _read_identity(path)

    account = Account.create()
    private_key = "0x" + bytes(account.key).hex()

    try:
        _persist(path, private_key)
    except OSError as e:
        error = PersistenceError(f"Could not write new key to {path}: {e}")
        if strict:
            raise error from e
        logger.error(f"{error}. Account {account.address} will not survive a restart")
        return SigningIdentity(private_key, account.address, source="generated", persisted=False)

    logger.info(f"Generated new account {account.address} and saved its key to {path}")
    return SigningIdentity(private_key, account.address, source="generated", persisted=True)


def load_identity(secret_file_path: PathLike) -> Optional[SigningIdentity]:
    """Read an identity without ever generating one. Returns None if the file is absent."""
    path = Path(secret_file_path)
    if not path.exists():
        logger.debug(f"No secret file at {path}")
        return None
    return _read_identity(path)


def bootstrap(settings) -> Accounts:
    """Resolve the accounts a deployment run signs with."""
    celo = obtain_identity(settings.secret_file)
    logger.info(f"Celo Account address: {celo.address}")

    ethereum = load_identity(settings.eth_secret_file)
    if ethereum is None:
        logger.info(f"No Ethereum key at {settings.eth_secret_file}; Ethereum networks are unavailable")
    else:
        logger.info(f"Ethereum Account address: {ethereum.address}")

    return Accounts(celo=celo, ethereum=ethereum)
