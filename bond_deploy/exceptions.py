"""Errors raised by the deployment toolkit."""


class BondDeployError(RuntimeError):
    pass


class MalformedKeyError(BondDeployError):
    """Secret file content is not a usable private key."""


class PersistenceError(BondDeployError):
    """A freshly generated key could not be written to disk."""


class MissingSecretError(BondDeployError):
    pass


class ConfigurationError(BondDeployError):
    pass


class NetworkConnectionError(BondDeployError):
    pass


class ArtifactError(BondDeployError):
    pass


class DeploymentError(BondDeployError):
    pass


class ContractNotDeployedError(BondDeployError):
    pass


class SecretFileError(BondDeployError):
    """A secret file exists but could not be read."""


class RegistryError(BondDeployError):
    pass
