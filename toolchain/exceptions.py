"""
Deployment Errors
Every failure the toolchain raises derives from DeploymentError
"""


class DeploymentError(Exception):
    """Base exception for toolchain and deployment errors"""

    pass


class ConfigError(DeploymentError, ValueError):
    """Raised when the toolchain configuration file is malformed"""

    pass


class UnknownNetwork(DeploymentError, ValueError):
    """Raised when the requested network is not declared in the configuration"""

    pass


class NetworkUnavailable(DeploymentError, ConnectionError):
    """Raised when the network endpoint cannot be reached"""

    pass


class NoSignerAvailable(DeploymentError):
    """Raised when the active network has no signing accounts"""

    pass


class ArtifactNotFound(DeploymentError, FileNotFoundError):
    """Raised when no compiled artifact matches the contract name"""

    pass


class AmbiguousArtifact(DeploymentError, ValueError):
    """Raised when a bare contract name matches several artifacts"""

    pass


class InvalidArtifact(DeploymentError, ValueError):
    """Raised when an artifact cannot be read or has no creation bytecode"""

    pass


class DeploymentReverted(DeploymentError):
    """Raised when the deployment transaction reverts"""

    def __init__(self, message: str, transaction_hash: str = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class InsufficientFunds(DeploymentError):
    """Raised when the deployer cannot pay for the deployment"""

    pass


class ConfirmationTimeout(DeploymentError, TimeoutError):
    """Raised when the client stops waiting for the deployment receipt"""

    def __init__(self, message: str, transaction_hash: str = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash
