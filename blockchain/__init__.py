"""
Blockchain Interaction Package
Handles network connections, signers, contract factories and deployment confirmation
"""

from .contract_factory import Artifact, ArtifactStore, ContractFactory
from .deployer import DeploymentResult, PendingDeployment
from .network import connect
from .signers import Signer, get_deployer, get_signers

__all__ = [
    'Artifact',
    'ArtifactStore',
    'ContractFactory',
    'DeploymentResult',
    'PendingDeployment',
    'connect',
    'Signer',
    'get_deployer',
    'get_signers',
]
