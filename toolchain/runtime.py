"""
Toolchain Runtime
Connected environment handed to deployment scripts: configuration, network, signers, factories
"""

from pathlib import Path
from typing import List, Optional, Union

from web3 import Web3
from loguru import logger

from blockchain.contract_factory import ArtifactStore, ContractFactory
from blockchain.network import connect
from blockchain.signers import Signer, get_deployer, get_signers

from .config import NetworkProfile, ToolchainConfig, load_config


class ToolchainRuntime:
    """
    Runtime environment for one selected network
    """

    def __init__(self, config: ToolchainConfig, network: NetworkProfile, w3: Web3):
        """
        Args:
            config: Loaded toolchain configuration
            network: Active network profile
            w3: Web3 instance connected to the network
        """
        self.config = config
        self.network = network
        self.w3 = w3
        self.artifacts = ArtifactStore(config.path('artifacts'))

    @classmethod
    def from_environment(
        cls,
        network: Optional[str] = None,
        config_path: Optional[Union[str, Path]] = None,
        root: Optional[Union[str, Path]] = None
    ) -> 'ToolchainRuntime':
        """
        Load configuration and connect to the selected network

        Args:
            network: Network name (None = TOOLCHAIN_NETWORK, then defaultNetwork)
            config_path: Config file override
            root: Project root (None = current directory)

        Returns:
            ToolchainRuntime
        """
        config = load_config(config_path, root=root)
        profile = config.network(network)

        logger.info(f"Network: {profile.name}")
        return cls(config, profile, connect(profile))

    def get_signers(self) -> List[Signer]:
        return get_signers(self.w3, self.network)

    def get_deployer(self) -> Signer:
        return get_deployer(self.w3, self.network)

    def get_contract_factory(self, name: str, signer: Optional[Signer] = None) -> ContractFactory:
        """
        Resolve a factory for a compiled contract

        Args:
            name: Contract name or fully qualified name
            signer: Deploying account (None = first signer)

        Returns:
            ContractFactory
        """
        artifact = self.artifacts.load(name)
        return ContractFactory(self.w3, artifact, signer or self.get_deployer())
