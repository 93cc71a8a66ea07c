"""
Toolchain Configuration
Loads network profiles, compiler settings and directory layout from config/toolchain_config.json
"""

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from loguru import logger

from .exceptions import ConfigError, UnknownNetwork

load_dotenv()

CONFIG_ENV_VAR = 'TOOLCHAIN_CONFIG'
NETWORK_ENV_VAR = 'TOOLCHAIN_NETWORK'
DEFAULT_CONFIG_PATH = Path('config') / 'toolchain_config.json'

# In-process network, served by eth-tester instead of an RPC endpoint
IN_PROCESS_NETWORK = 'hardhat'

DEFAULT_RPC_TIMEOUT_MS = 40000
DEFAULT_CONFIRMATION_TIMEOUT = 300

DEFAULT_PATHS = {
    'sources': './contracts',
    'tests': './test',
    'cache': './cache',
    'artifacts': './artifacts',
}


@dataclass(frozen=True)
class NetworkProfile:
    """
    Connection profile for one network

    The options mapping is kept exactly as written in the config file,
    the properties below are read-only views over it.
    """

    name: str
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> Optional[str]:
        return self.options.get('url')

    @property
    def is_in_process(self) -> bool:
        return self.url is None

    @property
    def timeout(self) -> float:
        """RPC request timeout in seconds"""
        return self.options.get('timeout', DEFAULT_RPC_TIMEOUT_MS) / 1000

    @property
    def confirmation_timeout(self) -> float:
        return self.options.get('confirmationTimeout', DEFAULT_CONFIRMATION_TIMEOUT)

    @property
    def accounts(self) -> Optional[List[str]]:
        """
        Private keys configured for this network

        Returns:
            None when the node's own accounts should be used, otherwise the
            configured keys (possibly an empty list)
        """
        if 'accounts' in self.options:
            accounts = self.options['accounts']
            if accounts == 'remote':
                return None
            if not isinstance(accounts, list):
                raise ConfigError(
                    f"Network '{self.name}': accounts must be a list of private keys or \"remote\""
                )
            return [_normalize_key(key) for key in accounts]

        env_name = self.options.get('accountsEnv')
        if env_name:
            key = os.getenv(env_name)
            if not key:
                logger.warning(f"{env_name} not set - no accounts for network '{self.name}'")
                return []
            return [_normalize_key(key)]

        return None

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.options)


@dataclass(frozen=True)
class CompilerProfile:
    """
    Solidity compiler profile, consumed by the external compiler

    Keys other than version and settings (compilers, overrides, ...) are
    kept in options untouched.
    """

    options: Dict[str, Any]

    @property
    def version(self) -> str:
        return self.options['version']

    @property
    def settings(self) -> Dict[str, Any]:
        return self.options.get('settings', {})

    @property
    def optimizer_enabled(self) -> bool:
        return bool(self.settings.get('optimizer', {}).get('enabled', False))

    @property
    def optimizer_runs(self) -> int:
        return self.settings.get('optimizer', {}).get('runs', 200)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.options)


@dataclass(frozen=True)
class PathsConfig:
    """Project directory layout"""

    sources: str = DEFAULT_PATHS['sources']
    tests: str = DEFAULT_PATHS['tests']
    cache: str = DEFAULT_PATHS['cache']
    artifacts: str = DEFAULT_PATHS['artifacts']
    declared: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'PathsConfig':
        # Other keys (root, ...) are carried in declared only
        known = {name: data[name] for name in DEFAULT_PATHS if name in data}
        return cls(**{**DEFAULT_PATHS, **known}, declared=copy.deepcopy(data))

    def resolve(self, root: Path, name: str) -> Path:
        """Absolute location of one of the configured directories"""
        return (root / getattr(self, name)).resolve()

    def to_dict(self) -> Dict[str, str]:
        return copy.deepcopy(self.declared)


@dataclass(frozen=True)
class ToolchainConfig:
    """Complete toolchain configuration"""

    default_network: str
    networks: Dict[str, NetworkProfile]
    solidity: CompilerProfile
    paths: PathsConfig
    root: Path = field(default_factory=Path.cwd)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root: Optional[Path] = None) -> 'ToolchainConfig':
        """
        Build a configuration from its JSON mapping

        Args:
            data: Parsed config file
            root: Directory that relative paths resolve against

        Returns:
            ToolchainConfig
        """
        if not isinstance(data, dict):
            raise ConfigError("Toolchain config must be a JSON object")

        networks = data.get('networks')
        if not isinstance(networks, dict) or not networks:
            raise ConfigError("Toolchain config must declare at least one network")

        solidity = data.get('solidity')
        if not isinstance(solidity, dict) or 'version' not in solidity:
            raise ConfigError("Toolchain config must declare solidity.version")

        default_network = data.get('defaultNetwork', IN_PROCESS_NETWORK)
        if default_network not in networks:
            raise ConfigError(f"Default network '{default_network}' is not declared in networks")

        profiles = {}
        for name, options in networks.items():
            if not isinstance(options, dict):
                raise ConfigError(f"Network '{name}' must be a JSON object")
            profiles[name] = NetworkProfile(name=name, options=copy.deepcopy(options))

        return cls(
            default_network=default_network,
            networks=profiles,
            solidity=CompilerProfile(options=copy.deepcopy(solidity)),
            paths=PathsConfig.from_dict(data.get('paths', {})),
            root=Path(root) if root else Path.cwd(),
            raw=copy.deepcopy(data)
        )

    def network(self, name: Optional[str] = None) -> NetworkProfile:
        """
        Select the active network profile

        Args:
            name: Network name (None = TOOLCHAIN_NETWORK, then defaultNetwork)

        Returns:
            NetworkProfile
        """
        selected = name or os.getenv(NETWORK_ENV_VAR) or self.default_network

        if selected not in self.networks:
            raise UnknownNetwork(
                f"Network '{selected}' is not defined "
                f"(available: {', '.join(sorted(self.networks))})"
            )

        return self.networks[selected]

    def path(self, name: str) -> Path:
        return self.paths.resolve(self.root, name)

    def to_dict(self) -> Dict[str, Any]:
        """Configuration mapping, identical to the one that was loaded"""
        # Top-level keys this module does not read (mocha, etherscan, ...) pass through
        data = copy.deepcopy(self.raw)
        data['networks'] = {name: profile.to_dict() for name, profile in self.networks.items()}
        data['solidity'] = self.solidity.to_dict()
        if 'paths' in self.raw:
            data['paths'] = self.paths.to_dict()
        return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    root: Optional[Union[str, Path]] = None
) -> ToolchainConfig:
    """
    Load the toolchain configuration

    Args:
        path: Config file (None = TOOLCHAIN_CONFIG, then config/toolchain_config.json)
        root: Project root (None = current directory)

    Returns:
        ToolchainConfig
    """
    root = Path(root) if root else Path.cwd()
    config_path = Path(path or os.getenv(CONFIG_ENV_VAR) or root / DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        raise ConfigError(f"Toolchain config not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    config = ToolchainConfig.from_dict(data, root=root)
    logger.debug(f"Loaded toolchain config from {config_path}")
    return config


def _normalize_key(key: str) -> str:
    return key if key.startswith('0x') else f'0x{key}'
