"""
Toolchain Package
Configuration, runtime environment and deployment errors
"""

from .config import CompilerProfile, NetworkProfile, PathsConfig, ToolchainConfig, load_config
from .exceptions import (
    AmbiguousArtifact,
    ArtifactNotFound,
    ConfigError,
    ConfirmationTimeout,
    DeploymentError,
    DeploymentReverted,
    InsufficientFunds,
    InvalidArtifact,
    NetworkUnavailable,
    NoSignerAvailable,
    UnknownNetwork,
)

__all__ = [
    'CompilerProfile',
    'NetworkProfile',
    'PathsConfig',
    'ToolchainConfig',
    'load_config',
    'AmbiguousArtifact',
    'ArtifactNotFound',
    'ConfigError',
    'ConfirmationTimeout',
    'DeploymentError',
    'DeploymentReverted',
    'InsufficientFunds',
    'InvalidArtifact',
    'NetworkUnavailable',
    'NoSignerAvailable',
    'UnknownNetwork',
]
