"""
Network Connection
Builds a Web3 instance for the selected network profile
"""

from web3 import Web3
from web3.providers.eth_tester import EthereumTesterProvider
from loguru import logger

from toolchain.config import NetworkProfile
from toolchain.exceptions import NetworkUnavailable


def connect(profile: NetworkProfile) -> Web3:
    """
    Connect to a network

    Args:
        profile: Network profile; profiles without a url get a fresh
            in-process chain with funded node accounts

    Returns:
        Connected Web3 instance
    """
    if profile.is_in_process:
        w3 = Web3(EthereumTesterProvider())
        logger.info(f"Started in-process network '{profile.name}'")
        return w3

    w3 = Web3(Web3.HTTPProvider(
        profile.url,
        request_kwargs={'timeout': profile.timeout}
    ))

    if not w3.is_connected():
        raise NetworkUnavailable(f"Failed to connect to network '{profile.name}' at {profile.url}")

    logger.success(f"Connected to {profile.name} (chain id {w3.eth.chain_id})")
    return w3
