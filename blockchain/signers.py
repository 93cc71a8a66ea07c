"""
Signers
Resolves the signing accounts of a network: locally held keys or node-managed accounts
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from loguru import logger

from toolchain.config import NetworkProfile
from toolchain.exceptions import NoSignerAvailable


@dataclass(frozen=True)
class Signer:
    """
    Account able to originate transactions

    Local signers carry the eth_account account and sign raw transactions,
    node-managed signers let the node sign through eth_sendTransaction.
    """

    address: str
    account: Optional[LocalAccount] = None

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the local key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if not self.is_local:
            raise ValueError(f"Signer {self.address} is node-managed and holds no key")

        return self.account.sign_transaction(transaction)


def get_signers(w3: Web3, profile: NetworkProfile) -> List[Signer]:
    """
    List the signers of the active network

    Args:
        w3: Web3 instance
        profile: Active network profile

    Returns:
        Signers in configuration order (may be empty)
    """
    keys = profile.accounts

    if keys is not None:
        signers = []
        for key in keys:
            account = Account.from_key(key)
            signers.append(Signer(address=account.address, account=account))
        return signers

    return [Signer(address=Web3.to_checksum_address(address)) for address in w3.eth.accounts]


def get_deployer(w3: Web3, profile: NetworkProfile) -> Signer:
    """First signer of the network"""
    signers = get_signers(w3, profile)

    if not signers:
        raise NoSignerAvailable(f"No signing accounts available on network '{profile.name}'")

    deployer = signers[0]
    logger.info(f"Deployer: {deployer.address} ({'local key' if deployer.is_local else 'node account'})")
    return deployer
