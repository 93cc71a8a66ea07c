"""
Deployment Confirmation
Waits for deployment receipts and maps chain failures onto deployment errors
"""

from dataclasses import dataclass
from typing import Optional

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted
from loguru import logger

from toolchain.exceptions import (
    ConfirmationTimeout,
    DeploymentError,
    DeploymentReverted,
    InsufficientFunds,
)

# Messages used by geth, hardhat/anvil and eth-tester for unpayable transactions
INSUFFICIENT_FUNDS_PATTERNS = (
    'insufficient funds',
    'does not have enough balance',
    "sender doesn't have enough funds",
    'cannot afford txn gas',
)

REVERT_PATTERNS = (
    'revert',
    'invalid opcode',
)


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a confirmed deployment"""

    contract_name: str
    address: str
    deployer: str
    transaction_hash: str
    block_number: int
    gas_used: int


class PendingDeployment:
    """
    Deployment transaction that has been submitted but not yet confirmed
    """

    def __init__(self, w3: Web3, contract_name: str, deployer: str, transaction_hash):
        """
        Args:
            w3: Web3 instance
            contract_name: Name of the deployed artifact
            deployer: Address that sent the transaction
            transaction_hash: Hash returned on submission
        """
        self.w3 = w3
        self.contract_name = contract_name
        self.deployer = deployer
        self.transaction_hash = Web3.to_hex(transaction_hash)

    def wait_for_deployment(self, timeout: float = 300, poll_latency: float = 0.1) -> DeploymentResult:
        """
        Block until the deployment transaction is mined

        Args:
            timeout: Seconds before the client gives up
            poll_latency: Seconds between receipt polls

        Returns:
            DeploymentResult
        """
        logger.info(f"Waiting for confirmation of {self.transaction_hash}...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                self.transaction_hash,
                timeout=timeout,
                poll_latency=poll_latency
            )
        except TimeExhausted as e:
            raise ConfirmationTimeout(
                f"{self.contract_name} deployment not confirmed after {timeout}s",
                transaction_hash=self.transaction_hash
            ) from e

        if receipt['status'] != 1 or not receipt.get('contractAddress'):
            raise DeploymentReverted(
                f"{self.contract_name} deployment reverted in block {receipt['blockNumber']}",
                transaction_hash=self.transaction_hash
            )

        result = DeploymentResult(
            contract_name=self.contract_name,
            address=Web3.to_checksum_address(receipt['contractAddress']),
            deployer=self.deployer,
            transaction_hash=self.transaction_hash,
            block_number=receipt['blockNumber'],
            gas_used=receipt['gasUsed']
        )

        logger.success(f"{result.contract_name} deployed at {result.address}")
        logger.debug(f"Block: {result.block_number}, gas used: {result.gas_used}")
        return result


def classify_submission_error(error: Exception) -> Optional[DeploymentError]:
    """
    Map an error raised while submitting a deployment

    Args:
        error: Exception from the network client

    Returns:
        InsufficientFunds, DeploymentReverted, or None when the error is
        neither and should propagate unchanged
    """
    message = str(error)
    lowered = message.lower()

    if any(pattern in lowered for pattern in INSUFFICIENT_FUNDS_PATTERNS):
        return InsufficientFunds(message)

    if isinstance(error, ContractLogicError) or any(pattern in lowered for pattern in REVERT_PATTERNS):
        return DeploymentReverted(message)

    return None
