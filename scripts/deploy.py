"""
Pool Deployment Script
Deploys one Pool contract to the selected network

Run through the task runner:
    python main.py run scripts/deploy.py --network localhost
"""

import sys

from loguru import logger

from blockchain.deployer import DeploymentResult
from toolchain.runtime import ToolchainRuntime
from utils.logger import setup_logging

CONTRACT_NAME = "Pool"


def deploy_pool(runtime: ToolchainRuntime) -> DeploymentResult:
    """Deploy Pool with the first signer of the network"""
    # 1. Get deployer
    deployer = runtime.get_deployer()
    print(f"Deployer address: {deployer.address}", flush=True)

    # 2. Deploy pool
    factory = runtime.get_contract_factory(CONTRACT_NAME, signer=deployer)
    pending = factory.deploy()
    result = pending.wait_for_deployment(timeout=runtime.network.confirmation_timeout)

    print(f"Pool Address: {result.address}", flush=True)
    return result


def main(network: str = None, config_path: str = None, root: str = None) -> int:
    """
    Run the deployment

    Returns:
        Process exit code
    """
    setup_logging()

    try:
        runtime = ToolchainRuntime.from_environment(network, config_path=config_path, root=root)
        deploy_pool(runtime)
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment failed: {type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
