"""
Toolchain Task Runner
Runs deployment scripts and inspection tasks against a configured network

Examples:
    python main.py run scripts/deploy.py
    python main.py run scripts/deploy.py --network localhost
    python main.py accounts --network localhost
    python main.py config
"""

import argparse
import json
import os
import subprocess
import sys
from pathlib import Path

from loguru import logger

from toolchain.config import CONFIG_ENV_VAR, NETWORK_ENV_VAR, load_config
from toolchain.runtime import ToolchainRuntime
from utils.logger import setup_logging

PROJECT_ROOT = Path(__file__).resolve().parent


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Smart contract build/deploy task runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    config_option = argparse.ArgumentParser(add_help=False)
    config_option.add_argument("--config", help="Toolchain config file (default: config/toolchain_config.json)")

    common = argparse.ArgumentParser(add_help=False, parents=[config_option])
    common.add_argument("--network", help="Network name from the toolchain config")

    subparsers = parser.add_subparsers(dest="task", required=True)

    run_parser = subparsers.add_parser("run", parents=[common], help="Run a script with the selected network")
    run_parser.add_argument("script", help="Path to the script")

    subparsers.add_parser("accounts", parents=[common], help="Prints the list of accounts")
    subparsers.add_parser("config", parents=[config_option], help="Prints the resolved toolchain config")

    return parser


def run_script(script: str, network: str = None, config_path: str = None) -> int:
    """
    Run a script in a child interpreter

    Args:
        script: Script path
        network: Network name exported as TOOLCHAIN_NETWORK
        config_path: Config file exported as TOOLCHAIN_CONFIG

    Returns:
        Exit code of the script
    """
    script_path = Path(script)
    if not script_path.is_file():
        logger.error(f"Script not found: {script}")
        return 1

    env = os.environ.copy()
    if network:
        env[NETWORK_ENV_VAR] = network
    if config_path:
        env[CONFIG_ENV_VAR] = str(Path(config_path).resolve())

    python_path = [str(PROJECT_ROOT)]
    if env.get('PYTHONPATH'):
        python_path.append(env['PYTHONPATH'])
    env['PYTHONPATH'] = os.pathsep.join(python_path)

    logger.info(f"Running {script_path}" + (f" on {network}" if network else ""))

    result = subprocess.run([sys.executable, str(script_path)], env=env)
    return result.returncode


def print_accounts(network: str = None, config_path: str = None) -> int:
    runtime = ToolchainRuntime.from_environment(network, config_path=config_path)

    for signer in runtime.get_signers():
        print(signer.address)

    return 0


def print_config(config_path: str = None) -> int:
    config = load_config(config_path)
    print(json.dumps(config.to_dict(), indent=2))
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    args = create_parser().parse_args(argv)
    setup_logging()

    try:
        if args.task == "run":
            return run_script(args.script, args.network, args.config)
        if args.task == "accounts":
            return print_accounts(args.network, args.config)
        return print_config(args.config)
    except Exception as e:
        logger.opt(exception=e).error(f"Task '{args.task}' failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
