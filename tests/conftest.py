"""Shared pytest fixtures for toolchain tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest
from loguru import logger

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Creation code for a contract whose runtime code returns 42
POOL_BYTECODE = "0x600a600c600039600a6000f3602a60505260206050f3"

# Well-known development key and its address
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture(autouse=True)
def reset_logger(monkeypatch):
    """Drop sinks bound to captured streams and isolate selection env vars."""
    monkeypatch.delenv("TOOLCHAIN_NETWORK", raising=False)
    monkeypatch.delenv("TOOLCHAIN_CONFIG", raising=False)
    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    yield
    logger.remove()


@pytest.fixture
def shipped_config_path() -> Path:
    return PROJECT_ROOT / "config" / "toolchain_config.json"


@pytest.fixture
def config_data(shipped_config_path: Path) -> Dict[str, Any]:
    with open(shipped_config_path) as f:
        return json.load(f)


def write_artifact(artifacts_dir: Path, source_name: str, contract_name: str, bytecode: str = POOL_BYTECODE) -> Path:
    """Write a hardhat-style artifact and its debug file."""
    contract_dir = artifacts_dir / source_name
    contract_dir.mkdir(parents=True, exist_ok=True)

    path = contract_dir / f"{contract_name}.json"
    with open(path, "w") as f:
        json.dump({
            "_format": "hh-sol-artifact-1",
            "contractName": contract_name,
            "sourceName": source_name,
            "abi": [],
            "bytecode": bytecode,
            "deployedBytecode": "0x602a60505260206050f3",
            "linkReferences": {},
            "deployedLinkReferences": {},
        }, f)

    with open(contract_dir / f"{contract_name}.dbg.json", "w") as f:
        json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc.json"}, f)

    return path


@pytest.fixture
def project_root(tmp_path: Path, config_data: Dict[str, Any]) -> Path:
    """Project tree with the shipped config and a compiled Pool artifact."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    with open(config_dir / "toolchain_config.json", "w") as f:
        json.dump(config_data, f, indent=2)

    write_artifact(tmp_path / "artifacts", "contracts/Pool.sol", "Pool")
    return tmp_path


@pytest.fixture
def artifacts_dir(project_root: Path) -> Path:
    return project_root / "artifacts"


def write_config(root: Path, data: Dict[str, Any]) -> Path:
    path = root / "config" / "toolchain_config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path
