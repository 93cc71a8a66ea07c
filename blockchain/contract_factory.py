"""
Contract Factory
Loads compiled artifacts and submits contract deployments
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from web3 import Web3
from loguru import logger

from toolchain.exceptions import AmbiguousArtifact, ArtifactNotFound, InvalidArtifact

from .deployer import PendingDeployment, classify_submission_error
from .signers import Signer

BUILD_INFO_DIR = 'build-info'


@dataclass(frozen=True)
class Artifact:
    """Compiled contract: ABI plus creation bytecode"""

    contract_name: str
    source_name: str
    abi: List[Dict]
    bytecode: str
    path: Path

    @classmethod
    def from_file(cls, path: Path) -> 'Artifact':
        """
        Read a compiled artifact

        Args:
            path: Artifact JSON file

        Returns:
            Artifact
        """
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidArtifact(f"Cannot read artifact {path}: {e}") from e

        if 'abi' not in data or 'bytecode' not in data:
            raise InvalidArtifact(f"Artifact {path} has no abi/bytecode")

        bytecode = data['bytecode']
        if not bytecode.startswith('0x'):
            bytecode = f'0x{bytecode}'

        return cls(
            contract_name=data.get('contractName', path.stem),
            source_name=data.get('sourceName', path.parent.name),
            abi=data['abi'],
            bytecode=bytecode,
            path=path
        )

    @property
    def is_deployable(self) -> bool:
        return len(self.bytecode) > 2

    @property
    def needs_linking(self) -> bool:
        return '__$' in self.bytecode


class ArtifactStore:
    """
    Compiled artifacts laid out as <artifacts>/<sourceName>/<ContractName>.json
    """

    def __init__(self, artifacts_dir: Path):
        self.artifacts_dir = Path(artifacts_dir)

    def find(self, name: str) -> Path:
        """
        Locate an artifact file

        Args:
            name: Contract name or fully qualified 'path/To.sol:Name'

        Returns:
            Path of the artifact JSON
        """
        if not self.artifacts_dir.is_dir():
            raise ArtifactNotFound(
                f"Artifacts directory not found: {self.artifacts_dir} (compile the contracts first)"
            )

        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
            path = self.artifacts_dir / source_name / f'{contract_name}.json'
            if not path.is_file():
                raise ArtifactNotFound(f"Artifact for contract '{name}' not found")
            return path

        matches = sorted(
            path for path in self.artifacts_dir.rglob(f'{name}.json')
            if BUILD_INFO_DIR not in path.relative_to(self.artifacts_dir).parts
        )

        if not matches:
            raise ArtifactNotFound(f"Artifact for contract '{name}' not found in {self.artifacts_dir}")

        if len(matches) > 1:
            candidates = [
                f"{path.parent.relative_to(self.artifacts_dir).as_posix()}:{name}"
                for path in matches
            ]
            raise AmbiguousArtifact(
                f"Several artifacts named '{name}', use a fully qualified name: {', '.join(candidates)}"
            )

        return matches[0]

    def load(self, name: str) -> Artifact:
        artifact = Artifact.from_file(self.find(name))
        logger.debug(f"Loaded artifact {artifact.source_name}:{artifact.contract_name}")
        return artifact

    def names(self) -> List[str]:
        """Fully qualified names of every artifact in the store"""
        if not self.artifacts_dir.is_dir():
            return []

        names = []
        for path in sorted(self.artifacts_dir.rglob('*.json')):
            relative = path.relative_to(self.artifacts_dir)
            if BUILD_INFO_DIR in relative.parts or path.name.endswith('.dbg.json'):
                continue
            names.append(f"{relative.parent.as_posix()}:{path.stem}")
        return names


class ContractFactory:
    """
    Builds new on-chain instances of one compiled contract
    """

    def __init__(self, w3: Web3, artifact: Artifact, signer: Signer):
        """
        Args:
            w3: Web3 instance
            artifact: Compiled contract
            signer: Account that sends deployment transactions
        """
        if not artifact.is_deployable:
            raise InvalidArtifact(
                f"{artifact.contract_name} has no bytecode (interface or abstract contract)"
            )
        if artifact.needs_linking:
            raise InvalidArtifact(f"{artifact.contract_name} bytecode has unlinked library references")

        self.w3 = w3
        self.artifact = artifact
        self.signer = signer
        self.contract = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    @property
    def contract_name(self) -> str:
        return self.artifact.contract_name

    def deploy(self, *args, transaction: Optional[Dict] = None) -> PendingDeployment:
        """
        Submit a deployment transaction

        Args:
            *args: Constructor arguments
            transaction: Extra transaction fields (gas, value, ...)

        Returns:
            PendingDeployment for the submitted transaction
        """
        constructor = self.contract.constructor(*args)
        tx = {'from': self.signer.address, **(transaction or {})}

        logger.info(f"Deploying {self.contract_name} from {self.signer.address}...")

        try:
            if self.signer.is_local:
                tx.setdefault('nonce', self.w3.eth.get_transaction_count(self.signer.address))
                built = constructor.build_transaction(tx)
                signed = self.signer.sign_transaction(built)
                tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            else:
                tx_hash = constructor.transact(tx)
        except Exception as e:
            mapped = classify_submission_error(e)
            if mapped is None:
                raise
            raise mapped from e

        pending = PendingDeployment(self.w3, self.contract_name, self.signer.address, tx_hash)
        logger.info(f"Transaction sent: {pending.transaction_hash}")
        return pending
