import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, NamedTuple

from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from eth_typing import ABI

from vault_deployment.utils import _load_json, get_contract_container

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}
UNMERGED_SUFFIX = ".unmerged.json"


class RegistryEntry(NamedTuple):
    """A single deployed contract, as recorded in the registry."""

    chain_id: ChainId
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    tx_hash: str
    block_number: int
    deployer: str


def _entry_from_instance(contract_instance: ContractInstance) -> RegistryEntry:
    receipt = contract_instance.receipt
    abi = [abi_entry.model_dump(by_alias=True) for abi_entry in contract_instance.contract_type.abi]
    return RegistryEntry(
        chain_id=receipt.chain_id,
        name=contract_instance.contract_type.name,
        address=to_checksum_address(contract_instance.address),
        abi=abi,
        tx_hash=str(receipt.txn_hash),
        block_number=int(receipt.block_number),
        deployer=receipt.transaction.sender,
    )


def read_registry(filepath: Path) -> List[RegistryEntry]:
    data = _load_json(filepath)
    return [
        RegistryEntry(
            chain_id=int(chain_id),
            name=contract_name,
            address=artifacts["address"],
            abi=artifacts["abi"],
            tx_hash=artifacts["tx_hash"],
            block_number=artifacts["block_number"],
            deployer=artifacts["deployer"],
        )
        for chain_id, contracts in data.items()
        for contract_name, artifacts in contracts.items()
    ]


def _serialize(entries: List[RegistryEntry]) -> Dict[str, Dict[str, dict]]:
    data = defaultdict(dict)
    for entry in sorted(entries, key=lambda e: (str(e.chain_id), e.name)):
        data[str(entry.chain_id)][entry.name] = {
            "address": entry.address,
            "abi": sorted(entry.abi, key=lambda d: (d["type"], d.get("name", ""))),
            "tx_hash": entry.tx_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }
    return dict(data)


def write_registry(entries: List[RegistryEntry], filepath: Path) -> Path:
    """
    Writes registry entries to a file, merging them into any existing registry.
    Entries are never written over an existing chain's records; when the chain ids
    overlap the output is diverted to a sibling '.unmerged.json' file instead.
    """
    if not entries:
        print("No entries provided.")
        return filepath

    data = _serialize(entries)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if filepath.exists():
        existing_data = _load_json(filepath)
        if any(chain_id in existing_data for chain_id in data):
            filepath = filepath.with_suffix(UNMERGED_SUFFIX)
            print(
                "Cannot merge registries with overlapping chain IDs.\n"
                f"Writing to {filepath} to avoid overwriting existing data."
            )
        else:
            print(f"Updating existing registry at {filepath}.")
            existing_data.update(data)
            data = existing_data
    else:
        print(f"Creating new registry at {filepath}.")

    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def registry_from_ape_deployments(
    deployments: List[ContractInstance], output_filepath: Path
) -> Path:
    """Records ape deployments in a registry file."""
    entries = [_entry_from_instance(instance) for instance in deployments]
    output_filepath = write_registry(entries=entries, filepath=output_filepath)
    print(f"(i) Registry written to {output_filepath}!")
    return output_filepath


def get_registered_address(
    filepath: Path, chain_id: ChainId, contract_name: ContractName
) -> ChecksumAddress:
    for entry in read_registry(filepath):
        if entry.chain_id == chain_id and entry.name == contract_name:
            return to_checksum_address(entry.address)
    raise ValueError(
        f"Contract '{contract_name}' not found in registry, '{filepath}', for chain {chain_id}"
    )


def contracts_from_registry(filepath: Path, chain_id: ChainId) -> Dict[str, ContractInstance]:
    """Returns the contract instances recorded in a registry for a single chain."""
    deployments = dict()
    for entry in read_registry(filepath):
        if entry.chain_id != chain_id:
            continue
        contract_container = get_contract_container(entry.name)
        deployments[entry.name] = contract_container.at(entry.address)
    return deployments
