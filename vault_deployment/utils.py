import json
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from ape import networks, project
from ape.api import AccountAPI
from ape.contracts import ContractContainer, ContractInstance

from vault_deployment.networks import is_local_network


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def validate_chain_id(config_chain_id: Optional[int]) -> None:
    """
    Checks that the chain_id declared in a params file matches the connected network.
    Local networks are exempt; so are params files which do not declare a chain_id.
    """
    if config_chain_id is None:
        return
    connected_chain_id = networks.provider.network.chain_id
    if int(config_chain_id) != connected_chain_id and not is_local_network():
        raise ValueError(
            f"chain_id in params file ({config_chain_id}) does not match "
            f"chain_id of current network ({connected_chain_id})."
        )


def check_etherscan_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the appropriate API key environment variable is set.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to verify contracts.")
    ecosystem_name = networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    api_key = os.environ.get(explorer_envvar) if explorer_envvar else None
    if not api_key:
        raise ValueError(f"{explorer_envvar or 'Explorer API key'} is not set.")


def check_infura_plugin() -> None:
    """Checks that the ape-infura plugin is installed and configured when in use."""
    if is_local_network():
        return
    if networks.provider.name != "infura":
        return
    try:
        from ape_infura.provider import _ENVIRONMENT_VARIABLE_NAMES
    except ImportError:
        raise ImportError("Please install the ape-infura plugin to use the infura provider.")
    if not any(os.environ.get(envvar) for envvar in _ENVIRONMENT_VARIABLE_NAMES):
        raise ValueError(
            f"No Infura API key found in "
            f"environment variables: {', '.join(_ENVIRONMENT_VARIABLE_NAMES)}"
        )


def check_plugins(verify: bool = False) -> None:
    print("Checking plugins...")
    if verify:
        check_etherscan_plugin()
    check_infura_plugin()


def verify_contracts(contracts: List[ContractInstance]) -> None:
    explorer = networks.provider.network.explorer
    if explorer is None:
        raise ValueError(f"No explorer available for {networks.provider.network.name}.")
    for instance in contracts:
        print(f"(i) Verifying {instance.contract_type.name}...")
        explorer.publish_contract(instance.address)


def print_network_info(account: AccountAPI, **extra: Any) -> None:
    lines = [
        f"Account: {account.address}",
        f"Ecosystem: {networks.provider.network.ecosystem.name}",
        f"Network: {networks.provider.network.name}",
        f"Chain ID: {networks.provider.network.chain_id}",
        f"Gas Price: {networks.provider.gas_price}",
    ]
    lines.extend(f"{key.replace('_', ' ').title()}: {value}" for key, value in extra.items())
    print(*lines, sep="\n")


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container
