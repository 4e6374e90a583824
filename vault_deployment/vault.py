from ape.api import ReceiptAPI
from ape.contracts.base import ContractContainer, ContractInstance
from eth_utils import to_checksum_address

from vault_deployment.params import Deployer, Transactor, VaultParameters


class VaultAlreadyInitialized(Exception):
    """Raised when a vault has already been linked to a strategy."""


def deploy_vault(
    deployer: Deployer, container: ContractContainer, parameters: VaultParameters
) -> ContractInstance:
    """Deploys a vault with the given constructor arguments and waits for confirmation."""
    print(f"\nDeploying {container.contract_type.name} for want {parameters.want}...")
    return deployer.deploy(container, *parameters.values())


def is_initialized(vault: ContractInstance) -> bool:
    try:
        initialized = vault.initialized
    except AttributeError:
        # vault ABI does not expose the flag
        return False
    return bool(initialized())


def initialize_vault(
    transactor: Transactor, vault: ContractInstance, strategy_address: str
) -> ReceiptAPI:
    """Links a deployed vault to its strategy through the vault's one-time initializer."""
    strategy_address = to_checksum_address(strategy_address)
    if is_initialized(vault):
        raise VaultAlreadyInitialized(f"Vault at {vault.address} is already initialized.")
    return transactor.transact(vault.initialize, strategy_address)
