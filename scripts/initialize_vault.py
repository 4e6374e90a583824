#!/usr/bin/python3

import click
from ape import networks
from ape.api import AccountAPI, ReceiptAPI
from ape.cli import ConnectedProviderCommand, account_option, network_option

from vault_deployment.constants import VAULT_CONTRACT_NAME
from vault_deployment.options import autosign_option, registry_filepath_option
from vault_deployment.params import Transactor
from vault_deployment.registry import get_registered_address
from vault_deployment.runner import execute
from vault_deployment.types import ChecksumAddress
from vault_deployment.utils import check_plugins, get_contract_container
from vault_deployment.vault import initialize_vault

VAULT_ADDRESS = "0x63AFF1c026b79f28990A8E81eEB8b5D4c306DB1B"
STRATEGY_ADDRESS = "0xd7c7Be67819247eBB8fc8Ec8922b2d101d8514D6"


def initialize(
    account: AccountAPI, vault_address: str, strategy_address: str, autosign: bool = False
) -> ReceiptAPI:
    transactor = Transactor(account=account, autosign=autosign)
    container = get_contract_container(VAULT_CONTRACT_NAME)
    vault = container.at(vault_address)
    receipt = initialize_vault(
        transactor=transactor, vault=vault, strategy_address=strategy_address
    )
    print("Vault initialized")
    return receipt


@click.command(cls=ConnectedProviderCommand, name="initialize-vault")
@account_option()
@network_option(required=True)
@click.option(
    "--vault",
    "vault_address",
    help=f"Address of the deployed vault [default: {VAULT_ADDRESS}]",
    type=ChecksumAddress(),
    required=False,
)
@click.option(
    "--strategy",
    "strategy_address",
    help="Address of the strategy to link to the vault.",
    type=ChecksumAddress(),
    default=STRATEGY_ADDRESS,
    show_default=True,
)
@registry_filepath_option(
    exists=True, help="Registry to look up the vault address in, instead of --vault"
)
@autosign_option
@click.pass_context
def cli(ctx, account, network, vault_address, strategy_address, registry_filepath, auto):
    """
    Initializes a deployed Reaper vault with its strategy.

    ape run initialize_vault --network fantom:opera --account deployer
    """
    if vault_address and registry_filepath:
        raise click.BadOptionUsage(
            option_name="--vault",
            message=(
                f"Provide either 'vault' or 'registry_filepath'; "
                f"got {vault_address}, {registry_filepath}"
            ),
        )

    def task():
        check_plugins()
        click.echo(f"Connected to {network.name} network.")
        address = vault_address or VAULT_ADDRESS
        if registry_filepath:
            address = get_registered_address(
                filepath=registry_filepath,
                chain_id=networks.provider.chain_id,
                contract_name=VAULT_CONTRACT_NAME,
            )
        initialize(
            account=account,
            vault_address=address,
            strategy_address=strategy_address,
            autosign=auto,
        )

    ctx.exit(execute(task))


if __name__ == "__main__":
    cli()
