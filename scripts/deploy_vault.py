#!/usr/bin/python3
from pathlib import Path
from typing import Optional

import click
from ape.api import AccountAPI
from ape.cli import ConnectedProviderCommand, account_option, network_option
from ape.contracts.base import ContractInstance

from vault_deployment.constants import (
    ARTIFACTS_DIR,
    MAX_UINT256,
    PERCENT_DIVISOR,
    VAULT_CONTRACT_NAME,
)
from vault_deployment.options import (
    autosign_option,
    params_file_option,
    registry_filepath_option,
    verify_option,
)
from vault_deployment.params import Deployer, VaultParameters, get_config_chain_id
from vault_deployment.runner import execute
from vault_deployment.types import ChecksumAddress, MinInt, Uint256
from vault_deployment.utils import (
    check_plugins,
    get_contract_container,
    print_network_info,
    validate_chain_id,
)
from vault_deployment.vault import deploy_vault

WANT_ADDRESS = "0x1b371a952A3246dAc40530D400d86b5d36655ad1"
TOKEN_NAME = "CUSD-AGEUR Creditum Crypt"
TOKEN_SYMBOL = "rf-CUSD-AGEUR"
DEPOSIT_FEE = 0
TVL_CAP = MAX_UINT256

REGISTRY_FILEPATH = ARTIFACTS_DIR / f"{VAULT_CONTRACT_NAME}.json"


def default_parameters() -> VaultParameters:
    return VaultParameters.create(
        want=WANT_ADDRESS,
        name=TOKEN_NAME,
        symbol=TOKEN_SYMBOL,
        deposit_fee=DEPOSIT_FEE,
        tvl_cap=TVL_CAP,
    )


def deploy(
    account: AccountAPI,
    parameters: VaultParameters,
    registry_filepath: Optional[Path] = None,
    autosign: bool = False,
    verify: bool = False,
) -> ContractInstance:
    deployer = Deployer(
        account=account, autosign=autosign, verify=verify, registry_filepath=registry_filepath
    )
    container = get_contract_container(VAULT_CONTRACT_NAME)
    vault = deploy_vault(deployer=deployer, container=container, parameters=parameters)
    print(f"Vault deployed to: {vault.address}")
    deployer.finalize(deployments=[vault])
    return vault


@click.command(cls=ConnectedProviderCommand, name="deploy-vault")
@account_option()
@network_option(required=True)
@click.option(
    "--want",
    help="Address of the underlying asset managed by the vault.",
    type=ChecksumAddress(),
    default=WANT_ADDRESS,
    show_default=True,
)
@click.option("--token-name", help="Vault share token name.", default=TOKEN_NAME, show_default=True)
@click.option(
    "--token-symbol", help="Vault share token symbol.", default=TOKEN_SYMBOL, show_default=True
)
@click.option(
    "--deposit-fee",
    help="Deposit fee in basis points.",
    type=MinInt(0, PERCENT_DIVISOR),
    default=DEPOSIT_FEE,
    show_default=True,
)
@click.option(
    "--tvl-cap",
    help="Maximum total value locked; 'max' for no cap.",
    type=Uint256(),
    default="max",
    show_default=True,
)
@params_file_option
@registry_filepath_option(default=REGISTRY_FILEPATH, help="Registry output filepath")
@autosign_option
@verify_option
@click.pass_context
def cli(
    ctx,
    account,
    network,
    want,
    token_name,
    token_symbol,
    deposit_fee,
    tvl_cap,
    params_file,
    registry_filepath,
    auto,
    verify,
):
    """
    Deploys a Reaper vault.

    ape run deploy_vault --network fantom:opera --account deployer
    """

    def task():
        check_plugins(verify=verify)
        if params_file:
            validate_chain_id(get_config_chain_id(params_file))
            parameters = VaultParameters.from_yaml(params_file)
        else:
            parameters = VaultParameters.create(
                want=want,
                name=token_name,
                symbol=token_symbol,
                deposit_fee=deposit_fee,
                tvl_cap=tvl_cap,
            )
        print_network_info(account, registry=registry_filepath, verify=verify)
        deploy(
            account=account,
            parameters=parameters,
            registry_filepath=registry_filepath,
            autosign=auto,
            verify=verify,
        )

    ctx.exit(execute(task))


if __name__ == "__main__":
    cli()
