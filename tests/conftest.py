from types import SimpleNamespace
from unittest.mock import MagicMock

import click
import pytest
from eth_utils import to_checksum_address

from vault_deployment import networks as vault_networks
from vault_deployment import utils
from vault_deployment.constants import VAULT_CONTRACT_NAME

# Common constants
CHAIN_ID = 250
DEPLOYER_ADDRESS = to_checksum_address("0x" + "d3" * 20)
DEPLOYED_VAULT_ADDRESS = to_checksum_address("0x" + "5a" * 20)
TX_HASH = "0x" + "ee" * 32
BLOCK_NUMBER = 61_234_567

VAULT_CONSTRUCTOR_INPUTS = [
    ("_token", "address"),
    ("_name", "string"),
    ("_symbol", "string"),
    ("_depositFee", "uint256"),
    ("_tvlCap", "uint256"),
]

VAULT_ABI = [
    {"type": "function", "name": "initialize", "inputs": [], "outputs": []},
    {"type": "constructor", "inputs": []},
    {"type": "function", "name": "deposit", "inputs": [], "outputs": []},
]


# Utility functions
def abi_inputs(inputs):
    return [SimpleNamespace(name=name, type=type_) for name, type_ in inputs]


def fake_receipt(chain_id=CHAIN_ID, sender=DEPLOYER_ADDRESS):
    return SimpleNamespace(
        chain_id=chain_id,
        txn_hash=TX_HASH,
        block_number=BLOCK_NUMBER,
        transaction=SimpleNamespace(sender=sender),
    )


def connect(monkeypatch, network_name="opera", chain_id=CHAIN_ID, provider_name="geth"):
    """Stands in for a connected ape provider."""
    provider = SimpleNamespace(
        name=provider_name,
        chain_id=chain_id,
        gas_price=1_000_000_000,
        network=SimpleNamespace(
            name=network_name,
            chain_id=chain_id,
            ecosystem=SimpleNamespace(name="fantom"),
            explorer=None,
        ),
    )
    manager = SimpleNamespace(provider=provider)
    monkeypatch.setattr(utils, "networks", manager)
    monkeypatch.setattr(vault_networks, "networks", manager)
    return provider


def run_command(command, **params):
    """Runs a click command body in its own context and returns the exit status it sets."""
    with click.Context(command), pytest.raises(click.exceptions.Exit) as exit_info:
        command.callback(**params)
    return exit_info.value.exit_code


def fake_vault_instance(address=DEPLOYED_VAULT_ADDRESS, initialized=False):
    """A deployed vault as ape would return it, with an 'initialize(address)' method."""
    vault = MagicMock(name="vault")
    vault.address = address
    vault.contract_type.name = VAULT_CONTRACT_NAME
    vault.contract_type.abi = [
        SimpleNamespace(model_dump=lambda by_alias, entry=entry: dict(entry)) for entry in VAULT_ABI
    ]
    vault.receipt = fake_receipt()
    vault.initialized.return_value = initialized

    vault.initialize.contract = vault
    vault.initialize.abis = [
        SimpleNamespace(name="initialize", inputs=abi_inputs([("_strategy", "address")]))
    ]
    vault.initialize.return_value = fake_receipt()
    return vault


# Fixtures
@pytest.fixture
def vault_instance():
    return fake_vault_instance()


@pytest.fixture
def vault_container(vault_instance):
    container = MagicMock(name="ReaperVaultv1_4")
    container.contract_type.name = VAULT_CONTRACT_NAME
    container.constructor.abi.inputs = abi_inputs(VAULT_CONSTRUCTOR_INPUTS)
    container.at.return_value = vault_instance
    return container


@pytest.fixture
def deployer_account(vault_instance):
    account = MagicMock(name="deployer")
    account.address = DEPLOYER_ADDRESS
    account.deploy.return_value = vault_instance
    return account


@pytest.fixture
def answer(monkeypatch):
    """Answers every confirmation prompt with the given reply."""
    prompts = []

    def _answer(reply):
        def _input(prompt=""):
            prompts.append(prompt)
            return reply

        monkeypatch.setattr("builtins.input", _input)
        return prompts

    return _answer
