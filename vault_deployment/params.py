import typing
from collections import OrderedDict
from pathlib import Path
from typing import Any, List

from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from ethpm_types import MethodABI
from web3.auto import w3

from vault_deployment.confirm import confirm_arguments, confirm_transaction
from vault_deployment.constants import MAX_UINT256, PERCENT_DIVISOR
from vault_deployment.registry import registry_from_ape_deployments
from vault_deployment.utils import _load_yaml, verify_contracts

VAULT_PARAMETERS_KEY = "vault"
DEPLOYMENT_KEY = "deployment"


class VaultParameters(typing.NamedTuple):
    """Constructor arguments of a vault, in constructor order."""

    want: ChecksumAddress
    name: str
    symbol: str
    deposit_fee: int
    tvl_cap: int

    class Invalid(ValueError):
        """Raised when vault parameters are out of range or malformed"""

    @classmethod
    def create(
        cls, want: str, name: str, symbol: str, deposit_fee: int, tvl_cap: int
    ) -> "VaultParameters":
        """Normalizes and range-checks raw values."""
        try:
            want = to_checksum_address(want)
        except ValueError:
            raise cls.Invalid(f"Invalid want address '{want}'.")
        if not name or not symbol:
            raise cls.Invalid("Vault token name and symbol must not be empty.")
        deposit_fee, tvl_cap = int(deposit_fee), int(tvl_cap)
        if not 0 <= deposit_fee <= PERCENT_DIVISOR:
            raise cls.Invalid(
                f"Deposit fee {deposit_fee} is outside of 0..{PERCENT_DIVISOR} basis points."
            )
        if not 0 <= tvl_cap <= MAX_UINT256:
            raise cls.Invalid(f"TVL cap {tvl_cap} does not fit in a uint256.")
        return cls(want=want, name=name, symbol=symbol, deposit_fee=deposit_fee, tvl_cap=tvl_cap)

    @classmethod
    def from_config(cls, config: typing.Optional[typing.Dict]) -> "VaultParameters":
        vault_config = (config or dict()).get(VAULT_PARAMETERS_KEY)
        if not vault_config:
            raise cls.Invalid(f"Params file missing '{VAULT_PARAMETERS_KEY}' field.")
        if not isinstance(vault_config, dict):
            raise cls.Invalid(f"Malformed '{VAULT_PARAMETERS_KEY}' field in params file.")
        missing = [field for field in cls._fields if field not in vault_config]
        if missing:
            raise cls.Invalid(f"Params file missing vault field(s): {', '.join(missing)}")

        tvl_cap = vault_config["tvl_cap"]
        if isinstance(tvl_cap, str) and tvl_cap.lower() == "max":
            tvl_cap = MAX_UINT256
        return cls.create(
            want=vault_config["want"],
            name=vault_config["name"],
            symbol=vault_config["symbol"],
            deposit_fee=vault_config["deposit_fee"],
            tvl_cap=tvl_cap,
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "VaultParameters":
        print(f"Processing vault parameters from {filepath}...")
        return cls.from_config(_load_yaml(filepath))

    def values(self) -> List[Any]:
        return list(self)


def get_config_chain_id(filepath: Path) -> typing.Optional[int]:
    """Returns the chain_id a params file is pinned to, if any."""
    config = _load_yaml(filepath) or dict()
    deployment = config.get(DEPLOYMENT_KEY) or dict()
    if not isinstance(deployment, dict):
        raise VaultParameters.Invalid(f"Malformed '{DEPLOYMENT_KEY}' field in params file.")
    chain_id = deployment.get("chain_id")
    return int(chain_id) if chain_id is not None else None


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = {}
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


class ConstructorParameters:
    class Invalid(Exception):
        """Raised when the constructor parameters are invalid"""


def validate_constructor_parameters(
    container: ContractContainer, args: typing.Sequence[Any]
) -> OrderedDict:
    """
    Validates constructor arguments against the constructor ABI and
    returns them keyed by their ABI names.
    """
    contract_name = container.contract_type.name
    abi_inputs = container.constructor.abi.inputs
    if len(args) != len(abi_inputs):
        raise ConstructorParameters.Invalid(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    named_args = OrderedDict()
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, value):
            raise ConstructorParameters.Invalid(
                f"{contract_name} constructor param '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )
        named_args[abi_input.name or f"arg{position}"] = value
    return named_args


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        # only keyfile accounts sign interactively
        set_autosign = getattr(self._account, "set_autosign", None)
        if set_autosign is not None:
            set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method.abis[0].name}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            confirm_transaction()

        return method(*args, sender=self._account)


class Deployer(Transactor):
    """
    Represents an ape account plus validated/annotated contract deployment,
    with optional registry publication and explorer verification.
    """

    def __init__(
        self,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        verify: bool = False,
        registry_filepath: typing.Optional[Path] = None,
    ):
        super().__init__(account=account, autosign=autosign)
        self.verify = verify
        self.registry_filepath = registry_filepath

    def deploy(self, container: ContractContainer, *args) -> ContractInstance:
        """Deploys a contract and blocks until the creation transaction is confirmed."""
        contract_name = container.contract_type.name
        named_args = validate_constructor_parameters(container, args)
        if not self._autosign:
            confirm_arguments(named_args, contract_name)

        return self._account.deploy(container, *args)

    def finalize(self, deployments: List[ContractInstance]) -> None:
        """
        Publishes the deployments to the registry and optionally to block explorers.
        """
        if self.registry_filepath is not None:
            registry_from_ape_deployments(
                deployments=deployments,
                output_filepath=self.registry_filepath,
            )
        if self.verify:
            verify_contracts(contracts=deployments)
