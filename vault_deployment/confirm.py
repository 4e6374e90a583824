from collections import OrderedDict

from ape.utils import ZERO_ADDRESS


class DeploymentAborted(Exception):
    """Raised when the operator answers 'n' to a confirmation prompt."""


def _ask(question: str) -> None:
    """Asks a Y/N question; anything other than 'n' proceeds."""
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        raise DeploymentAborted(f"Operator declined: {question}")


def confirm_deployment(contract_name: str) -> None:
    _ask(f"Deploy {contract_name}")


def confirm_transaction() -> None:
    _ask("Continue")


def confirm_arguments(arguments: OrderedDict, contract_name: str) -> None:
    """Shows the constructor arguments for a contract and asks the user to confirm them."""
    if not arguments:
        print(f"\n(i) No constructor parameters for {contract_name}")
        confirm_deployment(contract_name)
        return

    print(f"\nConstructor parameters for {contract_name}")
    for name, value in arguments.items():
        print(f"\t{name}={value}")
    confirm_deployment(contract_name)

    if any(value == ZERO_ADDRESS for value in arguments.values()):
        _ask("Zero Address detected for deployment parameter; Continue?")
