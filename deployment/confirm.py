from collections import OrderedDict

import click
from ape.utils import ZERO_ADDRESS

from deployment.errors import DeploymentAborted


def _ask(question: str) -> None:
    answer = click.prompt(question, default="Y", show_default=False)
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        raise DeploymentAborted(question)


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    _ask(f"Deploy {contract_name} Y/N?")


def _confirm_zero_address() -> None:
    _ask("Zero Address detected for deployment parameter; Continue? Y/N?")


def _confirm_resolution(resolved_params: OrderedDict, contract_name: str) -> None:
    """Asks the user to confirm the resolved constructor parameters for a single contract."""
    if len(resolved_params) == 0:
        print(f"\n(i) No constructor parameters for {contract_name}")
        _confirm_deployment(contract_name)
        return

    print(f"\nConstructor parameters for {contract_name}")
    contains_zero_address = False
    for name, resolved_value in resolved_params.items():
        if isinstance(resolved_value, bytes):
            # encoded call data
            print(f"\t{name}=0x{bytes(resolved_value).hex()}")
        else:
            print(f"\t{name}={resolved_value}")
        if not contains_zero_address:
            contains_zero_address = resolved_value == ZERO_ADDRESS
    _confirm_deployment(contract_name)
    if contains_zero_address:
        _confirm_zero_address()
