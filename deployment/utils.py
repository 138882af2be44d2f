from pathlib import Path
from typing import Optional

import yaml
from ape import networks, project
from ape.contracts import ContractContainer

from deployment.constants import LOCAL_BLOCKCHAIN_ENVIRONMENTS


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def is_local_network(network_name: Optional[str] = None) -> bool:
    """Returns True if the (active) network is a local test network."""
    if network_name is None:
        network_name = networks.provider.network.name
    return network_name in LOCAL_BLOCKCHAIN_ENVIRONMENTS


def check_etherscan_plugin() -> None:
    """Checks that the ape-etherscan plugin is installed for source verification."""
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to verify contracts.")


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
