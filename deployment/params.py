import typing
from pathlib import Path
from typing import Any, Dict, Optional

from deployment.constants import STAKING_CONTRACT, STAKING_INITIALIZER, TOKEN_CONTRACT
from deployment.utils import _load_yaml, is_local_network

DEPLOYMENT_KEY = "deployment"
CONTRACTS_KEY = "contracts"


def _section(config: Dict, key: str, required: bool) -> Dict[str, Any]:
    section = config.get(key)
    if section is None:
        if required:
            raise DeploymentConfig.Invalid(f"{key} is not set in params file.")
        return dict()
    if not isinstance(section, dict):
        raise DeploymentConfig.Invalid(f"Malformed '{key}' section in params file.")
    return section


def _contract_name(contracts: Dict[str, Any], key: str, default: str) -> str:
    name = contracts.get(key, default)
    if not isinstance(name, str) or not name.strip():
        raise DeploymentConfig.Invalid(f"'{CONTRACTS_KEY}.{key}' must be a non-empty name.")
    return name.strip()


class DeploymentConfig:
    """
    Parameters of a single Rfa / Staking deployment, as read from a params YAML file.
    """

    class Invalid(Exception):
        """Raised when the deployment parameters are invalid"""

    def __init__(
        self,
        path: Optional[Path] = None,
        chain_id: Optional[int] = None,
        account: Optional[str] = None,
        verify: bool = False,
        confirm: bool = False,
        token: str = TOKEN_CONTRACT,
        staking: str = STAKING_CONTRACT,
        initializer: str = STAKING_INITIALIZER,
    ):
        self.path = path
        self.chain_id = chain_id
        self.account = account
        self.verify = verify
        self.confirm = confirm
        self.token = token
        self.staking = staking
        self.initializer = initializer

    @classmethod
    def from_config(cls, config: typing.Dict, path: Optional[Path] = None) -> "DeploymentConfig":
        if not isinstance(config, dict):
            raise cls.Invalid("Malformed params file.")

        deployment = _section(config, DEPLOYMENT_KEY, required=True)
        contracts = _section(config, CONTRACTS_KEY, required=False)

        chain_id = deployment.get("chain_id")
        if chain_id is not None:
            try:
                chain_id = int(chain_id)
            except (TypeError, ValueError):
                raise cls.Invalid(f"chain_id '{chain_id}' is not an integer.")

        return cls(
            path=path,
            chain_id=chain_id,
            account=deployment.get("account"),
            verify=bool(deployment.get("verify", False)),
            confirm=bool(deployment.get("confirm", False)),
            token=_contract_name(contracts, "token", TOKEN_CONTRACT),
            staking=_contract_name(contracts, "staking", STAKING_CONTRACT),
            initializer=_contract_name(contracts, "initializer", STAKING_INITIALIZER),
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentConfig":
        config = _load_yaml(filepath)
        return cls.from_config(config, path=filepath)

    def validate_network(self, network_name: str, chain_id: int) -> None:
        """
        Checks that the params file targets the connected network.
        Local networks are never rejected.
        """
        if self.chain_id is None or is_local_network(network_name):
            return
        if self.chain_id != chain_id:
            raise self.Invalid(
                f"chain_id in params file ({self.chain_id}) does not match "
                f"chain_id of current network ({chain_id})."
            )
