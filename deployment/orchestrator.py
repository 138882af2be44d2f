import sys
import traceback
from abc import ABC, abstractmethod
from typing import Any, Callable, List, NamedTuple, Optional

import click

from deployment.constants import STAKING_CONTRACT, STAKING_INITIALIZER, TOKEN_CONTRACT

ANNOUNCEMENT = "Deploying contract with account:"


class DeployedContract(ABC):
    """Handle of a contract whose creation transaction has been submitted."""

    @property
    @abstractmethod
    def address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def wait_until_deployed(self) -> None:
        """Blocks until the network confirms the contract creation."""
        raise NotImplementedError


class ContractFactory(ABC):
    @property
    @abstractmethod
    def contract_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def deploy(self, signer: Any, *args) -> DeployedContract:
        raise NotImplementedError


class SignerProvider(ABC):
    @abstractmethod
    def get_signer(self) -> Any:
        raise NotImplementedError


class ContractFactoryProvider(ABC):
    @abstractmethod
    def get_factory(self, contract_name: str) -> ContractFactory:
        raise NotImplementedError


class ProxyDeployer(ABC):
    @abstractmethod
    def deploy_proxy(
        self, signer: Any, factory: ContractFactory, args: List[Any], initializer: str
    ) -> DeployedContract:
        """
        Deploys the logic contract behind an upgradeable proxy, calling
        `initializer(*args)` once as part of the proxy construction.
        The returned handle points at the proxy.
        """
        raise NotImplementedError


class DeploymentResult(NamedTuple):
    token_address: Optional[str] = None
    proxy_address: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def deploy_token_and_staking(
    signers: SignerProvider,
    factories: ContractFactoryProvider,
    proxies: ProxyDeployer,
    token: str = TOKEN_CONTRACT,
    staking: str = STAKING_CONTRACT,
    initializer: str = STAKING_INITIALIZER,
    echo: Callable[[str], None] = print,
) -> DeploymentResult:
    """
    Deploys the token contract, then the staking contract behind a proxy
    initialized with the token address. Steps run strictly in sequence and
    the first failure stops the sequence; the failure is returned, not raised.
    """
    token_address = None
    try:
        deployer = signers.get_signer()
        echo(ANNOUNCEMENT)

        token_factory = factories.get_factory(token)
        token_contract = token_factory.deploy(deployer)
        token_contract.wait_until_deployed()
        token_address = token_contract.address
        echo(f"Token address: {token_address}")

        staking_factory = factories.get_factory(staking)
        staking_proxy = proxies.deploy_proxy(
            deployer, staking_factory, [token_address], initializer=initializer
        )
        staking_proxy.wait_until_deployed()
        proxy_address = staking_proxy.address
        echo(f"\nproxy address: {proxy_address}\n")
    except Exception as error:
        return DeploymentResult(token_address=token_address, error=error)

    return DeploymentResult(token_address=token_address, proxy_address=proxy_address)


def format_error(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


def conclude(result: DeploymentResult) -> int:
    """Reports a failed deployment on stderr and returns the process exit code."""
    if not result.succeeded:
        click.echo(format_error(result.error), err=True, nl=False)
    return result.exit_code


def exit_with(result: DeploymentResult) -> None:
    sys.exit(conclude(result))
