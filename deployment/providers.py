import typing
from collections import OrderedDict
from typing import Any, List, Optional

from ape import accounts
from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from ape.exceptions import ApeException, ContractLogicError
from ethpm_types import MethodABI
from web3.auto import w3

from deployment.confirm import _confirm_resolution
from deployment.constants import PROXY_CONTRACT, oz_dependency
from deployment.errors import (
    DeploymentFailed,
    InitializationFailed,
    NoSignerAvailable,
)
from deployment.orchestrator import (
    ContractFactory,
    ContractFactoryProvider,
    DeployedContract,
    ProxyDeployer,
    SignerProvider,
)
from deployment.utils import get_contract_container, is_local_network


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


def _named_constructor_args(container: ContractContainer, args: typing.Sequence[Any]) -> OrderedDict:
    abi_inputs = container.constructor.abi.inputs
    names = [abi_input.name or f"arg{position}" for position, abi_input in enumerate(abi_inputs)]
    return OrderedDict(zip(names, args))


def _deploy_contract(
    signer: AccountAPI,
    container: ContractContainer,
    args: typing.Sequence[Any],
    verify: bool = False,
    confirm: bool = False,
) -> ContractInstance:
    contract_name = container.contract_type.name
    if confirm:
        _confirm_resolution(_named_constructor_args(container, args), contract_name)
    try:
        return signer.deploy(container, *args, publish=verify)
    except (ApeException, ValueError) as exc:
        raise DeploymentFailed(f"Deployment of {contract_name} failed: {exc}") from exc


class ApeDeployedContract(DeployedContract):
    """
    Wraps an ape contract instance. `creation` is the instance whose deployment
    receipt confirms this contract; for a proxied contract that is the proxy.
    """

    def __init__(self, instance: ContractInstance, creation: Optional[ContractInstance] = None):
        self.instance = instance
        self._creation = creation if creation is not None else instance

    @property
    def address(self) -> str:
        return self.instance.address

    def wait_until_deployed(self) -> None:
        try:
            self._creation.receipt.await_confirmations()
        except ApeException as exc:
            raise DeploymentFailed(f"Deployment at {self.address} was not confirmed: {exc}") from exc

        if not self.instance.code:
            raise DeploymentFailed(f"No contract code found at {self.address}.")


class ApeContractFactory(ContractFactory):
    def __init__(self, container: ContractContainer, verify: bool = False, confirm: bool = False):
        self.container = container
        self.verify = verify
        self.confirm = confirm

    @property
    def contract_name(self) -> str:
        return self.container.contract_type.name

    def deploy_instance(self, signer: AccountAPI, *args) -> ContractInstance:
        return _deploy_contract(
            signer, self.container, args, verify=self.verify, confirm=self.confirm
        )

    def deploy(self, signer: AccountAPI, *args) -> ApeDeployedContract:
        return ApeDeployedContract(self.deploy_instance(signer, *args))


class ApeContractFactoryProvider(ContractFactoryProvider):
    def __init__(self, verify: bool = False, confirm: bool = False):
        self.verify = verify
        self.confirm = confirm

    def get_factory(self, contract_name: str) -> ApeContractFactory:
        try:
            container = get_contract_container(contract_name)
        except ValueError as exc:
            raise DeploymentFailed(str(exc)) from exc
        return ApeContractFactory(container, verify=self.verify, confirm=self.confirm)


class ApeSignerProvider(SignerProvider):
    """
    Local networks use the first test account; live networks use the
    configured account alias or ask the user to select one.
    """

    def __init__(self, alias: Optional[str] = None, network_name: Optional[str] = None):
        self.alias = alias
        self.network_name = network_name

    def get_signer(self) -> AccountAPI:
        if is_local_network(self.network_name):
            test_accounts = accounts.test_accounts
            if len(test_accounts) == 0:
                raise NoSignerAvailable("No test accounts available on the local network.")
            return test_accounts[0]

        if self.alias:
            try:
                return accounts.load(self.alias)
            except (IndexError, KeyError, ApeException) as exc:
                raise NoSignerAvailable(f"No account with alias '{self.alias}'.") from exc

        if len(accounts) == 0:
            raise NoSignerAvailable(
                "No accounts found; import one with 'ape accounts import <alias>'."
            )
        return select_account()


class ApeProxyDeployer(ProxyDeployer):
    """
    Deploys a logic contract behind an OpenZeppelin TransparentUpgradeableProxy.
    The proxy creates its own ProxyAdmin owned by the signer.
    """

    def __init__(
        self,
        verify: bool = False,
        confirm: bool = False,
        proxy_container: Optional[ContractContainer] = None,
    ):
        self.verify = verify
        self.confirm = confirm
        self._proxy_container = proxy_container

    @property
    def proxy_container(self) -> ContractContainer:
        if self._proxy_container is None:
            self._proxy_container = getattr(oz_dependency(), PROXY_CONTRACT)
        return self._proxy_container

    def _encode_initializer(
        self, logic: ContractInstance, initializer: str, args: typing.Sequence[Any]
    ) -> bytes:
        try:
            return getattr(logic, initializer).encode_input(*args)
        except (ApeException, ValueError, TypeError) as exc:
            raise InitializationFailed(f"Cannot encode {initializer}{tuple(args)}: {exc}") from exc

    def deploy_proxy(
        self,
        signer: AccountAPI,
        factory: ApeContractFactory,
        args: List[Any],
        initializer: str,
    ) -> ApeDeployedContract:
        contract_name = factory.contract_name
        method_abis = [
            abi for abi in factory.container.contract_type.methods if abi.name == initializer
        ]
        try:
            _validate_method_args(method_abis=method_abis, args=args)
        except ValueError as exc:
            raise InitializationFailed(f"{contract_name}.{initializer}: {exc}") from exc

        logic = factory.deploy_instance(signer)
        data = self._encode_initializer(logic, initializer, args)

        proxy_container = self.proxy_container
        print(
            f"\nDeploying {proxy_container.contract_type.name} "
            f"contract to proxy {contract_name}."
        )
        try:
            proxy = _deploy_contract(
                signer,
                proxy_container,
                [logic.address, signer.address, data],
                verify=self.verify,
                confirm=self.confirm,
            )
        except DeploymentFailed as exc:
            if isinstance(exc.__cause__, ContractLogicError):
                raise InitializationFailed(
                    f"{contract_name}.{initializer} reverted during proxy construction: "
                    f"{exc.__cause__}"
                ) from exc.__cause__
            raise

        print(
            f"\nWrapping {contract_name} into {proxy.contract_type.name} "
            f"at {proxy.address}."
        )
        wrapped = factory.container.at(proxy.address)
        return ApeDeployedContract(wrapped, creation=proxy)
