from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from deployment.errors import NoSignerAvailable
from deployment.orchestrator import (
    ContractFactory,
    ContractFactoryProvider,
    DeployedContract,
    ProxyDeployer,
    SignerProvider,
)

DEPLOYER_ADDRESS = "0xAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
TOKEN_ADDRESS = "0x1111111111111111111111111111111111111111"
LOGIC_ADDRESS = "0x3333333333333333333333333333333333333333"
PROXY_ADDRESS = "0x2222222222222222222222222222222222222222"


class InsufficientFunds(Exception):
    pass


class FakeDeployedContract(DeployedContract):
    def __init__(self, address, calls, name, confirmation_error=None):
        self._address = address
        self._calls = calls
        self._name = name
        self._confirmation_error = confirmation_error

    @property
    def address(self):
        return self._address

    def wait_until_deployed(self):
        self._calls.append(("wait", self._name))
        if self._confirmation_error:
            raise self._confirmation_error


class FakeFactory(ContractFactory):
    def __init__(self, name, address, calls, error=None):
        self._name = name
        self.address = address
        self.calls = calls
        self.error = error

    @property
    def contract_name(self):
        return self._name

    def deploy(self, signer, *args):
        self.calls.append(("deploy", self._name, signer, args))
        if self.error:
            raise self.error
        return FakeDeployedContract(self.address, self.calls, self._name)


class FakeFactories(ContractFactoryProvider):
    def __init__(self, calls, addresses, errors=None):
        self.calls = calls
        self.addresses = addresses
        self.errors = errors or dict()

    def get_factory(self, contract_name):
        self.calls.append(("factory", contract_name))
        return FakeFactory(
            contract_name,
            self.addresses.get(contract_name),
            self.calls,
            error=self.errors.get(contract_name),
        )


class FakeSigners(SignerProvider):
    def __init__(self, calls, signer=None):
        self.calls = calls
        self.signer = signer

    def get_signer(self):
        self.calls.append(("signer",))
        if self.signer is None:
            raise NoSignerAvailable("no accounts configured")
        return self.signer


class FakeProxyDeployer(ProxyDeployer):
    def __init__(self, calls, address, error=None, confirmation_error=None):
        self.calls = calls
        self.address = address
        self.error = error
        self.confirmation_error = confirmation_error

    def deploy_proxy(self, signer, factory, args, initializer):
        self.calls.append(("proxy", factory.contract_name, signer, list(args), initializer))
        if self.error:
            raise self.error
        return FakeDeployedContract(
            self.address, self.calls, "proxy", confirmation_error=self.confirmation_error
        )


@pytest.fixture
def calls():
    return list()


@pytest.fixture
def deployer_account():
    return SimpleNamespace(address=DEPLOYER_ADDRESS)


@pytest.fixture
def signers(calls, deployer_account):
    return FakeSigners(calls, deployer_account)


@pytest.fixture
def factories(calls):
    return FakeFactories(calls, {"Rfa": TOKEN_ADDRESS, "Staking": LOGIC_ADDRESS})


@pytest.fixture
def proxies(calls):
    return FakeProxyDeployer(calls, PROXY_ADDRESS)


@pytest.fixture
def signer():
    account = MagicMock()
    account.address = DEPLOYER_ADDRESS
    return account


@pytest.fixture
def initialize_abi():
    return SimpleNamespace(
        name="initialize", inputs=[SimpleNamespace(name="_token", type="address")]
    )
