#!/usr/bin/python3

from ape import networks

from deployment.constants import CONSTRUCTOR_PARAMS_DIR
from deployment.orchestrator import DeploymentResult, deploy_token_and_staking, exit_with
from deployment.params import DeploymentConfig
from deployment.providers import ApeContractFactoryProvider, ApeProxyDeployer, ApeSignerProvider
from deployment.utils import check_etherscan_plugin

CONSTRUCTOR_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "staking.yml"


def _print_deployment_info(config: DeploymentConfig) -> None:
    print(
        f"Config: {config.path}",
        f"Verify: {config.verify}",
        f"Ecosystem: {networks.provider.network.ecosystem.name}",
        f"Network: {networks.provider.network.name}",
        f"Chain ID: {networks.provider.network.chain_id}",
        sep="\n",
    )


def main():
    """
    Deploys the Rfa token, then Staking behind a TransparentUpgradeableProxy
    initialized with the Rfa address.

    ape run deploy --network ethereum:sepolia:infura
    """
    network = networks.provider.network
    try:
        config = DeploymentConfig.from_yaml(filepath=CONSTRUCTOR_PARAMS_FILEPATH)
        config.validate_network(network_name=network.name, chain_id=network.chain_id)
        if config.verify:
            check_etherscan_plugin()
    except (DeploymentConfig.Invalid, ImportError, OSError) as error:
        exit_with(DeploymentResult(error=error))
    _print_deployment_info(config)

    result = deploy_token_and_staking(
        signers=ApeSignerProvider(alias=config.account, network_name=network.name),
        factories=ApeContractFactoryProvider(verify=config.verify, confirm=config.confirm),
        proxies=ApeProxyDeployer(verify=config.verify, confirm=config.confirm),
        token=config.token,
        staking=config.staking,
        initializer=config.initializer,
    )
    exit_with(result)
