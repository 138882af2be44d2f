import pytest

from deployment.constants import CONSTRUCTOR_PARAMS_DIR
from deployment.params import DeploymentConfig


def test_defaults():
    config = DeploymentConfig.from_config({"deployment": {}})
    assert config.token == "Rfa"
    assert config.staking == "Staking"
    assert config.initializer == "initialize"
    assert config.chain_id is None
    assert config.account is None
    assert not config.verify
    assert not config.confirm


def test_from_yaml(tmp_path):
    filepath = tmp_path / "staking.yml"
    filepath.write_text(
        "deployment:\n"
        "  chain_id: '11155111'\n"
        "  account: sepolia-deployer\n"
        "  verify: true\n"
        "contracts:\n"
        "  token: RfaV2\n"
        "  staking: Staking\n"
        "  initializer: initialize\n"
    )
    config = DeploymentConfig.from_yaml(filepath)
    assert config.path == filepath
    assert config.chain_id == 11155111
    assert config.account == "sepolia-deployer"
    assert config.verify
    assert not config.confirm
    assert config.token == "RfaV2"


def test_shipped_params_file():
    config = DeploymentConfig.from_yaml(CONSTRUCTOR_PARAMS_DIR / "staking.yml")
    assert (config.token, config.staking, config.initializer) == ("Rfa", "Staking", "initialize")


@pytest.mark.parametrize(
    "raw_config",
    [
        None,
        {},
        {"deployment": ["chain_id"]},
        {"deployment": {"chain_id": "sepolia"}},
        {"deployment": {}, "contracts": ["Rfa", "Staking"]},
        {"deployment": {}, "contracts": {"token": ""}},
        {"deployment": {}, "contracts": {"staking": 42}},
    ],
)
def test_invalid_config(raw_config):
    with pytest.raises(DeploymentConfig.Invalid):
        DeploymentConfig.from_config(raw_config)


def test_validate_network():
    config = DeploymentConfig(chain_id=11155111)
    config.validate_network(network_name="sepolia", chain_id=11155111)

    # local networks are not checked
    config.validate_network(network_name="local", chain_id=1337)

    with pytest.raises(DeploymentConfig.Invalid, match="does not match"):
        config.validate_network(network_name="mainnet", chain_id=1)

    # no chain id configured; anything goes
    DeploymentConfig().validate_network(network_name="mainnet", chain_id=1)
