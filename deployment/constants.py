from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"

#
# Networks
#

LOCAL_BLOCKCHAIN_ENVIRONMENTS = ["local"]

#
# Contracts
#

TOKEN_CONTRACT = "Rfa"
STAKING_CONTRACT = "Staking"
STAKING_INITIALIZER = "initialize"

PROXY_CONTRACT = "TransparentUpgradeableProxy"

OZ_DEPENDENCY_NAME = "openzeppelin"
OZ_DEPENDENCY_VERSION = "5.0.0"


def oz_dependency():
    # resolved lazily; touching project.dependencies may fetch the package
    from ape import project

    return project.dependencies[OZ_DEPENDENCY_NAME][OZ_DEPENDENCY_VERSION]
