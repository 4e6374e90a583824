from pathlib import Path

import vault_deployment

#
# Filesystem
#

PACKAGE_DIR = Path(vault_deployment.__file__).parent
PROJECT_ROOT = PACKAGE_DIR.parent
DEPLOYMENTS_DIR = PROJECT_ROOT / "deployments"
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENTS_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENTS_DIR / "artifacts"

#
# Networks
#

LOCAL_NETWORKS = ["local"]

#
# Contracts
#

VAULT_CONTRACT_NAME = "ReaperVaultv1_4"

MAX_UINT256 = 2**256 - 1

# deposit fee is denominated in basis points
PERCENT_DIVISOR = 10_000

#
# Process exit status
#

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
