from ape import networks

from vault_deployment.constants import LOCAL_NETWORKS


def is_local_network() -> bool:
    """Returns True when connected to an ape local (test) network."""
    return networks.provider.network.name in LOCAL_NETWORKS
