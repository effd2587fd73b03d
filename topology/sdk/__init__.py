"""SDK for editing topologies and talking to the topology server."""

from topology.sdk.client import TopologyClient
from topology.sdk.session import EditSession, SecondaryParentChooser

__all__ = [
    "EditSession",
    "SecondaryParentChooser",
    "TopologyClient",
]
