"""API server storing cache groups and topologies."""
