"""Client-side helpers for a storage cluster: alerts, volumes, nodes, pods, roles and output formatting."""

__version__ = "0.1.0"