"""
Services around the core engine.

Snapshot loading from a hierarchy source and the interactive view model.
"""

from network_tree.services.loader import HierarchySource, NetworkLoader
from network_tree.services.view import NetworkView

__all__ = [
    "HierarchySource",
    "NetworkLoader",
    "NetworkView",
]
