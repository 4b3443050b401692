"""
Utility functions for the network tree engine.

Export, formatting and logging helpers.
"""

from network_tree.utils.export import export_json, export_tree
from network_tree.utils.formatters import (
    format_amount,
    format_compact,
    format_network_stats,
    full_name,
)
from network_tree.utils.logging import setup_logging

__all__ = [
    "export_tree",
    "export_json",
    "format_amount",
    "format_compact",
    "format_network_stats",
    "full_name",
    "setup_logging",
]
