"""
Core tree engine.

Tree model, aggregation, expansion state, layout and search.
"""

from network_tree.core.aggregator import (
    aggregate,
    aggregate_all,
    level_breakdown,
    network_stats,
)
from network_tree.core.expansion import ExpansionState
from network_tree.core.layout import layout, subtree_width, visible_children
from network_tree.core.locator import MatchMode, find, locate, path_to, reveal
from network_tree.core.models import (
    Aggregate,
    LayoutEdge,
    LayoutResult,
    LevelBreakdown,
    NetworkStats,
    Node,
    NodeMetrics,
    NodePosition,
    SearchResult,
)
from network_tree.core.tree import (
    TreeSnapshot,
    build_tree,
    count_members,
    find_by_id,
    find_by_referral_code,
    flatten,
    iter_preorder,
    iter_with_depth,
    load_snapshot,
    nodes_at_level,
    normalize_amount,
)

__all__ = [
    # Models
    "Node",
    "NodeMetrics",
    "Aggregate",
    "LevelBreakdown",
    "NetworkStats",
    "NodePosition",
    "LayoutEdge",
    "LayoutResult",
    "SearchResult",
    # Tree model
    "TreeSnapshot",
    "build_tree",
    "load_snapshot",
    "normalize_amount",
    "iter_preorder",
    "iter_with_depth",
    "flatten",
    "count_members",
    "find_by_id",
    "find_by_referral_code",
    "nodes_at_level",
    # Aggregation
    "aggregate",
    "aggregate_all",
    "level_breakdown",
    "network_stats",
    # Expansion
    "ExpansionState",
    # Layout
    "layout",
    "subtree_width",
    "visible_children",
    # Search
    "MatchMode",
    "find",
    "locate",
    "path_to",
    "reveal",
]
