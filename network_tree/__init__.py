"""
Referral network tree engine.

Standalone package turning a referral hierarchy snapshot into subtree
statistics, an expand/collapse view, a 2-D layout and search results.

Example:
    >>> from network_tree import load_snapshot, ExpansionState, layout, aggregate
    >>>
    >>> snapshot = load_snapshot({
    ...     "id": "R", "displayName": "Root",
    ...     "children": [{"id": "A"}, {"id": "B", "children": [{"id": "B1"}, {"id": "B2"}]}],
    ... })
    >>> state = ExpansionState.for_root(snapshot.root)
    >>> len(layout(snapshot.root, state).positions)
    3
    >>> aggregate(snapshot.root).subtree_size
    5
"""

from network_tree.config import TreeSettings, get_settings
from network_tree.core import (
    Aggregate,
    ExpansionState,
    LayoutEdge,
    LayoutResult,
    LevelBreakdown,
    MatchMode,
    NetworkStats,
    Node,
    NodeMetrics,
    NodePosition,
    SearchResult,
    TreeSnapshot,
    aggregate,
    aggregate_all,
    build_tree,
    count_members,
    find,
    find_by_id,
    find_by_referral_code,
    flatten,
    iter_preorder,
    iter_with_depth,
    layout,
    level_breakdown,
    load_snapshot,
    locate,
    network_stats,
    nodes_at_level,
    normalize_amount,
    path_to,
    reveal,
    subtree_width,
    visible_children,
)
from network_tree.exceptions import (
    DepthTruncatedWarning,
    EmptyTreeError,
    HierarchySourceError,
    MalformedTreeError,
    NetworkTreeError,
)
from network_tree.services import HierarchySource, NetworkLoader, NetworkView
from network_tree.utils import (
    export_json,
    export_tree,
    format_amount,
    format_compact,
    format_network_stats,
    full_name,
    setup_logging,
)


__version__ = "1.0.0"
__all__ = [
    # Tree model
    "Node",
    "NodeMetrics",
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
    "Aggregate",
    "LevelBreakdown",
    "NetworkStats",
    "aggregate",
    "aggregate_all",
    "level_breakdown",
    "network_stats",
    # Expansion
    "ExpansionState",
    # Layout
    "NodePosition",
    "LayoutEdge",
    "LayoutResult",
    "layout",
    "subtree_width",
    "visible_children",
    # Search
    "MatchMode",
    "SearchResult",
    "find",
    "locate",
    "path_to",
    "reveal",
    # Services
    "HierarchySource",
    "NetworkLoader",
    "NetworkView",
    # Errors
    "NetworkTreeError",
    "MalformedTreeError",
    "EmptyTreeError",
    "HierarchySourceError",
    "DepthTruncatedWarning",
    # Config
    "TreeSettings",
    "get_settings",
    # Utilities
    "export_tree",
    "export_json",
    "format_amount",
    "format_compact",
    "format_network_stats",
    "full_name",
    "setup_logging",
]
