"""
Subtree statistics over a network tree.

One postorder pass computes an Aggregate for every node. Aggregation
always covers the whole materialized tree; expansion state plays no part.
"""

from decimal import Decimal

from loguru import logger

from network_tree.constants import ZERO
from network_tree.core.models import Aggregate, LevelBreakdown, NetworkStats, Node
from network_tree.core.tree import flatten, iter_with_depth
from network_tree.exceptions import EmptyTreeError


def aggregate_all(root: Node | None) -> dict[str, Aggregate]:
    """
    Compute aggregates for every node of the tree in a single pass.

    Args:
        root: Tree root

    Returns:
        Mapping of node id to its subtree Aggregate

    Raises:
        EmptyTreeError: If root is None
    """
    if root is None:
        raise EmptyTreeError("aggregate")

    results: dict[str, Aggregate] = {}

    # Reverse pre-order visits every child before its parent
    for node in reversed(flatten(root)):
        size = 1
        invested: Decimal = node.metrics.invested
        returns: Decimal = node.metrics.earned
        active = 1 if node.is_active else 0
        depth = 0

        for child in node.children:
            child_agg = results[child.id]
            size += child_agg.subtree_size
            invested += child_agg.total_invested
            returns += child_agg.total_returns
            active += child_agg.active_count
            depth = max(depth, child_agg.max_depth + 1)

        results[node.id] = Aggregate(
            node_id=node.id,
            subtree_size=size,
            total_invested=invested,
            total_returns=returns,
            active_count=active,
            max_depth=depth,
        )

    logger.debug(
        "Subtree aggregates computed",
        extra={"root_id": root.id, "nodes": len(results)},
    )

    return results


def aggregate(node: Node | None) -> Aggregate:
    """
    Compute statistics for one subtree.

    Example:
        >>> aggregate(root).subtree_size
        5
    """
    if node is None:
        raise EmptyTreeError("aggregate")
    return aggregate_all(node)[node.id]


def level_breakdown(root: Node) -> list[LevelBreakdown]:
    """
    Count members and sum their own amounts per level below root.

    Args:
        root: Tree root (level 0, not included)

    Returns:
        One LevelBreakdown per level from 1 to the deepest level
    """
    counts: dict[int, int] = {}
    invested: dict[int, Decimal] = {}
    returns: dict[int, Decimal] = {}

    for node, depth in iter_with_depth(root):
        if depth == 0:
            continue
        counts[depth] = counts.get(depth, 0) + 1
        invested[depth] = invested.get(depth, ZERO) + node.metrics.invested
        returns[depth] = returns.get(depth, ZERO) + node.metrics.earned

    return [
        LevelBreakdown(
            level=level,
            count=counts[level],
            total_invested=invested[level],
            total_returns=returns[level],
        )
        for level in sorted(counts)
    ]


def network_stats(
    root: Node | None,
    aggregates: dict[str, Aggregate] | None = None,
) -> NetworkStats:
    """
    Summarise the downline of a member (the member itself excluded).

    Args:
        root: Member whose downline is summarised
        aggregates: Precomputed aggregates for the snapshot, if available

    Returns:
        NetworkStats for the stats panel
    """
    if root is None:
        raise EmptyTreeError("network_stats")

    if aggregates is None or root.id not in aggregates:
        agg = aggregate(root)
    else:
        agg = aggregates[root.id]

    return NetworkStats(
        node_id=root.id,
        total_downline=agg.downline_size,
        direct_referrals=len(root.children),
        active_members=agg.active_count - (1 if root.is_active else 0),
        total_invested=agg.total_invested - root.metrics.invested,
        total_returns=agg.total_returns - root.metrics.earned,
        max_depth=agg.max_depth,
        level_breakdown=tuple(level_breakdown(root)),
    )
