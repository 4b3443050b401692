"""
Network export.

Walks the same tree and emits the same fields as a nested document,
the payload behind "download my network". Amounts are rendered as
strings so the document round-trips through JSON without precision loss.
"""

import json
from decimal import Decimal

from network_tree.constants import UNKNOWN_USER_NAME
from network_tree.core.aggregator import aggregate_all
from network_tree.core.models import Aggregate, Node
from network_tree.core.tree import flatten
from network_tree.exceptions import EmptyTreeError
from network_tree.types import ExportNodeDict


def _amount(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _stats(agg: Aggregate | None) -> dict | None:
    if agg is None:
        return None
    return {
        "subtreeSize": agg.subtree_size,
        "totalInvested": str(agg.total_invested),
        "totalReturns": str(agg.total_returns),
        "activeCount": agg.active_count,
        "maxDepth": agg.max_depth,
    }


def export_tree(
    root: Node | None,
    aggregates: dict[str, Aggregate] | None = None,
    include_stats: bool = True,
) -> ExportNodeDict:
    """
    Serialize the aggregate-decorated tree to a nested document.

    Args:
        root: Tree root
        aggregates: Precomputed aggregates (computed here when omitted)
        include_stats: Attach subtree aggregates to every member

    Returns:
        Nested dict: user, metrics, stats, directReferrals
    """
    if root is None:
        raise EmptyTreeError("export")

    if include_stats and aggregates is None:
        aggregates = aggregate_all(root)

    documents: dict[str, ExportNodeDict] = {}
    for node in reversed(flatten(root)):
        documents[node.id] = {
            "user": {
                "id": node.id,
                "name": node.display_name or UNKNOWN_USER_NAME,
                "email": node.email,
                "referralCode": node.referral_code,
                "status": node.status,
                "joinedAt": node.joined_at,
            },
            "metrics": {
                "invested": _amount(node.metrics.invested_amount),
                "earned": _amount(node.metrics.earned_amount),
                "investmentCount": node.metrics.investment_count,
                "directChildCount": node.metrics.direct_child_count,
            },
            "stats": _stats(aggregates.get(node.id)) if include_stats else None,
            "directReferrals": [documents.pop(child.id) for child in node.children],
        }

    return documents[root.id]


def export_json(
    root: Node | None,
    aggregates: dict[str, Aggregate] | None = None,
    indent: int | None = 2,
) -> str:
    """Export the network as a JSON string."""
    return json.dumps(
        export_tree(root, aggregates), indent=indent, ensure_ascii=False
    )
