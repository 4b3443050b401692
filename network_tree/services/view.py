"""
Network view model.

Ties one snapshot to the interaction state a screen needs: which nodes
are expanded and which one is highlighted. Aggregates are computed once
per snapshot; layout is recomputed on every request.
"""

from loguru import logger

from network_tree.core.aggregator import aggregate_all, network_stats
from network_tree.core.expansion import ExpansionState
from network_tree.core.layout import layout
from network_tree.core.locator import MatchMode, reveal
from network_tree.core.models import (
    Aggregate,
    LayoutResult,
    NetworkStats,
    Node,
    SearchResult,
)
from network_tree.core.tree import TreeSnapshot
from network_tree.types import ExportNodeDict
from network_tree.utils.export import export_tree


class NetworkView:
    """Interactive view over one loaded hierarchy."""

    def __init__(
        self,
        snapshot: TreeSnapshot,
        unit_width: float | None = None,
        level_spacing: float | None = None,
    ) -> None:
        self.unit_width = unit_width
        self.level_spacing = level_spacing
        self.reload(snapshot)

    def reload(self, snapshot: TreeSnapshot) -> None:
        """Swap in a fresh snapshot and reset interaction state."""
        self.snapshot = snapshot
        self.expansion = ExpansionState.for_root(snapshot.root)
        self.highlighted_id: str | None = None
        self._aggregates: dict[str, Aggregate] | None = None

        logger.info(
            "Network view loaded",
            extra={"root_id": snapshot.root_id, "members": len(snapshot)},
        )

    @property
    def root(self) -> Node:
        return self.snapshot.root

    @property
    def aggregates(self) -> dict[str, Aggregate]:
        if self._aggregates is None:
            self._aggregates = aggregate_all(self.snapshot.root)
        return self._aggregates

    def toggle(self, node_id: str) -> bool:
        """Expand or collapse one node; unknown ids are ignored."""
        if node_id not in self.snapshot:
            logger.warning("Toggle for unknown node", extra={"node_id": node_id})
            return False
        return self.expansion.toggle(node_id)

    def expand_all(self) -> None:
        self.expansion.expand_all(self.snapshot.root)

    def collapse_all(self) -> None:
        self.expansion.collapse_all(self.snapshot.root)

    def search(self, query: str, mode: MatchMode | str | None = None) -> SearchResult:
        """
        Search the loaded tree and reveal the match.

        A miss clears the highlight and leaves expansion untouched.
        """
        result = reveal(self.snapshot.root, query, self.expansion, mode)
        self.highlighted_id = result.node.id if result.found else None
        return result

    def layout(self, active_only: bool = False) -> LayoutResult:
        return layout(
            self.snapshot.root,
            self.expansion,
            unit_width=self.unit_width,
            level_spacing=self.level_spacing,
            active_only=active_only,
        )

    def aggregate(self, node_id: str | None = None) -> Aggregate:
        """Aggregate for a node (root by default)."""
        key = node_id or self.snapshot.root_id
        if key not in self.snapshot:
            raise KeyError(node_id)
        return self.aggregates[key]

    def stats(self, node_id: str | None = None) -> NetworkStats:
        """Downline statistics for a node (root by default)."""
        node = self.snapshot.get(node_id) if node_id else self.snapshot.root
        if node is None:
            raise KeyError(node_id)
        return network_stats(node, self.aggregates)

    def export(self) -> ExportNodeDict:
        return export_tree(self.snapshot.root, self.aggregates)
