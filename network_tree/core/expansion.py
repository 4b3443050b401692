"""
Expansion state: which nodes currently show their children.

A plain mutable set owned by whoever drives the interaction. The root
is implicitly open whether or not it is a member of the set.
"""

from collections.abc import Iterable, Iterator

from loguru import logger

from network_tree.core.models import Node
from network_tree.core.tree import iter_preorder


class ExpansionState:
    """Set of expanded node ids."""

    def __init__(self, expanded: Iterable[str] = ()) -> None:
        self._expanded: set[str] = set(expanded)

    @classmethod
    def for_root(cls, root: Node) -> "ExpansionState":
        """Initial state on tree load: only the root is open."""
        return cls((root.id,))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._expanded

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._expanded))

    def __len__(self) -> int:
        return len(self._expanded)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExpansionState):
            return NotImplemented
        return self._expanded == other._expanded

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._expanded)!r})"

    def toggle(self, node_id: str) -> bool:
        """
        Flip one node between expanded and collapsed.

        Returns:
            True if the node is expanded after the call
        """
        if node_id in self._expanded:
            self._expanded.remove(node_id)
            return False
        self._expanded.add(node_id)
        return True

    def expand(self, node_ids: Iterable[str]) -> None:
        """Open every given node, leaving others untouched."""
        self._expanded.update(node_ids)

    def expand_all(self, root: Node) -> None:
        """Open every node reachable in the materialized tree."""
        self._expanded = {node.id for node in iter_preorder(root)}
        logger.debug(
            "Expanded all nodes",
            extra={"root_id": root.id, "expanded": len(self._expanded)},
        )

    def collapse_all(self, root: Node) -> None:
        """Reset to the root only."""
        self._expanded = {root.id}

    def is_expanded(self, node_id: str, is_root: bool = False) -> bool:
        return is_root or node_id in self._expanded

    def snapshot(self) -> frozenset[str]:
        """Immutable copy for undo-style restore."""
        return frozenset(self._expanded)

    def restore(self, snapshot: Iterable[str]) -> None:
        self._expanded = set(snapshot)

    def copy(self) -> "ExpansionState":
        return ExpansionState(self._expanded)
