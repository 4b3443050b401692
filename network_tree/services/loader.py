"""
Hierarchy loading service.

Awaits the external hierarchy source once per load/refresh and turns
its payload into a TreeSnapshot. The source itself (HTTP client, cache,
database) is supplied by the caller.
"""

from typing import Any, Protocol

from loguru import logger

from network_tree.config import get_settings
from network_tree.constants import MAX_FETCH_DEPTH
from network_tree.core.models import Node
from network_tree.core.tree import TreeSnapshot, build_tree, load_snapshot, unwrap_payload
from network_tree.exceptions import HierarchySourceError, MalformedTreeError


class HierarchySource(Protocol):
    """Data source delivering hierarchy payloads."""

    async def fetch_tree(self, root_id: str, max_depth: int) -> Any:
        """Return a nested tree payload, depth-bounded server-side."""
        ...

    async def lookup(self, query: str) -> Any:
        """Return at most one member record matching a code or text."""
        ...


class NetworkLoader:
    """Loads hierarchy snapshots from a HierarchySource."""

    def __init__(self, source: HierarchySource) -> None:
        """Initialize loader."""
        self.source = source

    async def load(self, root_id: str, max_depth: int | None = None) -> TreeSnapshot:
        """
        Fetch and build the snapshot rooted at a member.

        Args:
            root_id: Viewing member id
            max_depth: Levels to fetch (settings default)

        Returns:
            TreeSnapshot

        Raises:
            HierarchySourceError: Fetch failed
            MalformedTreeError: Payload violates the tree shape
        """
        depth = max_depth if max_depth is not None else get_settings().default_fetch_depth
        if depth < 1 or depth > MAX_FETCH_DEPTH:
            raise ValueError(f"max_depth must be between 1 and {MAX_FETCH_DEPTH}")

        try:
            payload = await self.source.fetch_tree(root_id, depth)
        except HierarchySourceError:
            raise
        except Exception as exc:
            logger.error(
                "Hierarchy fetch failed",
                extra={"root_id": root_id, "max_depth": depth, "error": str(exc)},
            )
            raise HierarchySourceError(str(exc)) from exc

        if payload is None:
            raise HierarchySourceError(f"No hierarchy returned for {root_id}")

        try:
            snapshot = load_snapshot(payload)
        except MalformedTreeError as exc:
            logger.error(
                "Malformed hierarchy payload",
                extra={"root_id": root_id, "node_id": exc.node_id, "error": str(exc)},
            )
            raise

        if snapshot.root_id != root_id:
            logger.warning(
                "Hierarchy root differs from requested member",
                extra={"requested": root_id, "received": snapshot.root_id},
            )

        return snapshot

    async def lookup(self, query: str) -> Node | None:
        """
        Point lookup fallback for members outside the loaded snapshot.

        Args:
            query: Referral code or free text

        Returns:
            Standalone Node (children as delivered), or None when not found
        """
        if not query or not query.strip():
            return None

        try:
            payload = await self.source.lookup(query.strip())
        except HierarchySourceError:
            raise
        except Exception as exc:
            logger.error("Hierarchy lookup failed", extra={"error": str(exc)})
            raise HierarchySourceError(str(exc)) from exc

        if not payload:
            logger.debug("Lookup returned no member")
            return None

        record, _ = unwrap_payload(payload)
        # Search responses wrap the member as {found, node, path}
        if isinstance(record, dict) and "found" in record and "id" not in record:
            if not record.get("found") or not record.get("node"):
                return None
            record = record["node"]

        return build_tree(record)
