"""
Exception types for the network tree engine.

Load-time structural errors abort snapshot construction. Depth
truncation is informational: instances of DepthTruncatedWarning are
collected on the snapshot, never raised.
"""


class NetworkTreeError(Exception):
    """Base class for all network tree errors."""
    pass


class MalformedTreeError(NetworkTreeError, ValueError):
    """Raised when a hierarchy payload violates the tree shape."""

    def __init__(self, reason: str, node_id: str | None = None) -> None:
        self.reason = reason
        self.node_id = node_id
        if node_id is not None:
            message = f"{reason} (node_id={node_id})"
        else:
            message = reason
        super().__init__(message)


class EmptyTreeError(NetworkTreeError):
    """Raised when an operation needs a root and none was given."""

    def __init__(self, operation: str = "layout") -> None:
        self.operation = operation
        super().__init__(f"Cannot run {operation} without a root node")


class HierarchySourceError(NetworkTreeError):
    """Raised when the hierarchy data source fails to deliver a snapshot."""
    pass


class DepthTruncatedWarning(UserWarning):
    """
    Node reports more direct children than the snapshot materialized.

    Attributes:
        node_id: Truncated node
        reported: Direct child count reported by the source
        materialized: Number of children actually present
    """

    def __init__(self, node_id: str, reported: int, materialized: int) -> None:
        self.node_id = node_id
        self.reported = reported
        self.materialized = materialized
        super().__init__(
            f"Node {node_id} reports {reported} direct referrals, "
            f"{materialized} loaded"
        )

    @property
    def missing(self) -> int:
        """Number of children that were not fetched."""
        return self.reported - self.materialized
