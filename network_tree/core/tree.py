"""
Tree model construction and traversal.

Turns the nested record delivered by the hierarchy source into an
immutable Node tree. Validation is limited to shape: every node needs an
id and ids must be unique within one snapshot. All walks use explicit
work-lists so arbitrarily deep referral chains do not hit the
interpreter recursion limit.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from loguru import logger
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from network_tree.constants import AMOUNT_QUANTUM, UNKNOWN_USER_NAME
from network_tree.core.models import Node, NodeMetrics
from network_tree.exceptions import (
    DepthTruncatedWarning,
    HierarchySourceError,
    MalformedTreeError,
)


def normalize_amount(value: Any) -> Decimal | None:
    """
    Parse a raw monetary value into a two-place Decimal.

    Args:
        value: Decimal, int, float, numeric string or None

    Returns:
        Quantised Decimal, or None when the source reported nothing

    Raises:
        ValueError: If the value is not numeric

    Example:
        >>> normalize_amount("1,250.5")
        Decimal('1250.50')
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if value is None:
        return None

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # str() keeps the shortest repr instead of binary float noise
        amount = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            amount = Decimal(cleaned)
        except InvalidOperation as exc:
            raise ValueError(f"Not an amount: {value!r}") from exc
    else:
        raise ValueError(f"Not an amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value!r}")

    return amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


def _scalar_to_str(value: Any) -> Any:
    """Stringify numeric identification values; other types pass through."""
    if isinstance(value, (bool, int, float, Decimal)):
        return str(value)
    return value


class NodeRecord(BaseModel):
    """Flat fields of one payload record, children excluded."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    display_name: str = Field(
        default="",
        validation_alias=AliasChoices("displayName", "display_name", "name"),
    )
    email: str | None = None
    referral_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("referralCode", "referral_code"),
    )
    invested_amount: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "investedAmount", "invested_amount", "totalInvestment", "totalInvested"
        ),
    )
    earned_amount: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "earnedAmount", "earned_amount", "totalEarnings", "totalReturns"
        ),
    )
    investment_count: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices(
            "investmentCount", "investment_count", "activeInvestments"
        ),
    )
    direct_child_count: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices(
            "directChildCount", "direct_child_count", "directReferrals"
        ),
    )
    status: str | None = None
    level: int | None = None
    joined_at: str | None = Field(
        default=None,
        validation_alias=AliasChoices("joinedAt", "joined_at"),
    )

    @model_validator(mode="before")
    @classmethod
    def join_split_name(cls, data: Any) -> Any:
        """Build displayName from firstName/lastName when absent."""
        if not isinstance(data, Mapping):
            return data
        if any(data.get(key) for key in ("displayName", "display_name", "name")):
            return data
        if "firstName" not in data and "lastName" not in data:
            return data
        full = f"{data.get('firstName') or ''} {data.get('lastName') or ''}".strip()
        merged = dict(data)
        merged["displayName"] = full or UNKNOWN_USER_NAME
        return merged

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str | None:
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("id must be a string or integer")
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip() or None
        raise ValueError("id must be a string or integer")

    @field_validator("display_name", mode="before")
    @classmethod
    def coerce_display_name(cls, v: Any) -> Any:
        if v is None:
            return ""
        return _scalar_to_str(v)

    @field_validator("email", "referral_code", "status", "joined_at", mode="before")
    @classmethod
    def coerce_identity_field(cls, v: Any) -> Any:
        if v is None:
            return None
        return _scalar_to_str(v)

    @field_validator("invested_amount", "earned_amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> Decimal | None:
        return normalize_amount(v)

    @field_validator("status")
    @classmethod
    def normalize_status(cls, v: str | None) -> str | None:
        return v.strip().upper() if v else None

    def to_metrics(self) -> NodeMetrics:
        return NodeMetrics(
            invested_amount=self.invested_amount,
            earned_amount=self.earned_amount,
            investment_count=self.investment_count,
            direct_child_count=self.direct_child_count,
        )


@dataclass(frozen=True)
class TreeSnapshot:
    """
    One loaded hierarchy: the root plus lookup tables built at load time.

    The snapshot is immutable for the lifetime of one load.
    """

    root: Node
    index: dict[str, Node]
    parents: dict[str, str | None]
    depths: dict[str, int]
    truncations: tuple[DepthTruncatedWarning, ...] = ()
    max_display_level: int | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.index

    @property
    def root_id(self) -> str:
        return self.root.id

    @property
    def is_truncated(self) -> bool:
        """At least one branch was cut by the fetch depth bound."""
        return bool(self.truncations)

    def get(self, node_id: str) -> Node | None:
        return self.index.get(node_id)

    def parent_of(self, node_id: str) -> str | None:
        return self.parents.get(node_id)

    def depth_of(self, node_id: str) -> int | None:
        return self.depths.get(node_id)

    def truncated_ids(self) -> list[str]:
        return [warning.node_id for warning in self.truncations]

    def path_to(self, node_id: str) -> list[str]:
        """Ancestor ids root-first, ending at node_id; empty if unknown."""
        if node_id not in self.index:
            return []
        path = []
        current: str | None = node_id
        while current is not None:
            path.append(current)
            current = self.parents[current]
        path.reverse()
        return path


def _children_of(raw: Mapping, node_id: str | None) -> list:
    children = raw.get("children")
    if children is None:
        return []
    if not isinstance(children, (list, tuple)):
        raise MalformedTreeError("children must be a list", node_id)
    return list(children)


def _build(payload: Any) -> tuple[Node, dict[str, Node], dict[str, str | None], dict[str, int]]:
    if not isinstance(payload, Mapping):
        raise MalformedTreeError("Hierarchy payload must be a mapping")

    records: list[NodeRecord] = []
    child_indices: list[list[int]] = []
    parent_of: list[int | None] = []
    depth_of: list[int] = []
    seen: set[str] = set()

    # Pre-order walk; children pushed reversed so pops keep referral order
    stack: list[tuple[Any, int | None, int]] = [(payload, None, 0)]
    while stack:
        raw, parent_idx, depth = stack.pop()
        if not isinstance(raw, Mapping):
            parent_id = records[parent_idx].id if parent_idx is not None else None
            raise MalformedTreeError("Child record must be a mapping", parent_id)

        try:
            record = NodeRecord.model_validate(raw)
        except ValidationError as exc:
            raise MalformedTreeError(
                f"Invalid node fields: {exc.errors()[0]['msg']}",
                str(raw.get("id")) if raw.get("id") is not None else None,
            ) from exc

        if record.id is None:
            raise MalformedTreeError("Node is missing an id")
        if record.id in seen:
            raise MalformedTreeError("Duplicate node id in snapshot", record.id)
        seen.add(record.id)

        idx = len(records)
        records.append(record)
        child_indices.append([])
        parent_of.append(parent_idx)
        depth_of.append(depth)
        if parent_idx is not None:
            child_indices[parent_idx].append(idx)

        for child in reversed(_children_of(raw, record.id)):
            stack.append((child, idx, depth + 1))

    # Pre-order puts every child after its parent: build in reverse
    built: list[Node | None] = [None] * len(records)
    for idx in range(len(records) - 1, -1, -1):
        record = records[idx]
        built[idx] = Node(
            id=record.id,
            display_name=record.display_name,
            email=record.email,
            referral_code=record.referral_code,
            metrics=record.to_metrics(),
            status=record.status,
            level=record.level,
            joined_at=record.joined_at,
            children=tuple(built[c] for c in child_indices[idx]),
        )

    index = {records[i].id: built[i] for i in range(len(records))}
    parents = {
        records[i].id: (records[parent_of[i]].id if parent_of[i] is not None else None)
        for i in range(len(records))
    }
    depths = {records[i].id: depth_of[i] for i in range(len(records))}
    return built[0], index, parents, depths


def build_tree(payload: Any) -> Node:
    """
    Build a Node tree from a raw nested record.

    Args:
        payload: Root record with nested ``children``

    Returns:
        Root Node

    Raises:
        MalformedTreeError: Missing/duplicate id or invalid record shape
    """
    root, _, _, _ = _build(payload)
    return root


def unwrap_payload(payload: Any) -> tuple[Any, dict[str, Any]]:
    """
    Strip response envelopes around the root record.

    Accepts a bare node record, ``{root, totalLevels, ...}`` or an API
    wrapper ``{success, data, message}`` around either.

    Returns:
        Tuple of (root record, envelope metadata)

    Raises:
        HierarchySourceError: If the wrapper reports failure
        MalformedTreeError: If no root record is present
    """
    if not isinstance(payload, Mapping):
        raise MalformedTreeError("Hierarchy payload must be a mapping")

    if "success" in payload and "id" not in payload:
        if not payload.get("success"):
            raise HierarchySourceError(
                payload.get("message") or "Hierarchy source reported failure"
            )
        payload = payload.get("data")
        if not isinstance(payload, Mapping):
            raise MalformedTreeError("Hierarchy response carries no data")

    meta: dict[str, Any] = {}
    if "root" in payload and "id" not in payload:
        meta = {key: value for key, value in payload.items() if key != "root"}
        root = payload.get("root")
        if root is None:
            raise MalformedTreeError("Hierarchy envelope has no root")
        return root, meta

    return payload, meta


def load_snapshot(payload: Any) -> TreeSnapshot:
    """
    Load a complete snapshot from a hierarchy response.

    Structural errors abort the load: no partial tree is exposed.
    Depth truncation is collected on the snapshot and logged.

    Args:
        payload: Raw response (bare record or envelope)

    Returns:
        TreeSnapshot rooted at the requesting member
    """
    root_payload, meta = unwrap_payload(payload)
    root, index, parents, depths = _build(root_payload)

    truncations = tuple(
        DepthTruncatedWarning(
            node_id=node.id,
            reported=node.metrics.direct_child_count,
            materialized=len(node.children),
        )
        for node in iter_preorder(root)
        if node.is_truncated
    )

    if truncations:
        logger.warning(
            "Hierarchy snapshot is depth-truncated",
            extra={
                "root_id": root.id,
                "truncated_nodes": len(truncations),
                "missing_children": sum(w.missing for w in truncations),
            },
        )

    max_display_level = meta.get("maxDisplayLevel")

    logger.info(
        "Hierarchy snapshot loaded",
        extra={
            "root_id": root.id,
            "members": len(index),
            "depth": max(depths.values()),
        },
    )

    return TreeSnapshot(
        root=root,
        index=index,
        parents=parents,
        depths=depths,
        truncations=truncations,
        max_display_level=max_display_level if isinstance(max_display_level, int) else None,
        meta=meta,
    )


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield nodes depth-first, parent before children, left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_with_depth(root: Node) -> Iterator[tuple[Node, int]]:
    """Pre-order walk yielding (node, depth below root)."""
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def flatten(root: Node) -> list[Node]:
    """Return every node of the tree in pre-order."""
    return list(iter_preorder(root))


def count_members(root: Node) -> int:
    """Total number of nodes including the root."""
    return sum(1 for _ in iter_preorder(root))


def find_by_id(root: Node, node_id: str) -> Node | None:
    for node in iter_preorder(root):
        if node.id == node_id:
            return node
    return None


def find_by_referral_code(root: Node, referral_code: str) -> Node | None:
    """Exact (case-sensitive) referral code lookup."""
    for node in iter_preorder(root):
        if node.referral_code == referral_code:
            return node
    return None


def nodes_at_level(root: Node, level: int) -> list[Node]:
    """
    Get all nodes at a given depth below root, left to right.

    Args:
        root: Tree root (level 0)
        level: Target depth

    Returns:
        Nodes at that depth in pre-order
    """
    if level < 0:
        return []
    return [node for node, depth in iter_with_depth(root) if depth == level]
