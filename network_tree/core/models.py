"""Pydantic models for the network tree engine."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from network_tree.constants import ZERO


class NodeMetrics(BaseModel):
    """Node-local numeric facts supplied by the hierarchy source.

    Amounts are already normalised to two-place Decimals; ``None`` means
    the source did not report the value and counts as zero in aggregates.
    """

    model_config = ConfigDict(frozen=True)

    invested_amount: Decimal | None = Field(
        default=None, description="Amount invested by this member"
    )
    earned_amount: Decimal | None = Field(
        default=None, description="Amount earned (returns) by this member"
    )
    investment_count: int | None = Field(
        default=None, ge=0, description="Number of investments held"
    )
    direct_child_count: int | None = Field(
        default=None,
        ge=0,
        description="Direct referrals reported by the source (may exceed loaded children)",
    )

    @property
    def invested(self) -> Decimal:
        """Invested amount with missing values as zero."""
        return self.invested_amount if self.invested_amount is not None else ZERO

    @property
    def earned(self) -> Decimal:
        """Earned amount with missing values as zero."""
        return self.earned_amount if self.earned_amount is not None else ZERO

    @property
    def is_active(self) -> bool:
        """Member holds at least one investment.

        Falls back to a positive invested amount when the source omits
        the investment count.
        """
        if self.investment_count is not None:
            return self.investment_count > 0
        return self.invested > 0


class Node(BaseModel):
    """One network member and its ordered referral children.

    Nodes are immutable once built; children keep referral order.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable member identifier")
    display_name: str = Field(default="", description="Name shown in the tree")
    email: str | None = None
    referral_code: str | None = None
    metrics: NodeMetrics = Field(default_factory=NodeMetrics)
    status: str | None = None
    level: int | None = Field(default=None, description="Level reported by the source")
    joined_at: str | None = None
    children: tuple["Node", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_active(self) -> bool:
        return self.metrics.is_active

    @property
    def is_truncated(self) -> bool:
        """Source reports more direct referrals than were materialized."""
        reported = self.metrics.direct_child_count
        return reported is not None and reported > len(self.children)


Node.model_rebuild()


class Aggregate(BaseModel):
    """Statistics over one subtree. Read-only for consumers."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    subtree_size: int = Field(..., ge=1, description="Self plus all descendants")
    total_invested: Decimal = Field(default=ZERO)
    total_returns: Decimal = Field(default=ZERO)
    active_count: int = Field(default=0, ge=0, description="Members with an investment")
    max_depth: int = Field(default=0, ge=0, description="Longest descendant chain")

    @property
    def downline_size(self) -> int:
        return self.subtree_size - 1


class LevelBreakdown(BaseModel):
    """Members and amounts at one depth below a root."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1)
    count: int = Field(default=0, ge=0)
    total_invested: Decimal = Field(default=ZERO)
    total_returns: Decimal = Field(default=ZERO)


class NetworkStats(BaseModel):
    """Downline summary for the stats panel of one member."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    total_downline: int = Field(default=0, ge=0)
    direct_referrals: int = Field(default=0, ge=0)
    active_members: int = Field(default=0, ge=0)
    total_invested: Decimal = Field(default=ZERO)
    total_returns: Decimal = Field(default=ZERO)
    max_depth: int = Field(default=0, ge=0)
    level_breakdown: tuple[LevelBreakdown, ...] = ()


class NodePosition(BaseModel):
    """Absolute coordinates of one visible node."""

    model_config = ConfigDict(frozen=True)

    id: str
    x: float
    y: float


class LayoutEdge(BaseModel):
    """Visible parent -> child connection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_id: str = Field(..., alias="sourceId")
    target_id: str = Field(..., alias="targetId")


class LayoutResult(BaseModel):
    """Positions and edges produced by one layout pass."""

    model_config = ConfigDict(frozen=True)

    positions: tuple[NodePosition, ...] = ()
    edges: tuple[LayoutEdge, ...] = ()
    total_units: int = Field(default=0, ge=0, description="Width of the root span in units")
    unit_width: float = Field(..., gt=0)
    level_spacing: float = Field(..., gt=0)

    @property
    def node_ids(self) -> list[str]:
        return [position.id for position in self.positions]

    @property
    def width(self) -> float:
        """Horizontal extent of the whole layout."""
        return self.total_units * self.unit_width

    def position_of(self, node_id: str) -> NodePosition | None:
        """Return position of a visible node, or None when hidden."""
        for position in self.positions:
            if position.id == node_id:
                return position
        return None

    def to_dict(self) -> dict:
        """Render the presentation-boundary document (camelCase keys)."""
        return {
            "nodes": [position.model_dump() for position in self.positions],
            "edges": [edge.model_dump(by_alias=True) for edge in self.edges],
        }


class SearchResult(BaseModel):
    """Outcome of a locate call.

    ``found=False`` is the NotFound value: a normal negative result.
    """

    model_config = ConfigDict(frozen=True)

    found: bool
    query: str = ""
    node: Node | None = None
    path: tuple[str, ...] = Field(
        default=(), description="Ancestor ids root-first, match last"
    )

    @property
    def level(self) -> int | None:
        """Depth of the match below the search root."""
        if not self.found:
            return None
        return len(self.path) - 1

    @property
    def ancestors(self) -> tuple[str, ...]:
        """Path without the matched node itself."""
        return self.path[:-1]

    @classmethod
    def not_found(cls, query: str = "") -> "SearchResult":
        return cls(found=False, query=query)
