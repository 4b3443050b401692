"""
Layout engine: 2-D coordinates and edges for the visible tree.

Subtree-width placement. A leaf or collapsed node occupies one layout
unit; an expanded node spans the sum of its visible children and sits at
the midpoint of its first and last visible child. Depth is counted along
materialized ancestors, so collapsing never renumbers levels.

The walk is iterative with an explicit frame stack; output order is
fixed by child order alone (children placed before their parent).
"""

from loguru import logger

from network_tree.config import get_settings
from network_tree.core.expansion import ExpansionState
from network_tree.core.models import LayoutEdge, LayoutResult, Node, NodePosition
from network_tree.exceptions import EmptyTreeError


def visible_children(
    node: Node,
    expansion: ExpansionState,
    is_root: bool = False,
    active_only: bool = False,
) -> tuple[Node, ...]:
    """
    Children rendered under a node for the given expansion state.

    Args:
        node: Parent node
        expansion: Current expansion state
        is_root: Root is always open
        active_only: Hide children without an investment

    Returns:
        Visible children in referral order
    """
    if not node.children or not expansion.is_expanded(node.id, is_root):
        return ()
    if active_only:
        return tuple(child for child in node.children if child.is_active)
    return node.children


def subtree_width(
    node: Node,
    expansion: ExpansionState,
    is_root: bool = False,
    active_only: bool = False,
) -> int:
    """
    Width of a node's visible span in layout units.

    Example:
        >>> subtree_width(collapsed_node_with_many_children, state)
        1
    """
    units = 0
    stack = [(node, is_root)]
    while stack:
        current, current_is_root = stack.pop()
        children = visible_children(current, expansion, current_is_root, active_only)
        if children:
            stack.extend((child, False) for child in children)
        else:
            units += 1
    return units


def layout(
    root: Node | None,
    expansion: ExpansionState,
    unit_width: float | None = None,
    level_spacing: float | None = None,
    active_only: bool = False,
) -> LayoutResult:
    """
    Compute positions and edges for every visible node.

    Args:
        root: Tree root (always expanded)
        expansion: Current expansion state
        unit_width: Horizontal size of one unit (settings default)
        level_spacing: Vertical step per depth level (settings default)
        active_only: Hide children without an investment

    Returns:
        LayoutResult, a pure function of (tree, expansion)

    Raises:
        EmptyTreeError: If root is None
    """
    if root is None:
        raise EmptyTreeError("layout")

    config = get_settings()
    unit = unit_width if unit_width is not None else config.unit_width
    spacing = level_spacing if level_spacing is not None else config.level_spacing
    if unit <= 0 or spacing <= 0:
        raise ValueError("unit_width and level_spacing must be positive")

    positions: list[NodePosition] = []
    edges: list[LayoutEdge] = []
    centers: dict[str, float] = {}
    cursor = 0  # units consumed so far, left to right

    # Frames: (node, depth, is_root, children) where children is None on entry
    stack: list[tuple[Node, int, bool, tuple[Node, ...] | None]] = [
        (root, 0, True, None)
    ]
    while stack:
        node, depth, is_root, children = stack.pop()
        y = depth * spacing

        if children is None:
            children = visible_children(node, expansion, is_root, active_only)
            if not children:
                x = cursor * unit + unit / 2
                cursor += 1
                centers[node.id] = x
                positions.append(NodePosition(id=node.id, x=x, y=y))
                continue

            stack.append((node, depth, is_root, children))
            for child in reversed(children):
                stack.append((child, depth + 1, False, None))
            continue

        x = (centers[children[0].id] + centers[children[-1].id]) / 2
        centers[node.id] = x
        positions.append(NodePosition(id=node.id, x=x, y=y))
        edges.extend(
            LayoutEdge(source_id=node.id, target_id=child.id) for child in children
        )

    logger.debug(
        "Layout computed",
        extra={
            "root_id": root.id,
            "nodes": len(positions),
            "edges": len(edges),
            "units": cursor,
        },
    )

    return LayoutResult(
        positions=tuple(positions),
        edges=tuple(edges),
        total_units=cursor,
        unit_width=unit,
        level_spacing=spacing,
    )
