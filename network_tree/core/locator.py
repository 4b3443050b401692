"""
Search and reveal over a network tree.

Depth-first pre-order, first match wins. The path accumulator is
truncated on backtrack so sibling ids never leak into a returned path.
"""

from collections.abc import Iterator
from enum import Enum

from loguru import logger

from network_tree.config import get_settings
from network_tree.core.expansion import ExpansionState
from network_tree.core.models import Node, SearchResult


class MatchMode(str, Enum):
    """Search predicates."""

    TEXT = "text"  # substring of display name
    CODE = "code"  # exact referral code
    ANY = "any"  # name or email substring, or exact code


def _resolve_mode(mode: MatchMode | str | None) -> MatchMode:
    if mode is None:
        mode = get_settings().search_mode
    return MatchMode(mode)


def _normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def matches(node: Node, query: str, mode: MatchMode = MatchMode.TEXT) -> bool:
    """
    Check one node against a normalized (lower-cased) query.

    Args:
        node: Candidate node
        query: Lower-cased, stripped query
        mode: Predicate to apply

    Returns:
        True if the node matches
    """
    if not query:
        return False

    code_hit = bool(node.referral_code) and node.referral_code.lower() == query
    if mode == MatchMode.CODE:
        return code_hit

    name_hit = query in node.display_name.lower()
    if mode == MatchMode.TEXT:
        return name_hit

    email_hit = bool(node.email) and query in node.email.lower()
    return name_hit or email_hit or code_hit


def _walk_with_path(root: Node) -> Iterator[tuple[Node, list[str]]]:
    """Pre-order walk yielding each node with the live root-first path."""
    path: list[str] = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        del path[depth:]
        path.append(node.id)
        yield node, path
        stack.extend((child, depth + 1) for child in reversed(node.children))


def find(
    root: Node,
    query: str,
    mode: MatchMode | str | None = None,
) -> Node | None:
    """
    Find the first node matching a query.

    Returns:
        Matching node, or None when nothing in the tree matches
    """
    result = locate(root, query, mode)
    return result.node


def path_to(root: Node, target_id: str) -> list[str]:
    """
    Ancestor ids from root to target.

    Args:
        root: Tree root
        target_id: Node to reach

    Returns:
        Root-first list ending at target_id, or empty list if absent
    """
    for node, path in _walk_with_path(root):
        if node.id == target_id:
            return list(path)
    return []


def locate(
    root: Node,
    query: str,
    mode: MatchMode | str | None = None,
) -> SearchResult:
    """
    Find the first match together with its path.

    Blank queries never match. Without a mode the configured
    search_mode applies.

    Returns:
        SearchResult; ``found=False`` is the NotFound value
    """
    mode = _resolve_mode(mode)
    normalized = _normalize_query(query)
    if not normalized:
        return SearchResult.not_found(query or "")

    for node, path in _walk_with_path(root):
        if matches(node, normalized, mode):
            return SearchResult(found=True, query=query, node=node, path=tuple(path))

    return SearchResult.not_found(query)


def reveal(
    root: Node,
    query: str,
    expansion: ExpansionState,
    mode: MatchMode | str | None = None,
) -> SearchResult:
    """
    Search and open the path to the match.

    On success every ancestor of the match is added to the expansion
    state. On a miss the expansion state is left untouched.

    Args:
        root: Tree root
        query: Free text or referral code
        expansion: State to update
        mode: Predicate to apply (settings default)

    Returns:
        SearchResult; the caller highlights ``result.node``
    """
    mode = _resolve_mode(mode)
    result = locate(root, query, mode)

    if not result.found:
        logger.debug(
            "Search found no member",
            extra={"root_id": root.id, "mode": mode.value},
        )
        return result

    expansion.expand(result.ancestors)

    logger.debug(
        "Search revealed member",
        extra={
            "root_id": root.id,
            "match_id": result.node.id,
            "path_length": len(result.path),
        },
    )

    return result
