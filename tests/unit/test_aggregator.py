"""
Unit tests for subtree aggregation.

Tests cover:
- Aggregate values on the sample network
- Recursive size invariant on every node
- Independence from expansion state
- Level breakdown and downline stats
- Edge cases (single node, None metrics, deep chains)
"""

from decimal import Decimal

import pytest

from network_tree import (
    EmptyTreeError,
    ExpansionState,
    aggregate,
    aggregate_all,
    build_tree,
    count_members,
    flatten,
    level_breakdown,
    load_snapshot,
    network_stats,
)


class TestAggregate:
    """Tests for aggregate() on the sample network."""

    def test_root_subtree_size(self, sample_root) -> None:
        """Test root subtree covers every member."""
        assert aggregate(sample_root).subtree_size == 5

    def test_root_totals(self, sample_root) -> None:
        """Test invested and returns sums over the whole tree."""
        agg = aggregate(sample_root)
        assert agg.total_invested == Decimal("4750.50")
        assert agg.total_returns == Decimal("425.25")

    def test_active_count(self, sample_root) -> None:
        """Test members with investments are counted."""
        assert aggregate(sample_root).active_count == 4

    def test_max_depth(self, sample_root) -> None:
        """Test longest descendant chain."""
        assert aggregate(sample_root).max_depth == 2

    def test_leaf_base_case(self, sample_snapshot) -> None:
        """Test a leaf aggregates to itself."""
        agg = aggregate(sample_snapshot.get("A"))
        assert agg.subtree_size == 1
        assert agg.max_depth == 0
        assert agg.active_count == 1
        assert agg.total_invested == Decimal("2500.50")

    def test_none_metrics_contribute_zero(self, sample_snapshot) -> None:
        """Test a node with no reported amounts is not an error."""
        agg = aggregate(sample_snapshot.get("B"))
        assert agg.subtree_size == 3
        assert agg.total_invested == Decimal("1250.00")
        assert agg.total_returns == Decimal("75.25")
        assert agg.active_count == 2
        assert agg.max_depth == 1

    def test_all_none_metrics_tree(self) -> None:
        """Test a tree without any metrics aggregates to zeros."""
        root = build_tree({"id": "r", "children": [{"id": "c1"}, {"id": "c2"}]})
        agg = aggregate(root)
        assert agg.subtree_size == 3
        assert agg.total_invested == Decimal("0")
        assert agg.active_count == 0

    def test_active_falls_back_to_invested_amount(self) -> None:
        """Test missing investment count uses a positive invested amount."""
        root = build_tree({
            "id": "r",
            "children": [{"id": "c1", "investedAmount": "10"}, {"id": "c2"}],
        })
        assert aggregate(root).active_count == 1

    def test_none_root_raises(self) -> None:
        """Test aggregate without a root fails."""
        with pytest.raises(EmptyTreeError):
            aggregate(None)

    def test_aggregates_are_frozen(self, sample_root) -> None:
        """Test consumers cannot mutate aggregates."""
        agg = aggregate(sample_root)
        with pytest.raises(Exception):
            agg.subtree_size = 99


class TestAggregateInvariants:
    """Property-style checks over every node."""

    def test_size_is_one_plus_children(self, sample_root) -> None:
        """Test subtree_size recursion holds for every node."""
        results = aggregate_all(sample_root)
        for node in flatten(sample_root):
            expected = 1 + sum(results[c.id].subtree_size for c in node.children)
            assert results[node.id].subtree_size == expected

    def test_root_size_equals_member_count(self, sample_root) -> None:
        """Test root size equals total node count."""
        assert aggregate_all(sample_root)["R"].subtree_size == count_members(sample_root)

    def test_single_pass_matches_per_node_calls(self, sample_root) -> None:
        """Test aggregate_all agrees with aggregate() for each subtree."""
        results = aggregate_all(sample_root)
        for node in flatten(sample_root):
            assert aggregate(node) == results[node.id]

    def test_independent_of_expansion(self, sample_root) -> None:
        """Test toggling expansion never changes aggregates."""
        before = aggregate_all(sample_root)

        state = ExpansionState.for_root(sample_root)
        state.toggle("B")
        state.expand_all(sample_root)
        state.collapse_all(sample_root)

        assert aggregate_all(sample_root) == before

    def test_deep_chain(self, chain_payload_factory) -> None:
        """Test chains deeper than the recursion limit aggregate."""
        snapshot = load_snapshot(chain_payload_factory(3000))
        agg = aggregate(snapshot.root)
        assert agg.subtree_size == 3000
        assert agg.max_depth == 2999
        assert agg.total_invested == Decimal("3000.00")


class TestLevelBreakdown:
    """Tests for per-level statistics."""

    def test_levels(self, sample_root) -> None:
        """Test counts and sums per level below root."""
        levels = level_breakdown(sample_root)
        assert [lvl.level for lvl in levels] == [1, 2]
        assert levels[0].count == 2
        assert levels[0].total_invested == Decimal("2500.50")
        assert levels[1].count == 2
        assert levels[1].total_invested == Decimal("1250.00")
        assert levels[1].total_returns == Decimal("75.25")

    def test_leaf_has_no_levels(self, sample_snapshot) -> None:
        """Test a leaf has an empty breakdown."""
        assert level_breakdown(sample_snapshot.get("A")) == []


class TestNetworkStats:
    """Tests for downline summaries."""

    def test_root_downline(self, sample_root) -> None:
        """Test stats exclude the member itself."""
        stats = network_stats(sample_root)
        assert stats.total_downline == 4
        assert stats.direct_referrals == 2
        assert stats.active_members == 3
        assert stats.total_invested == Decimal("3750.50")
        assert stats.total_returns == Decimal("325.25")
        assert stats.max_depth == 2
        assert len(stats.level_breakdown) == 2

    def test_uses_precomputed_aggregates(self, sample_root) -> None:
        """Test precomputed aggregates give the same result."""
        results = aggregate_all(sample_root)
        assert network_stats(sample_root, results) == network_stats(sample_root)

    def test_level_sum_matches_downline(self, sample_root) -> None:
        """Test breakdown counts add up to the downline."""
        stats = network_stats(sample_root)
        assert sum(lvl.count for lvl in stats.level_breakdown) == stats.total_downline
