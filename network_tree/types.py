"""
Type definitions for hierarchy payloads and export documents.

Describes the raw records delivered by the hierarchy source and the
tree-shaped document produced by the exporter.
"""

from typing import TypedDict


class HierarchyNodePayload(TypedDict, total=False):
    """
    One member record as delivered by the hierarchy source.

    Only ``id`` is mandatory. Original dashboard field names
    (firstName/lastName, totalInvestment, totalEarnings, directReferrals,
    activeInvestments) are accepted as aliases.
    """
    id: str
    displayName: str
    firstName: str
    lastName: str
    email: str
    referralCode: str
    investedAmount: str
    earnedAmount: str
    totalInvestment: str
    totalEarnings: str
    investmentCount: int
    activeInvestments: int
    directChildCount: int
    directReferrals: int
    status: str
    level: int
    joinedAt: str
    children: list["HierarchyNodePayload"]


class HierarchyTreePayload(TypedDict, total=False):
    """Envelope returned by the tree endpoint."""
    root: HierarchyNodePayload
    totalLevels: int
    totalMembers: int
    displayedLevels: int
    maxDisplayLevel: int


class ExportUserDict(TypedDict):
    """Identification block of an exported member."""
    id: str
    name: str
    email: str | None
    referralCode: str | None
    status: str | None
    joinedAt: str | None


class ExportMetricsDict(TypedDict):
    """Node-local metrics of an exported member."""
    invested: str | None
    earned: str | None
    investmentCount: int | None
    directChildCount: int | None


class ExportStatsDict(TypedDict):
    """Subtree aggregate of an exported member."""
    subtreeSize: int
    totalInvested: str
    totalReturns: str
    activeCount: int
    maxDepth: int


class ExportNodeDict(TypedDict):
    """One member in the exported network document."""
    user: ExportUserDict
    metrics: ExportMetricsDict
    stats: ExportStatsDict | None
    directReferrals: list["ExportNodeDict"]
