"""
Formatting utilities for amounts and network summaries.

Text helpers for member cards and the network stats panel.
"""

from decimal import Decimal

from network_tree.constants import DEFAULT_CURRENCY, UNKNOWN_USER_NAME
from network_tree.core.models import NetworkStats


def full_name(first_name: str | None, last_name: str | None) -> str:
    """
    Join first and last name.

    Example:
        >>> full_name("Asha", None)
        'Asha'
        >>> full_name("", "")
        'Unknown User'
    """
    name = f"{first_name or ''} {last_name or ''}".strip()
    return name or UNKNOWN_USER_NAME


def format_amount(
    amount: Decimal | None,
    currency: str = DEFAULT_CURRENCY,
    decimals: int = 2,
) -> str:
    """
    Format an amount with thousands separators.

    Example:
        >>> format_amount(Decimal("125000.5"))
        '₹125,000.50'
    """
    value = amount if amount is not None else Decimal("0")
    return f"{currency}{value:,.{decimals}f}"


def format_compact(amount: Decimal | None, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format an amount in thousands, as on the member cards.

    Example:
        >>> format_compact(Decimal("12500"))
        '₹12.5K'
    """
    value = amount if amount is not None else Decimal("0")
    return f"{currency}{value / 1000:.1f}K"


def format_network_stats(stats: NetworkStats, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format downline statistics to a text report.

    Args:
        stats: NetworkStats object
        currency: Currency symbol

    Returns:
        Multi-line formatted report
    """
    lines = [
        "Network:",
        f"  Members:   {stats.total_downline}",
        f"  Direct:    {stats.direct_referrals}",
        f"  Active:    {stats.active_members}",
        f"  Invested:  {format_amount(stats.total_invested, currency)}",
        f"  Returns:   {format_amount(stats.total_returns, currency)}",
        f"  Depth:     {stats.max_depth}",
    ]
    if stats.level_breakdown:
        lines.append("")
        lines.append("By level:")
        for level in stats.level_breakdown:
            lines.append(
                f"  L{level.level}: {level.count} members, "
                f"{format_amount(level.total_invested, currency)} invested"
            )
    return "\n".join(lines)
