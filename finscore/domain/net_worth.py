"""Net worth from held assets and outstanding liabilities"""

from collections import defaultdict
from decimal import Decimal
from enum import Enum
from typing import Dict, Sequence, Tuple, Type
from finscore.domain.models import (
    ZERO,
    Asset,
    AssetCategory,
    CategoryAmount,
    Liability,
    LiabilityCategory,
    NetWorthSummary,
)


def _by_category(amounts: Dict[str, Decimal], categories: Type[Enum]) -> Tuple[CategoryAmount, ...]:
    """Non-zero category totals in enumeration order"""
    return tuple(
        CategoryAmount(category=c.value, amount=amounts[c.value])
        for c in categories
        if amounts.get(c.value, ZERO) != 0
    )


def calculate_net_worth(assets: Sequence[Asset], liabilities: Sequence[Liability]) -> NetWorthSummary:
    """
    Net worth = sum of asset values - sum of remaining liability amounts.

    All amounts are assumed to be in the display currency already.
    """
    asset_amounts: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for asset in assets:
        asset_amounts[AssetCategory(asset.category).value] += asset.current_value

    liability_amounts: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for liability in liabilities:
        liability_amounts[LiabilityCategory(liability.category).value] += liability.remaining_amount

    total_assets = sum(asset_amounts.values(), ZERO)
    total_liabilities = sum(liability_amounts.values(), ZERO)
    monthly_payments = sum((l.monthly_payment for l in liabilities if l.monthly_payment is not None), ZERO)

    return NetWorthSummary(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=total_assets - total_liabilities,
        assets_by_category=_by_category(asset_amounts, AssetCategory),
        liabilities_by_category=_by_category(liability_amounts, LiabilityCategory),
        monthly_debt_payments=monthly_payments,
    )
