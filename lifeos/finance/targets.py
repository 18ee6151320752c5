"""Progress of net worth towards target assets."""

from decimal import Decimal

from lifeos.models.finance import NetWorthSummary, TargetAsset, TargetProgress
from lifeos.numeric import Number, clamp, to_decimal


def calculate_target_progress(net_worth_try: Number, target_value_try: Number) -> float:
    """
    Percent of the target already covered by net worth, 0-100.

    Negative net worth counts as 0; a non-positive target yields 0.
    """
    target = to_decimal(target_value_try)
    if target <= 0:
        return 0.0
    covered = max(to_decimal(net_worth_try), Decimal("0"))
    return float(clamp(covered / target * 100, Decimal("0"), Decimal("100")))


def build_target_progress(target: TargetAsset, summary: NetWorthSummary) -> TargetProgress:
    remaining = max(target.target_value_try - max(summary.current_try, Decimal("0")), Decimal("0"))
    return TargetProgress(
        target=target,
        progress_percent=calculate_target_progress(summary.current_try, target.target_value_try),
        remaining_try=remaining,
    )
