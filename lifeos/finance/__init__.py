"""Finance package: net worth, money record builders and target progress."""

from lifeos.finance.entries import (
    InvestmentAlreadyClaimedError,
    build_expense,
    build_income,
    build_investment,
    claim_investment,
)
from lifeos.finance.networth import calculate_net_worth
from lifeos.finance.targets import build_target_progress, calculate_target_progress

__all__ = [
    "calculate_net_worth",
    "build_expense",
    "build_income",
    "build_investment",
    "claim_investment",
    "InvestmentAlreadyClaimedError",
    "build_target_progress",
    "calculate_target_progress",
]
