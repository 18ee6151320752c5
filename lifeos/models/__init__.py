"""
Data Models Package

This package contains all Pydantic models used by the LifeOS engine.
All data flowing through the engine must conform to these schemas.
"""

from lifeos.models.avatar import (
    AggregatedMetrics,
    Alert,
    AlertSeverity,
    AvatarState,
    AvatarStatus,
    AxisAdjustment,
    FinanceMetrics,
    HealthMetrics,
    PsychologyMetrics,
)
from lifeos.models.dashboard import DashboardReport
from lifeos.models.finance import (
    CurrencySnapshot,
    ExchangeRateData,
    ExpenseRecord,
    ExpenseTag,
    IncomeCategory,
    IncomeRecord,
    InvestmentRecord,
    InvestmentStatus,
    NetWorthResult,
    NetWorthSnapshot,
    NetWorthSummary,
    RateSource,
    TargetAsset,
    TargetAssetCategory,
    TargetProgress,
)
from lifeos.models.health import (
    DailyHealthInput,
    HealthScoreBreakdown,
    IllnessStatus,
    MealQuality,
    NutritionScore,
    ProcessedFoodLevel,
    WaterIntake,
)
from lifeos.models.psychology import (
    DailyPsychologyInput,
    FatigueLevel,
    MentalScoreBreakdown,
    MotivationLevel,
    StressLevel,
)

__all__ = [
    # Health models
    "DailyHealthInput",
    "HealthScoreBreakdown",
    "IllnessStatus",
    "MealQuality",
    "NutritionScore",
    "ProcessedFoodLevel",
    "WaterIntake",
    # Psychology models
    "DailyPsychologyInput",
    "FatigueLevel",
    "MentalScoreBreakdown",
    "MotivationLevel",
    "StressLevel",
    # Finance models
    "CurrencySnapshot",
    "ExchangeRateData",
    "ExpenseRecord",
    "ExpenseTag",
    "IncomeCategory",
    "IncomeRecord",
    "InvestmentRecord",
    "InvestmentStatus",
    "NetWorthResult",
    "NetWorthSnapshot",
    "NetWorthSummary",
    "RateSource",
    "TargetAsset",
    "TargetAssetCategory",
    "TargetProgress",
    # Avatar models
    "AggregatedMetrics",
    "Alert",
    "AlertSeverity",
    "AvatarState",
    "AvatarStatus",
    "AxisAdjustment",
    "FinanceMetrics",
    "HealthMetrics",
    "PsychologyMetrics",
    # Dashboard
    "DashboardReport",
]
