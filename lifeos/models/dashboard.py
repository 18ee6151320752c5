"""Dashboard report returned by the composition root."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from lifeos.models.avatar import AggregatedMetrics, Alert, AvatarState
from lifeos.models.finance import ExchangeRateData, NetWorthSummary


class DashboardReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: str
    as_of: dt.date
    metrics: AggregatedMetrics
    avatar: AvatarState
    alerts: list[Alert] = Field(default_factory=list)
    net_worth: NetWorthSummary
    exchange_rate: ExchangeRateData
