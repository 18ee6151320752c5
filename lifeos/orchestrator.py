"""
Main Orchestrator for LifeOS

This module ties the pure engine to its two collaborators (the record
source and the exchange rate service) and defines the flows for:
1. Dashboard (fetch -> aggregate -> avatar + alerts + net worth)
2. Entries (fetch rate once -> snapshot it into a new money record)

DESIGN DECISION: The orchestrator is the only place that performs I/O.
Everything it calls below lifeos.scoring, lifeos.finance, lifeos.avatar
and lifeos.aggregation is a pure function of its inputs.

Record source failures are logged and re-raised; the rate service
never raises, a degraded rate is only logged.
"""

import asyncio
import datetime as dt
from typing import Optional
from uuid import UUID

from lifeos.aggregation import build_aggregated_metrics, net_worth_as_of, window_start
from lifeos.audit import EngineAuditLogger, create_correlation_id
from lifeos.avatar import calculate_avatar_state, generate_alerts
from lifeos.config import Settings, get_settings
from lifeos.finance import (
    build_expense,
    build_income,
    build_investment,
    build_target_progress,
    calculate_net_worth,
    claim_investment,
)
from lifeos.models.dashboard import DashboardReport
from lifeos.models.finance import (
    ExchangeRateData,
    ExpenseRecord,
    ExpenseTag,
    IncomeCategory,
    IncomeRecord,
    InvestmentRecord,
    NetWorthResult,
    TargetProgress,
)
from lifeos.numeric import Number
from lifeos.services.currency import ExchangeRateService
from lifeos.services.currency.exchange_rate import Clock, utc_now
from lifeos.services.records import (
    InMemoryRecordSource,
    RecordSourceError,
    RecordSourceInterface,
)


class DashboardFlow:
    """
    Builds the dashboard for one identity.

    Flow:
    1. Fetch health and psychology logs for the window
    2. Fetch the full money history up to as_of (net worth needs it)
    3. Aggregate -> avatar state + alerts
    4. Attach net worth and the current rate
    """

    def __init__(
        self,
        record_source: RecordSourceInterface,
        rate_service: Optional[ExchangeRateService] = None,
        audit_logger: Optional[EngineAuditLogger] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._records = record_source
        self._rates = rate_service or ExchangeRateService(self._settings.exchange_rate)
        self._audit_logger = audit_logger or EngineAuditLogger()

    async def _get_rate(self, correlation_id: UUID) -> ExchangeRateData:
        rate = await self._rates.get_rate()
        if rate.is_degraded:
            self._audit_logger.log_exchange_rate_degraded(
                source=rate.source.value,
                rate=str(rate.rate),
                correlation_id=correlation_id,
            )
        return rate

    async def _fetch(self, identity: str, correlation_id: UUID, *fetches):
        try:
            return await asyncio.gather(*fetches)
        except RecordSourceError as e:
            self._audit_logger.log_record_source_failed(
                identity=identity,
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

    async def build_dashboard(
        self,
        identity: str,
        as_of: Optional[dt.date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> DashboardReport:
        """
        Aggregate the window ending at `as_of` (default: today).

        Raises:
            RecordSourceError: If the record source fails
        """
        correlation_id = correlation_id or create_correlation_id()
        as_of = as_of or dt.date.today()
        window_days = self._settings.app.aggregation_window_days
        start = window_start(as_of, window_days)

        health, psychology, incomes, expenses, investments = await self._fetch(
            identity,
            correlation_id,
            self._records.fetch_health_inputs(identity, start, as_of),
            self._records.fetch_psychology_inputs(identity, start, as_of),
            self._records.fetch_incomes(identity, None, as_of),
            self._records.fetch_expenses(identity, None, as_of),
            self._records.fetch_investments(identity, None, as_of),
        )

        metrics = build_aggregated_metrics(
            health_inputs=health,
            psychology_inputs=psychology,
            incomes=incomes,
            expenses=expenses,
            investments=investments,
            as_of=as_of,
            window_days=window_days,
            settings=self._settings.scoring,
        )
        avatar = calculate_avatar_state(metrics)
        alerts = generate_alerts(metrics)
        net_worth = net_worth_as_of(incomes, expenses, investments, as_of)
        rate = await self._get_rate(correlation_id)

        self._audit_logger.log_dashboard_built(
            identity=identity,
            status=avatar.status.value,
            alert_count=len(alerts),
            correlation_id=correlation_id,
        )

        return DashboardReport(
            identity=identity,
            as_of=as_of,
            metrics=metrics,
            avatar=avatar,
            alerts=alerts,
            net_worth=net_worth.summary,
            exchange_rate=rate,
        )

    async def build_net_worth(
        self,
        identity: str,
        correlation_id: Optional[UUID] = None,
    ) -> NetWorthResult:
        """Net worth over the identity's full history."""
        correlation_id = correlation_id or create_correlation_id()

        incomes, expenses, investments = await self._fetch(
            identity,
            correlation_id,
            self._records.fetch_incomes(identity),
            self._records.fetch_expenses(identity),
            self._records.fetch_investments(identity),
        )
        result = calculate_net_worth(incomes, expenses, investments)

        self._audit_logger.log_net_worth_computed(
            identity=identity,
            snapshot_count=len(result.snapshots),
            current_try=str(result.summary.current_try),
            correlation_id=correlation_id,
        )
        return result

    async def build_target_progress(
        self,
        identity: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[TargetProgress]:
        correlation_id = correlation_id or create_correlation_id()
        (targets,) = await self._fetch(
            identity,
            correlation_id,
            self._records.fetch_target_assets(identity),
        )
        if not targets:
            return []
        net_worth = await self.build_net_worth(identity, correlation_id)
        return [build_target_progress(target, net_worth.summary) for target in targets]


class EntryFlow:
    """
    Prepares new money records.

    Each entry fetches the current rate exactly once and snapshots it
    into the record. Persisting the record is the caller's concern.
    """

    def __init__(
        self,
        rate_service: Optional[ExchangeRateService] = None,
        audit_logger: Optional[EngineAuditLogger] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        settings = settings or get_settings()
        self._rates = rate_service or ExchangeRateService(settings.exchange_rate)
        self._audit_logger = audit_logger or EngineAuditLogger()
        self._clock = clock or utc_now

    def _log(self, entry_type: str, amount_try, rate: ExchangeRateData, correlation_id) -> None:
        self._audit_logger.log_entry_prepared(
            entry_type=entry_type,
            amount_try=str(amount_try),
            rate=str(rate.rate),
            correlation_id=correlation_id,
        )

    async def prepare_income(
        self,
        amount_try: Number,
        date: dt.date,
        category=IncomeCategory.REGULAR,
        tag: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> IncomeRecord:
        rate = await self._rates.get_rate()
        record = build_income(amount_try, rate, date, category=category, tag=tag)
        self._log("income", record.amount_try, rate, correlation_id)
        return record

    async def prepare_expense(
        self,
        amount_try: Number,
        date: dt.date,
        tag: Optional[ExpenseTag] = None,
        correlation_id: Optional[UUID] = None,
    ) -> ExpenseRecord:
        rate = await self._rates.get_rate()
        record = build_expense(amount_try, rate, date, tag=tag)
        self._log("expense", record.amount_try, rate, correlation_id)
        return record

    async def prepare_investment(
        self,
        invested_try: Number,
        date: dt.date,
        investment_type: str = "other",
        correlation_id: Optional[UUID] = None,
    ) -> InvestmentRecord:
        rate = await self._rates.get_rate()
        record = build_investment(invested_try, rate, date, investment_type=investment_type)
        self._log("investment", record.invested_try, rate, correlation_id)
        return record

    async def prepare_claim(
        self,
        investment: InvestmentRecord,
        realized_pl_try: Number,
        claimed_at: Optional[dt.datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> InvestmentRecord:
        """
        Claim an investment at `claimed_at` (default: the flow clock's now).

        Raises:
            InvestmentAlreadyClaimedError: If the investment is already claimed
        """
        claimed_at = claimed_at or self._clock()
        rate = await self._rates.get_rate()
        record = claim_investment(investment, realized_pl_try, rate, claimed_at=claimed_at)
        self._log("claim", record.realized_pl_try, rate, correlation_id)
        return record


def create_app_components(
    record_source: Optional[RecordSourceInterface] = None,
    settings: Optional[Settings] = None,
) -> tuple[DashboardFlow, EntryFlow]:
    """
    Factory function to create the application flows.

    Both flows share one rate service, so they share its cache.

    Args:
        record_source: Where records are read from. Defaults to an
                       empty in-memory source.
        settings: Defaults to the process-wide settings.

    Returns:
        (dashboard_flow, entry_flow)
    """
    settings = settings or get_settings()
    record_source = record_source or InMemoryRecordSource()
    audit_logger = EngineAuditLogger()
    rate_service = ExchangeRateService(settings.exchange_rate)

    dashboard_flow = DashboardFlow(
        record_source=record_source,
        rate_service=rate_service,
        audit_logger=audit_logger,
        settings=settings,
    )
    entry_flow = EntryFlow(
        rate_service=rate_service,
        audit_logger=audit_logger,
        settings=settings,
    )
    return dashboard_flow, entry_flow
