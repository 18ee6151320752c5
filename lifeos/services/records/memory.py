"""
In-memory record source.

Backs the tests and any host that already holds records in memory.
Identities are matched case-insensitively, the way emails are.
"""

from collections import defaultdict
from datetime import date
from typing import Optional

from lifeos.models.finance import (
    ExpenseRecord,
    IncomeRecord,
    InvestmentRecord,
    TargetAsset,
)
from lifeos.models.health import DailyHealthInput
from lifeos.models.psychology import DailyPsychologyInput
from lifeos.services.records.interface import NotFoundError, RecordSourceInterface


def _normalize(identity: str) -> str:
    return identity.strip().lower()


def _in_range(day: date, date_from: Optional[date], date_to: Optional[date]) -> bool:
    if date_from is not None and day < date_from:
        return False
    if date_to is not None and day > date_to:
        return False
    return True


class _UserRecords:
    def __init__(self):
        self.health: list[DailyHealthInput] = []
        self.psychology: list[DailyPsychologyInput] = []
        self.incomes: list[IncomeRecord] = []
        self.expenses: list[ExpenseRecord] = []
        self.investments: list[InvestmentRecord] = []
        self.targets: list[TargetAsset] = []


class InMemoryRecordSource(RecordSourceInterface):
    """
    Dictionary-backed RecordSourceInterface.

    Unknown identities raise NotFoundError when `strict` is set;
    otherwise they simply have no records.
    """

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._users: dict[str, _UserRecords] = defaultdict(_UserRecords)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add_health_input(self, identity: str, record: DailyHealthInput) -> None:
        self._users[_normalize(identity)].health.append(record)

    def add_psychology_input(self, identity: str, record: DailyPsychologyInput) -> None:
        self._users[_normalize(identity)].psychology.append(record)

    def add_income(self, identity: str, record: IncomeRecord) -> None:
        self._users[_normalize(identity)].incomes.append(record)

    def add_expense(self, identity: str, record: ExpenseRecord) -> None:
        self._users[_normalize(identity)].expenses.append(record)

    def add_investment(self, identity: str, record: InvestmentRecord) -> None:
        self._users[_normalize(identity)].investments.append(record)

    def replace_investment(self, identity: str, record: InvestmentRecord) -> None:
        """Swap in an updated investment (e.g. after a claim) by id."""
        records = self._get(identity).investments
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return
        raise NotFoundError(f"Investment {record.id} not found")

    def add_target_asset(self, identity: str, target: TargetAsset) -> None:
        self._users[_normalize(identity)].targets.append(target)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _get(self, identity: str) -> _UserRecords:
        key = _normalize(identity)
        if key not in self._users:
            if self._strict:
                raise NotFoundError(f"No records for {identity}")
            return _UserRecords()
        return self._users[key]

    async def fetch_health_inputs(self, identity, date_from=None, date_to=None):
        records = self._get(identity).health
        return sorted(
            (r for r in records if _in_range(r.date, date_from, date_to)),
            key=lambda r: r.date,
        )

    async def fetch_psychology_inputs(self, identity, date_from=None, date_to=None):
        records = self._get(identity).psychology
        return sorted(
            (r for r in records if _in_range(r.date, date_from, date_to)),
            key=lambda r: r.date,
        )

    async def fetch_incomes(self, identity, date_from=None, date_to=None):
        return [
            r for r in self._get(identity).incomes
            if _in_range(r.date, date_from, date_to)
        ]

    async def fetch_expenses(self, identity, date_from=None, date_to=None):
        return [
            r for r in self._get(identity).expenses
            if _in_range(r.date, date_from, date_to)
        ]

    async def fetch_investments(self, identity, date_from=None, date_to=None):
        return [
            r for r in self._get(identity).investments
            if _in_range(r.date, date_from, date_to)
            or (r.claim_date is not None and _in_range(r.claim_date, date_from, date_to))
        ]

    async def fetch_target_assets(self, identity):
        return list(self._get(identity).targets)
