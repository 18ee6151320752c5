"""
Abstract Record Source Interface

DESIGN DECISION: The engine never owns persistence. Whoever hosts it
supplies an implementation of this interface, and the flows in
lifeos.orchestrator fetch everything they need through it.

All methods take an identity (the user's email) and an optional
inclusive date range. Implementations must return records whose
primary date falls inside the range; for investments a record also
qualifies when its claim date falls inside the range, because the
claim is an event of its own.
"""

from abc import ABC, abstractmethod
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


class RecordSourceInterface(ABC):
    """
    Read-only access to a user's tracked records.

    Raises:
        RecordSourceError: When the backend cannot be read
        NotFoundError: When the identity is unknown
    """

    @abstractmethod
    async def fetch_health_inputs(
        self,
        identity: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[DailyHealthInput]:
        """Daily health logs, oldest first."""
        pass

    @abstractmethod
    async def fetch_psychology_inputs(
        self,
        identity: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[DailyPsychologyInput]:
        """Daily psychology logs, oldest first."""
        pass

    @abstractmethod
    async def fetch_incomes(
        self,
        identity: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[IncomeRecord]:
        pass

    @abstractmethod
    async def fetch_expenses(
        self,
        identity: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[ExpenseRecord]:
        pass

    @abstractmethod
    async def fetch_investments(
        self,
        identity: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[InvestmentRecord]:
        """
        Investments made or claimed in the range.

        Args:
            identity: User email
            date_from: Start of the range (inclusive), None for unbounded
            date_to: End of the range (inclusive), None for unbounded

        Returns:
            Matching investments in creation order
        """
        pass

    @abstractmethod
    async def fetch_target_assets(self, identity: str) -> list[TargetAsset]:
        pass


class RecordSourceError(Exception):
    """Base exception for record source operations."""
    pass


class NotFoundError(RecordSourceError):
    """No records exist for the requested identity."""
    pass
