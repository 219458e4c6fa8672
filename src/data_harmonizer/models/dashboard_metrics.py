from __future__ import annotations

from dataclasses import dataclass, field

from .processed_data import DataRow

"""Dashboard metric models.

All structures are computed fresh from a row set and never mutated afterwards.
Drill-down lists hold the very row objects that were passed in.
"""

__all__ = [
    "DashboardMetrics",
    "ForecastMonth",
    "RenewalForecast",
    "WorkforceSplit",
]


@dataclass(frozen=True)
class DashboardMetrics:
    """Aggregate counters, per-category breakdowns and drill-down row lists."""
    total: int = 0
    escape_count: int = 0
    expired_card_count: int = 0
    active_count: int = 0
    upcoming_renewals: int = 0
    nationality_data: dict[str, int] = field(default_factory=dict)
    nationality_escape_data: dict[str, int] = field(default_factory=dict)
    nationality_expired_data: dict[str, int] = field(default_factory=dict)
    status_data: dict[str, int] = field(default_factory=dict)
    monthly_renewals: dict[str, int] = field(default_factory=dict)  # "YYYY-MM" -> count
    monthly_escapes: dict[str, int] = field(default_factory=dict)  # "YYYY-MM" -> count
    escape_records: list[DataRow] = field(default_factory=list)
    expired_records: list[DataRow] = field(default_factory=list)
    upcoming_records: list[DataRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Counters and breakdowns only (drill-down lists reduced to their sizes)."""
        return {
            "total": self.total,
            "escape_count": self.escape_count,
            "expired_card_count": self.expired_card_count,
            "active_count": self.active_count,
            "upcoming_renewals": self.upcoming_renewals,
            "nationality_data": dict(self.nationality_data),
            "nationality_escape_data": dict(self.nationality_escape_data),
            "nationality_expired_data": dict(self.nationality_expired_data),
            "status_data": dict(self.status_data),
            "monthly_renewals": dict(self.monthly_renewals),
            "monthly_escapes": dict(self.monthly_escapes),
        }


@dataclass(frozen=True)
class ForecastMonth:
    key: str  # YYYY-MM
    month: str  # JAN..DEC
    year: int
    count: int
    escape_count: int
    intensity: float = 0.0  # percent of the busiest month
    status: str = "STABLE"  # CRITICAL | ACTIVE | STABLE


@dataclass(frozen=True)
class RenewalForecast:
    months: list[ForecastMonth] = field(default_factory=list)
    total_projected: int = 0


@dataclass(frozen=True)
class WorkforceSplit:
    motorcyclist: list[DataRow] = field(default_factory=list)
    staff_support: list[DataRow] = field(default_factory=list)
