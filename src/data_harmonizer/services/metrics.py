from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from ..harmonize.dates import parse_display_date
from ..harmonize.tokenizer import cell_text
from ..models.dashboard_metrics import DashboardMetrics, ForecastMonth, RenewalForecast, WorkforceSplit
from ..models.processed_data import DataRow

"""Dashboard metrics over harmonized rows.

Relies on two structural conventions of harmonized data:
- a column whose name contains ``(Date)`` is the expiry column,
- the marker ``he has an escape report`` anywhere in a row flags an escape.

The reference date ("today") is always passed in by the caller.
"""

__all__ = [
    "DATE_COLUMN_MARKER",
    "ESCAPE_MARKER",
    "extract_dashboard_metrics",
    "active_records",
    "split_workforce",
    "renewal_forecast",
    "health_index",
    "risk_density",
]

DATE_COLUMN_MARKER = "(Date)"
ESCAPE_MARKER = "he has an escape report"
UNSPECIFIED_NATIONALITY = "Unspecified"
UNKNOWN_STATUS = "Unknown"

MONTH_LABELS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
_JOB_KEYWORDS = ("job", "description", "designation")
_MOTORCYCLE_KEYWORDS = ("motorcycle", "bike", "motorcyclist")

CRITICAL_LOAD_FACTOR = 1.5
FORECAST_CRITICAL = "CRITICAL"
FORECAST_ACTIVE = "ACTIVE"
FORECAST_STABLE = "STABLE"


def _find_key(row: DataRow, *needles: str, lower: bool = True) -> str | None:
    for key in row:
        name = key.lower() if lower else key
        if any(n in name for n in needles):
            return key
    return None


def _bump(counter: dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def has_escape_report(row: DataRow) -> bool:
    return any(ESCAPE_MARKER in cell_text(v, strip=False).lower() for v in row.values())


def expiry_date(row: DataRow) -> date | None:
    """Date held by the first ``(Date)`` column of ``row``, if any parses."""
    key = _find_key(row, DATE_COLUMN_MARKER, lower=False)
    if key is None:
        return None
    return parse_display_date(cell_text(row.get(key)))


def extract_dashboard_metrics(rows: Sequence[DataRow], today: date) -> DashboardMetrics:
    """Single pass over ``rows`` computing counters, breakdowns and drill-downs.

    A row dated exactly ``today`` is active, not expired. Missing columns only
    skip the matching breakdown; nothing here raises on cell content.
    """
    escape_count = expired_count = active_count = upcoming_count = 0
    nationality: dict[str, int] = {}
    nationality_escape: dict[str, int] = {}
    nationality_expired: dict[str, int] = {}
    status: dict[str, int] = {}
    monthly_renewals: dict[str, int] = {}
    monthly_escapes: dict[str, int] = {}
    escape_records: list[DataRow] = []
    expired_records: list[DataRow] = []
    upcoming_records: list[DataRow] = []

    for row in rows:
        nat_key = _find_key(row, "nationality")
        nat = (cell_text(row.get(nat_key)) if nat_key else "") or UNSPECIFIED_NATIONALITY
        _bump(nationality, nat)

        escaped = has_escape_report(row)
        if escaped:
            escape_count += 1
            escape_records.append(row)
            _bump(nationality_escape, nat)

        expiry = expiry_date(row)
        if expiry is not None:
            label = month_key(expiry)
            _bump(monthly_renewals, label)
            if escaped:
                _bump(monthly_escapes, label)
            if expiry < today:
                expired_count += 1
                expired_records.append(row)
                _bump(nationality_expired, nat)
            else:
                active_count += 1
                if (expiry.year, expiry.month) == (today.year, today.month):
                    upcoming_count += 1
                    upcoming_records.append(row)

        status_key = _find_key(row, "status", "card type")
        if status_key:
            _bump(status, cell_text(row.get(status_key)) or UNKNOWN_STATUS)

    return DashboardMetrics(
        total=len(rows),
        escape_count=escape_count,
        expired_card_count=expired_count,
        active_count=active_count,
        upcoming_renewals=upcoming_count,
        nationality_data=nationality,
        nationality_escape_data=nationality_escape,
        nationality_expired_data=nationality_expired,
        status_data=status,
        monthly_renewals=monthly_renewals,
        monthly_escapes=monthly_escapes,
        escape_records=escape_records,
        expired_records=expired_records,
        upcoming_records=upcoming_records,
    )


def active_records(rows: Sequence[DataRow], metrics: DashboardMetrics) -> list[DataRow]:
    """Rows that are not in the expired drill-down (compared by identity)."""
    expired_ids = {id(r) for r in metrics.expired_records}
    return [r for r in rows if id(r) not in expired_ids]


def split_workforce(rows: Sequence[DataRow]) -> WorkforceSplit:
    """Separate motorcyclists from staff & support by the job column of the first row."""
    job_key = _find_key(rows[0], *_JOB_KEYWORDS) if rows else None
    motorcyclist: list[DataRow] = []
    staff_support: list[DataRow] = []
    for row in rows:
        job = cell_text(row.get(job_key)).lower() if job_key else ""
        if any(k in job for k in _MOTORCYCLE_KEYWORDS):
            motorcyclist.append(row)
        else:
            staff_support.append(row)
    return WorkforceSplit(motorcyclist=motorcyclist, staff_support=staff_support)


def renewal_forecast(metrics: DashboardMetrics, today: date, months: int = 6) -> RenewalForecast:
    """Renewal and escape cohorts for the current month and the ``months - 1`` following.

    Each month carries its load relative to the busiest month (``intensity``)
    and a status: CRITICAL above 1.5x the window average, ACTIVE with any
    renewals, STABLE otherwise.
    """
    window: list[tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(months):
        window.append((year, month))
        month += 1
        if month > 12:
            month = 1
            year += 1

    keys = [f"{y:04d}-{m:02d}" for y, m in window]
    counts = [metrics.monthly_renewals.get(key, 0) for key in keys]
    total = sum(counts)
    peak = max(counts, default=0) or 1
    critical_above = total / max(months, 1) * CRITICAL_LOAD_FACTOR
    forecast: list[ForecastMonth] = []
    for key, (key_year, key_month), count in zip(keys, window, counts):
        if count > critical_above:
            status = FORECAST_CRITICAL
        elif count > 0:
            status = FORECAST_ACTIVE
        else:
            status = FORECAST_STABLE
        forecast.append(
            ForecastMonth(
                key=key,
                month=MONTH_LABELS[key_month - 1],
                year=key_year,
                count=count,
                escape_count=metrics.monthly_escapes.get(key, 0),
                intensity=round(count / peak * 100, 1),
                status=status,
            )
        )
    return RenewalForecast(months=forecast, total_projected=total)


def health_index(metrics: DashboardMetrics) -> float:
    """Share of rows neither expired nor escaped, in percent (one decimal)."""
    if not metrics.total:
        return 0.0
    healthy = metrics.total - metrics.expired_card_count - metrics.escape_count
    return round(healthy / metrics.total * 100, 1)


def risk_density(metrics: DashboardMetrics) -> int:
    return metrics.expired_card_count + metrics.escape_count
