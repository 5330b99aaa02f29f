"""
Dashboard and report statistics.

Every function here is a pure computation over collections already loaded
from storage. Nothing is cached: callers recompute on each request, so two
calls see whatever snapshot of the records they were given.
"""

from collections import Counter
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from models.treatment_records import ComplianceStatus
from models.users import UserRole
from schemas.dashboard import (
    ComplianceSlice,
    DashboardStats,
    SystemStats,
    TrendPoint,
    UsersByRole,
)
from utils.date_utils import today as current_date
from utils.formatting import format_month_label

TREND_MONTHS = 6

# Fixed display order and chart color tag for each status
DISTRIBUTION_SLICES = [
    (ComplianceStatus.COMPLIANT, "Compliant", "hsl(var(--chart-1))"),
    (ComplianceStatus.WARNING, "Warning", "hsl(var(--chart-4))"),
    (ComplianceStatus.VIOLATION, "Violation", "hsl(var(--destructive))"),
    (ComplianceStatus.PENDING, "Pending", "hsl(var(--muted))"),
]

CRITICAL_STATUSES = (ComplianceStatus.VIOLATION, ComplianceStatus.WARNING)


def status_counts(treatments: Iterable) -> Dict[ComplianceStatus, int]:
    """Number of treatments in each compliance status (every status present, possibly 0)."""
    counter = Counter(t.compliance_status for t in treatments)
    return {status: counter.get(status, 0) for status in ComplianceStatus}


def compliance_rate(compliant: int, total: int) -> int:
    """
    Percentage of compliant treatments, rounded half up to a whole number.

    An empty record set counts as fully compliant (100).
    """
    if total <= 0:
        return 100
    rate = Decimal(compliant) * 100 / Decimal(total)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_stats(animals: Sequence, treatments: Sequence, today: Optional[date] = None) -> DashboardStats:
    """Summary counters for the main dashboard."""
    today = today or current_date()
    counts = status_counts(treatments)

    # A withdrawal period is still running while its end date lies after today
    active_treatments = sum(1 for t in treatments if t.withdrawal_end_date > today)

    return DashboardStats(
        total_animals=len(animals),
        active_treatments=active_treatments,
        compliance_rate=compliance_rate(counts[ComplianceStatus.COMPLIANT], len(treatments)),
        pending_reports=counts[ComplianceStatus.PENDING],
        violation_count=counts[ComplianceStatus.VIOLATION],
        warning_count=counts[ComplianceStatus.WARNING],
    )


def compute_trends(treatments: Sequence, today: Optional[date] = None) -> List[TrendPoint]:
    """
    Treatments administered per calendar month over the last six months.

    The window ends at the current month and is ordered oldest first; months
    without treatments are reported with a count of 0.
    """
    today = today or current_date()
    per_month = Counter((t.administered_date.year, t.administered_date.month) for t in treatments)

    trends = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        month_start = today.replace(day=1) - relativedelta(months=offset)
        key = (month_start.year, month_start.month)
        trends.append(TrendPoint(
            month=format_month_label(*key),
            treatments=per_month.get(key, 0),
        ))
    return trends


def compute_distribution(treatments: Sequence) -> List[ComplianceSlice]:
    """Status breakdown for the compliance pie chart; statuses with no treatments are left out."""
    counts = status_counts(treatments)
    return [
        ComplianceSlice(name=name, value=counts[status], color=color)
        for status, name, color in DISTRIBUTION_SLICES
        if counts[status] > 0
    ]


def compute_system_stats(users: Sequence, farms: Sequence, animals: Sequence, treatments: Sequence) -> SystemStats:
    """System-wide totals for the admin dashboard. No date window is applied."""
    counts = status_counts(treatments)
    roles = Counter(u.role for u in users)

    return SystemStats(
        total_users=len(users),
        total_farms=len(farms),
        total_animals=len(animals),
        total_treatments=len(treatments),
        active_violations=counts[ComplianceStatus.VIOLATION],
        active_warnings=counts[ComplianceStatus.WARNING],
        users_by_role=UsersByRole(
            farmers=roles.get(UserRole.FARMER, 0),
            inspectors=roles.get(UserRole.INSPECTOR, 0),
            admins=roles.get(UserRole.ADMIN, 0),
        ),
    )


def critical_treatments(treatments: Sequence, farms: Sequence, animals: Sequence, search: Optional[str] = None) -> list:
    """
    Treatments in violation or warning, for inspectors and admins.

    `search` is matched case-insensitively against the farm name, the animal
    name and the medicine name.
    """
    farm_names = {f.id: f.name for f in farms}
    animal_names = {a.id: a.name for a in animals}
    term = (search or "").strip().lower()

    result = []
    for t in treatments:
        if t.compliance_status not in CRITICAL_STATUSES:
            continue
        if term:
            haystack = (
                farm_names.get(t.farm_id, "Unknown Farm").lower(),
                animal_names.get(t.animal_id, "Unknown Animal").lower(),
                t.medicine_name.lower(),
            )
            if not any(term in field for field in haystack):
                continue
        result.append(t)
    return result
