from typing import List
from schemas.common import CamelModel
from schemas.treatment_records import TreatmentRecord


class DashboardStats(CamelModel):
    total_animals: int
    active_treatments: int
    compliance_rate: int
    pending_reports: int
    violation_count: int
    warning_count: int


class TrendPoint(CamelModel):
    month: str  # "Jan '25"
    treatments: int


class ComplianceSlice(CamelModel):
    name: str
    value: int
    color: str


class UsersByRole(CamelModel):
    farmers: int
    inspectors: int
    admins: int


class SystemStats(CamelModel):
    total_users: int
    total_farms: int
    total_animals: int
    total_treatments: int
    active_violations: int
    active_warnings: int
    users_by_role: UsersByRole


class CriticalTreatments(CamelModel):
    total_treatments: int
    violation_count: int
    warning_count: int
    treatments: List[TreatmentRecord]
