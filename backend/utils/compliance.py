"""
MRL compliance classification.

A treatment's measured residue level (parts per billion) is mapped to a
compliance status once, when the record is created. The stored status is never
re-evaluated afterwards.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from models.treatment_records import ComplianceStatus

# Upper bounds (exclusive) in ppb
WARNING_THRESHOLD_PPB = Decimal("50")
VIOLATION_THRESHOLD_PPB = Decimal("100")

MrlInput = Union[Decimal, int, float, str, None]


class InvalidMrlLevel(ValueError):
    """Raised for a residue level that is a number but outside the valid domain."""


def parse_mrl_level(mrl_level: MrlInput) -> Optional[Decimal]:
    """
    Convert a raw residue measurement to a Decimal.

    Returns None when the value is absent or cannot be read as a finite number.
    Floats go through str() so 49.99 stays 49.99 instead of its binary expansion.
    """
    if mrl_level is None or isinstance(mrl_level, bool):
        return None
    if isinstance(mrl_level, str):
        mrl_level = mrl_level.strip()
        if not mrl_level:
            return None
    try:
        value = Decimal(str(mrl_level)) if not isinstance(mrl_level, Decimal) else mrl_level
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def classify_compliance(mrl_level: MrlInput, supplied_status: Optional[ComplianceStatus] = None) -> ComplianceStatus:
    """
    Determine the compliance status of a new treatment record.

    Args:
        mrl_level: Measured residue in ppb, or None when no lab result exists yet.
        supplied_status: Status given by the caller; used when there is no usable measurement.

    Returns:
        compliant below 50 ppb, warning from 50 up to 100 ppb, violation from 100 ppb.
        Without a usable measurement, the supplied status (pending if none).

    Raises:
        InvalidMrlLevel: if the measurement is negative.
    """
    fallback = supplied_status or ComplianceStatus.PENDING
    value = parse_mrl_level(mrl_level)
    if value is None:
        return fallback
    if value < 0:
        raise InvalidMrlLevel(f"MRL level cannot be negative: {value}")

    if value < WARNING_THRESHOLD_PPB:
        return ComplianceStatus.COMPLIANT
    elif value < VIOLATION_THRESHOLD_PPB:
        return ComplianceStatus.WARNING
    return ComplianceStatus.VIOLATION
