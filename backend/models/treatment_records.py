from sqlalchemy import Column, Integer, Numeric, String, Text, Date, Enum
from database import Base
import enum
import uuid


class ComplianceStatus(enum.Enum):
    COMPLIANT = "compliant"
    WARNING = "warning"
    VIOLATION = "violation"
    PENDING = "pending"


class TreatmentRecord(Base):
    __tablename__ = "treatment_records"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Weak references: lookups only, no ownership
    animal_id = Column(String, nullable=False, index=True)
    farm_id = Column(String, nullable=False, index=True)
    recorded_by = Column(String, nullable=False)

    medicine_name = Column(String, nullable=False)
    antimicrobial_type = Column(String, nullable=False)  # penicillin, tetracycline, sulfonamide, ...
    dosage = Column(String, nullable=False)
    unit = Column(String, nullable=False)  # mg, ml, g, ...
    administered_by = Column(String, nullable=False)
    administered_date = Column(Date, nullable=False)
    purpose_of_treatment = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)

    withdrawal_period_days = Column(Integer, nullable=False)
    withdrawal_end_date = Column(Date, nullable=False)
    mrl_level = Column(Numeric, nullable=True)  # measured residue, ppb
    compliance_status = Column(Enum(ComplianceStatus), nullable=False, default=ComplianceStatus.PENDING)
