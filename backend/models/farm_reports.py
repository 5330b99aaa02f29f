from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from database import Base
import enum
import uuid


class ReportFileType(enum.Enum):
    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"


class ReportType(enum.Enum):
    COMPLIANCE = "compliance"
    INSPECTION = "inspection"
    VETERINARY = "veterinary"


class FarmReport(Base):
    __tablename__ = "farm_reports"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    farm_id = Column(String, nullable=False, index=True)
    file_name = Column(String, nullable=False)
    file_type = Column(Enum(ReportFileType), nullable=False)
    file_size = Column(Integer, nullable=False)  # bytes
    uploaded_by = Column(String, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)
    report_type = Column(Enum(ReportType), nullable=False)
    description = Column(Text, nullable=True)
