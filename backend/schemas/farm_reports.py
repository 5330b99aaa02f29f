from typing import Optional
from datetime import datetime
from pydantic import Field
from models.farm_reports import ReportFileType, ReportType
from schemas.common import CamelModel


class FarmReportBase(CamelModel):
    farm_id: str
    file_name: str = Field(min_length=1)
    file_type: ReportFileType
    file_size: int = Field(ge=0)
    report_type: ReportType
    description: Optional[str] = None


class FarmReportCreate(FarmReportBase):
    uploaded_by: Optional[str] = None


class FarmReport(FarmReportBase):
    id: str
    uploaded_by: str
    uploaded_at: datetime
