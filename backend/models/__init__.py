from models.users import User, UserRole
from models.farms import Farm
from models.animals import Animal, AnimalSpecies, AnimalStatus
from models.treatment_records import TreatmentRecord, ComplianceStatus
from models.farm_reports import FarmReport, ReportFileType, ReportType

__all__ = ['Animal', 'AnimalSpecies', 'AnimalStatus', 'ComplianceStatus', 'Farm', 'FarmReport', 'ReportFileType', 'ReportType', 'TreatmentRecord', 'User', 'UserRole',]
