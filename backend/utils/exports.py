import csv
from io import BytesIO
from typing import Sequence, Tuple

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

# (column header, TreatmentRecord attribute)
EXPORT_COLUMNS = [
    ("Date", "administered_date"),
    ("Medicine Name", "medicine_name"),
    ("Antimicrobial Type", "antimicrobial_type"),
    ("Dosage", "dosage"),
    ("Unit", "unit"),
    ("Administered By", "administered_by"),
    ("Withdrawal Period (Days)", "withdrawal_period_days"),
    ("Withdrawal End Date", "withdrawal_end_date"),
    ("MRL Level (ppb)", "mrl_level"),
    ("Compliance Status", "compliance_status"),
    ("Purpose", "purpose_of_treatment"),
]

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_NAME = "Treatment Records"


def _cell(record, attribute):
    value = getattr(record, attribute)
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):  # enum
        return value.value
    return str(value)


def treatments_to_dataframe(treatments: Sequence) -> pd.DataFrame:
    rows = [[_cell(t, attribute) for _, attribute in EXPORT_COLUMNS] for t in treatments]
    return pd.DataFrame(rows, columns=[header for header, _ in EXPORT_COLUMNS])


def export_treatments(treatments: Sequence, file_format: str = "csv") -> Tuple[BytesIO, str]:
    """Render treatment records as a CSV or XLSX file. Returns the buffer and its media type."""
    df = treatments_to_dataframe(treatments)
    output = BytesIO()

    if file_format == "xlsx":
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
            ws = writer.sheets[SHEET_NAME]
            header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
            for col_idx, (header, _) in enumerate(EXPORT_COLUMNS, start=1):
                cell = ws.cell(row=1, column=col_idx)
                cell.font = Font(bold=True)
                cell.fill = header_fill
                ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(header) + 2)
        media_type = XLSX_MEDIA_TYPE
    else:
        output.write(df.to_csv(index=False, quoting=csv.QUOTE_ALL).encode("utf-8"))
        media_type = CSV_MEDIA_TYPE

    output.seek(0)
    return output, media_type
