MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_month_label(year: int, month: int) -> str:
    """Dashboard label for a calendar month, e.g. (2025, 1) -> "Jan '25"."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} '{year % 100:02d}"
