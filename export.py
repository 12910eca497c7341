import logging
from datetime import datetime

from openpyxl import Workbook

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "nepali_interest_calculations.xlsx"

CALCULATION_COLUMNS = [
    "id", "name", "saved_at", "principal", "interest_rate", "start_date",
    "end_date", "years", "months", "days", "final_amount", "total_interest",
]

BREAKDOWN_COLUMNS = [
    "calculation_id", "period", "starting_principal", "interest",
    "ending_amount", "details",
]


def build_workbook(calculations):
    """Two sheets: one row per saved calculation, one row per ledger entry."""
    wb = Workbook()

    ws_calc = wb.active
    ws_calc.title = "Calculations"
    ws_calc.append(CALCULATION_COLUMNS)

    ws_rows = wb.create_sheet("Breakdown")
    ws_rows.append(BREAKDOWN_COLUMNS)

    for calc in calculations:
        result = calc.result
        ws_calc.append([
            calc.id, calc.name,
            datetime.fromtimestamp(calc.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S"),
            calc.inputs["principal"], calc.inputs["interestRate"],
            calc.inputs["startDate"], calc.inputs["endDate"],
            result.duration.years, result.duration.months, result.duration.days,
            result.final_amount, result.total_interest,
        ])
        for entry in result.breakdown:
            ws_rows.append([
                calc.id, entry.period, entry.starting_principal,
                entry.interest, entry.ending_amount, entry.details,
            ])

    logger.info("Built export workbook with %d calculation(s)", len(calculations))
    return wb
