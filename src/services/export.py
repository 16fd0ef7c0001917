# ===== src/services/export.py =====
"""Formatter export laporan: CSV dan XLSX.

Hanya mengubah format; isi laporan sudah dihitung oleh ``ReportService``.
"""

import csv
import io
from typing import List

from openpyxl import Workbook
from openpyxl.styles import Font

from src.schemas.report import EventReport

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _fix2(value: float) -> str:
    return f"{value:.2f}"


def _summary_rows(report: EventReport, formatted: bool = True) -> List[list]:
    """Baris evaluatee + kategori; rater count & overall hanya di baris pertama."""
    fmt = _fix2 if formatted else (lambda v: round(v, 2))
    rows = []
    for result in report.results:
        division = result.division or ""
        if not result.category_avg:
            rows.append([result.name, division, result.rater_count, fmt(result.overall_avg), "", ""])
            continue

        first = True
        for category, value in result.category_avg.items():
            rows.append([
                result.name,
                division,
                result.rater_count if first else "",
                fmt(result.overall_avg) if first else "",
                category,
                fmt(value),
            ])
            first = False
    return rows


def report_to_csv(report: EventReport) -> str:
    """Render laporan sebagai CSV (baris dipisah CRLF)."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\r\n")
    event = report.event

    writer.writerow(["Event", event.name, "Type", event.type.value, "Period", event.period, "Proker", event.proker or ""])
    writer.writerow(["Evaluatee", "Division", "Rater Count", "Overall Avg", "Category", "Category Avg"])
    writer.writerows(_summary_rows(report))

    writer.writerow([])
    writer.writerow(["Per Indicator"])
    writer.writerow(["Evaluatee", "Division", "Indicator", "Category", "Avg"])
    for result in report.results:
        for indicator in result.indicators:
            writer.writerow([result.name, result.division or "", indicator.name, indicator.category, _fix2(indicator.avg)])

    writer.writerow([])
    writer.writerow(["Feedback (anonymized)"])
    writer.writerow(["Evaluatee", "Division", "Feedback"])
    for result in report.results:
        for feedback in result.feedback:
            writer.writerow([result.name, result.division or "", feedback])

    return output.getvalue()


def report_to_xlsx(report: EventReport) -> bytes:
    """Render laporan sebagai workbook: Summary, Per Indicator, Feedback."""
    wb = Workbook()
    event = report.event
    bold = Font(bold=True)

    ws = wb.active
    ws.title = "Summary"
    ws.append(["Event", event.name])
    ws.append(["Type", event.type.value])
    ws.append(["Period", event.period])
    ws.append(["Proker", event.proker or ""])
    ws.append(["Start", event.start_date.date().isoformat()])
    ws.append(["End", event.end_date.date().isoformat()])
    ws.append([])
    ws.append(["Evaluatee", "Division", "Rater Count", "Overall Avg", "Category", "Category Avg"])
    for cell in ws[ws.max_row]:
        cell.font = bold
    for row in _summary_rows(report, formatted=False):
        ws.append(row)

    ws = wb.create_sheet("Per Indicator")
    ws.append(["Evaluatee", "Division", "Indicator", "Category", "Avg"])
    for cell in ws[1]:
        cell.font = bold
    for result in report.results:
        for indicator in result.indicators:
            ws.append([result.name, result.division or "", indicator.name, indicator.category, round(indicator.avg, 2)])

    ws = wb.create_sheet("Feedback")
    ws.append(["Evaluatee", "Division", "Feedback (anon)"])
    for cell in ws[1]:
        cell.font = bold
    for result in report.results:
        for feedback in result.feedback:
            ws.append([result.name, result.division or "", feedback])

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
