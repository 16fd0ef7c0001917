"""Tests for CSV and XLSX report rendering."""

import csv
import io
from datetime import datetime

import pytest
from openpyxl import load_workbook

from src.models.enums import EventType
from src.schemas.report import (
    EvaluateeResult, EventReport, IndicatorAverage, ReportEventSummary, ReportIndicator, ReportStats
)
from src.services.export import report_to_csv, report_to_xlsx


@pytest.fixture
def report():
    return EventReport(
        event=ReportEventSummary(
            id="event-1",
            name="Penilaian Q1",
            type=EventType.PERIODIC,
            period="2025/2026",
            start_date=datetime(2025, 3, 1),
            end_date=datetime(2025, 3, 31),
            indicators=[ReportIndicator(id="i1", name="Komunikasi", category="soft")],
        ),
        results=[
            EvaluateeResult(
                evaluatee_id="u1",
                name="Budi",
                division="PSDM",
                rater_count=2,
                overall_avg=4.0,
                category_avg={"soft": 8.0, "hard": 3.5},
                indicators=[IndicatorAverage(id="i1", name="Komunikasi", category="soft", avg=4.0)],
                feedback=['Bagus, tapi "sering" telat', "Tetap semangat"],
            ),
            EvaluateeResult(
                evaluatee_id="u2",
                name="Sari",
                division=None,
                rater_count=1,
                overall_avg=3.333,
                category_avg={},
                indicators=[],
                feedback=[],
            ),
        ],
        stats=ReportStats(total_assignments=4, submitted_count=3, evaluator_count=3, evaluatee_count=2),
    )


class TestCsvExport:

    def test_rows_use_crlf(self, report):
        content = report_to_csv(report)
        assert content.endswith("\r\n")
        assert "\n" not in content.replace("\r\n", "")

    def test_summary_section(self, report):
        rows = list(csv.reader(io.StringIO(report_to_csv(report))))

        assert rows[0][:2] == ["Event", "Penilaian Q1"]
        assert rows[1][0] == "Evaluatee"
        assert rows[2] == ["Budi", "PSDM", "2", "4.00", "soft", "8.00"]
        assert rows[3] == ["Budi", "PSDM", "", "", "hard", "3.50"]
        assert rows[4] == ["Sari", "", "1", "3.33", "", ""]

    def test_feedback_quoted_and_anonymous(self, report):
        content = report_to_csv(report)
        rows = list(csv.reader(io.StringIO(content)))

        start = rows.index(["Feedback (anonymized)"])
        assert rows[start + 2] == ["Budi", "PSDM", 'Bagus, tapi "sering" telat']
        assert '"Bagus, tapi ""sering"" telat"' in content

    def test_per_indicator_section(self, report):
        rows = list(csv.reader(io.StringIO(report_to_csv(report))))
        start = rows.index(["Per Indicator"])
        assert rows[start + 2] == ["Budi", "PSDM", "Komunikasi", "soft", "4.00"]


class TestXlsxExport:

    def test_workbook_sheets(self, report):
        workbook = load_workbook(io.BytesIO(report_to_xlsx(report)))
        assert workbook.sheetnames == ["Summary", "Per Indicator", "Feedback"]

    def test_summary_values(self, report):
        workbook = load_workbook(io.BytesIO(report_to_xlsx(report)))
        rows = list(workbook["Summary"].iter_rows(values_only=True))

        assert rows[0] == ("Event", "Penilaian Q1", None, None, None, None)
        header = rows.index(("Evaluatee", "Division", "Rater Count", "Overall Avg", "Category", "Category Avg"))
        assert rows[header + 1] == ("Budi", "PSDM", 2, 4.0, "soft", 8.0)

    def test_feedback_sheet(self, report):
        workbook = load_workbook(io.BytesIO(report_to_xlsx(report)))
        rows = list(workbook["Feedback"].iter_rows(values_only=True))
        assert len(rows) == 3
        assert rows[2] == ("Budi", "PSDM", "Tetap semangat")
