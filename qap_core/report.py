"""
QAP score report assembly and PDF export
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from fpdf import FPDF

from .amenities import AmenityRecord
from .errors import ReportExportError
from .jurisdictions import category_breakdown, score_percentage, total_points
from .locations import Location
from .scorer import ScoreResult

logger = logging.getLogger(__name__)


@dataclass
class QAPReport:
    location: Location
    amenities: List[AmenityRecord]
    result: ScoreResult
    score_percentage: Optional[float]
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def jurisdiction(self) -> str:
        return self.location.state

    @property
    def timestamp(self) -> str:
        return self.generated_at.strftime("%Y-%m-%d %H:%M:%S")

    def percentage_text(self) -> str:
        if self.score_percentage is None:
            return "N/A"
        return f"{self.score_percentage:.2f}%"

    def to_dict(self) -> dict:
        return {
            "state": self.location.state,
            "city": self.location.city,
            "zip_code": self.location.zip_code,
            "address": self.location.address,
            "lat": self.location.lat,
            "lon": self.location.lon,
            "timestamp": self.timestamp,
            "development_location_points": round(self.result.normalized_points, 4),
            "development_location_max_points": self.result.max_points,
            "raw_points": round(self.result.raw_points, 4),
            "terms": {k: round(v, 4) for k, v in self.result.get_term_breakdown().items()},
            "total_points": total_points(self.location.state),
            "score_percentage": (
                round(self.score_percentage, 4) if self.score_percentage is not None else None
            ),
            "amenities": [a.to_dict() for a in self.amenities],
        }


def build_report(location: Location, amenities: List[AmenityRecord], result: ScoreResult,
                 generated_at: Optional[datetime] = None) -> QAPReport:
    percentage = score_percentage(result.normalized_points, total_points(location.state))
    return QAPReport(
        location=location,
        amenities=list(amenities),
        result=result,
        score_percentage=percentage,
        generated_at=generated_at or datetime.now(),
    )


def _latin1(text: object) -> str:
    # core PDF fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


class ReportPDF(FPDF):
    BLUE = (37, 99, 235)
    DARK = (40, 40, 40)
    GRAY = (102, 102, 102)
    LIGHT_BG = (243, 244, 246)
    HEADER_BG = (249, 250, 251)
    RULE = (230, 230, 230)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(*self.GRAY)
        self.cell(0, 10, f"LIHTC QAP Calculator - Page {self.page_no()}/{{nb}}", align="C")

    def section_title(self, title):
        self.set_font("Helvetica", "B", 14)
        self.set_text_color(*self.DARK)
        self.cell(0, 10, _latin1(title), new_x="LMARGIN", new_y="NEXT")
        self.ln(2)

    def key_value_table(self, rows):
        self.set_draw_color(*self.RULE)
        for label, value in rows:
            self.set_font("Helvetica", "B", 10)
            self.cell(40, 8, _latin1(label), border="B")
            self.set_font("Helvetica", "", 10)
            self.cell(0, 8, _latin1(value), border="B", new_x="LMARGIN", new_y="NEXT")
        self.ln(6)

    def table(self, headers, rows, col_widths, aligns):
        self.set_fill_color(*self.HEADER_BG)
        self.set_draw_color(*self.RULE)
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(*self.DARK)
        for i, h in enumerate(headers):
            self.cell(col_widths[i], 8, _latin1(h), border=1, fill=True, align=aligns[i])
        self.ln()

        self.set_font("Helvetica", "", 9)
        for row in rows:
            for i, val in enumerate(row):
                self.cell(col_widths[i], 7, _latin1(val), border=1, align=aligns[i])
            self.ln()
        self.ln(6)

    def score_box(self, percentage_text):
        y = self.get_y()
        self.set_fill_color(*self.LIGHT_BG)
        self.rect(10, y, 190, 32, style="F")
        self.set_xy(10, y + 4)
        self.set_font("Helvetica", "", 11)
        self.set_text_color(*self.DARK)
        self.cell(190, 8, "Your LIHTC QAP Score Percentage", align="C", new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "B", 24)
        self.set_text_color(*self.BLUE)
        self.cell(190, 14, percentage_text, align="C", new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(*self.DARK)
        self.set_y(y + 38)


def render_report_pdf(report: QAPReport) -> bytes:
    pdf = ReportPDF()
    pdf.alias_nb_pages()
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 20)
    pdf.set_text_color(*ReportPDF.DARK)
    pdf.cell(0, 12, "LIHTC QAP Score Report", align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(*ReportPDF.GRAY)
    pdf.cell(0, 6, report.timestamp, align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(8)

    pdf.section_title("Location Information")
    pdf.key_value_table([
        ("Address:", report.location.address),
        ("City:", report.location.city),
        ("State:", report.location.state),
        ("ZIP Code:", report.location.zip_code),
    ])

    pdf.section_title("QAP Score")
    pdf.score_box(report.percentage_text())

    pdf.section_title("Score Breakdown")
    rows = [
        (r["category"], f"{r['max_points']:g}", f"{r['awarded_points']:.2f}", r["data_source"])
        for r in category_breakdown(report.jurisdiction, report.result.normalized_points)
    ]
    rows.append(("Total", f"{total_points(report.jurisdiction):g}", f"{report.result.normalized_points:.2f}", ""))
    pdf.table(
        ["Category", "Max Points", "Awarded", "Data Source"],
        rows,
        col_widths=[95, 25, 25, 45],
        aligns=["L", "R", "R", "L"],
    )

    pdf.section_title("Nearby Amenities")
    if report.amenities:
        pdf.table(
            ["Type", "Name", "Distance (km)"],
            [(a.category.label, a.display_name, f"{a.distance_km:.1f}") for a in report.amenities],
            col_widths=[50, 100, 40],
            aligns=["L", "L", "R"],
        )
    else:
        pdf.set_font("Helvetica", "I", 10)
        pdf.cell(0, 8, "No amenities found near this location.", new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())


def export_report_pdf(report: QAPReport, path: Optional[Union[str, Path]] = None) -> bytes:
    """
    Render the report as PDF, writing it to `path` when given.

    Returns the PDF bytes either way.
    """
    data = render_report_pdf(report)
    if path is not None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise ReportExportError(f"Could not write report to {target}: {e}") from e
        logger.info("Saved QAP report to %s", target)
    return data


def default_report_filename(report: QAPReport) -> str:
    city = report.location.city.replace(" ", "_")
    return f"LIHTC_QAP_Report_{city}_{report.generated_at.strftime('%Y%m%d_%H%M%S')}.pdf"
