"""CSV and PDF report builders for ward summaries and alerts."""

import csv
from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO, StringIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ward_aqi.schemas.alert import AlertResponse
from ward_aqi.schemas.ward import WardResponse
from ward_aqi.services.trend_prediction import round_half_up

# Prepended so spreadsheet applications detect UTF-8
UTF8_BOM = "\ufeff"

WARD_REPORT_HEADERS = [
    "Ward",
    "AQI",
    "Category",
    "PM2.5 (μg/m³)",
    "PM10 (μg/m³)",
    "NO2 (μg/m³)",
    "SO2 (μg/m³)",
    "CO (mg/m³)",
    "Alerts",
]


@dataclass
class WardReportSummary:
    """Headline figures shown at the top of a ward report."""

    ward_count: int
    average_aqi: int
    total_alerts: int
    worst_ward: WardResponse | None


def summarize_wards(wards: list[WardResponse]) -> WardReportSummary:
    """Average AQI, total alert count and the ward with the highest AQI."""
    if not wards:
        return WardReportSummary(ward_count=0, average_aqi=0, total_alerts=0, worst_ward=None)

    worst = wards[0]
    for ward in wards[1:]:
        if ward.aqi > worst.aqi:
            worst = ward

    return WardReportSummary(
        ward_count=len(wards),
        average_aqi=round_half_up(sum(ward.aqi for ward in wards) / len(wards)),
        total_alerts=sum(len(ward.alerts) for ward in wards),
        worst_ward=worst,
    )


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _short_name(name: str) -> str:
    """Drop the district suffix, e.g. "New Delhi - Lutyens Zone" -> "New Delhi"."""
    return name.split(" - ")[0]


def report_filename(extension: str, today: datetime | None = None) -> str:
    stamp = (today or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    return f"ward_pollution_report_{stamp}.{extension}"


def build_wards_csv(wards: list[WardResponse]) -> str:
    """Ward summary as CSV text, starting with a UTF-8 byte order mark."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(WARD_REPORT_HEADERS)

    for ward in wards:
        writer.writerow([
            ward.name,
            ward.aqi,
            ward.category,
            _format_number(ward.pollutants.pm25),
            _format_number(ward.pollutants.pm10),
            _format_number(ward.pollutants.no2),
            _format_number(ward.pollutants.so2),
            _format_number(ward.pollutants.co),
            "; ".join(ward.alerts) or "None",
        ])

    csv_content = output.getvalue()
    output.close()
    return UTF8_BOM + csv_content


def build_wards_pdf(wards: list[WardResponse], generated_at: datetime | None = None) -> bytes:
    """Ward summary as a PDF document with headline statistics."""
    summary = summarize_wards(wards)
    generated_at = generated_at or datetime.now(timezone.utc)

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4))
    elements: list[Flowable] = []
    styles = getSampleStyleSheet()

    elements.append(Paragraph("<b>Ward Pollution Report</b>", styles["Title"]))
    elements.append(Spacer(1, 0.2 * inch))
    elements.append(
        Paragraph(f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S UTC')}", styles["Normal"])
    )
    elements.append(Spacer(1, 0.3 * inch))

    if summary.worst_ward is not None:
        worst_text = (
            f"{escape(_short_name(summary.worst_ward.name))} (AQI: {summary.worst_ward.aqi})"
        )
    else:
        worst_text = "N/A"
    summary_text = (
        f"<b>Summary Statistics:</b><br/>"
        f"Wards: {summary.ward_count}<br/>"
        f"Average AQI: {summary.average_aqi}<br/>"
        f"Total Alerts: {summary.total_alerts}<br/>"
        f"Worst Ward: {worst_text}"
    )
    elements.append(Paragraph(summary_text, styles["Normal"]))
    elements.append(Spacer(1, 0.3 * inch))

    cell_style = styles["BodyText"]
    table_data: list[list] = [WARD_REPORT_HEADERS]
    for ward in wards:
        alerts = ", ".join(ward.alerts) if ward.alerts else "None"
        table_data.append([
            Paragraph(escape(ward.name), cell_style),
            str(ward.aqi),
            ward.category,
            _format_number(ward.pollutants.pm25),
            _format_number(ward.pollutants.pm10),
            _format_number(ward.pollutants.no2),
            _format_number(ward.pollutants.so2),
            _format_number(ward.pollutants.co),
            Paragraph(escape(alerts), cell_style),
        ])

    col_widths = [
        2.0 * inch, 0.6 * inch, 0.9 * inch, 0.9 * inch, 0.9 * inch,
        0.9 * inch, 0.9 * inch, 0.8 * inch, 2.4 * inch,
    ]
    table = Table(table_data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
        ("BACKGROUND", (0, 1), (-1, -1), colors.beige),
        ("GRID", (0, 0), (-1, -1), 1, colors.black),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
    ]))
    elements.append(table)

    doc.build(elements)
    pdf_content = buffer.getvalue()
    buffer.close()
    return pdf_content


def build_alerts_csv(alerts: list[AlertResponse]) -> str:
    """Active alerts as CSV text."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "ID",
        "Ward ID",
        "Ward",
        "Message",
        "Priority",
        "Type",
        "Current AQI",
        "Created At",
    ])

    for alert in alerts:
        writer.writerow([
            alert.id,
            alert.ward_id,
            alert.ward_name or "",
            alert.message,
            alert.priority,
            alert.type or "",
            alert.current_aqi if alert.current_aqi is not None else "",
            alert.created_at.isoformat() if alert.created_at else "",
        ])

    csv_content = output.getvalue()
    output.close()
    return csv_content
