"""
Revenue reporting endpoint.
Aggregates expected revenue (revenue events) by month and by funder.
"""
from collections import OrderedDict
from decimal import Decimal
from typing import Optional, List

import csv
import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from concierge.api.deps import get_db
from concierge.core.auth import get_current_user, User
from concierge.models.funder import Funder, RevenueEvent
from concierge.schemas.report import RevenueFunderItem, RevenueMonthPoint, RevenueReportOut

router = APIRouter(prefix="/api/reports", tags=["reports"])

MONTH_PATTERN = r"^\d{4}-\d{2}$"


def _build_revenue_report(
    db: Session,
    start_month: Optional[str],
    end_month: Optional[str],
    lease_id: Optional[str],
) -> RevenueReportOut:
    """Sum revenue events per month and per funder. Month bounds are inclusive."""
    q = db.query(RevenueEvent, Funder.name).outerjoin(Funder, Funder.id == RevenueEvent.funder_id)
    if start_month:
        q = q.filter(RevenueEvent.month >= start_month)
    if end_month:
        q = q.filter(RevenueEvent.month <= end_month)
    if lease_id:
        q = q.filter(RevenueEvent.lease_id == lease_id)

    months = OrderedDict()
    funders = OrderedDict()
    total = Decimal("0.00")

    for event, funder_name in q.order_by(RevenueEvent.month, Funder.name).all():
        amount = Decimal(event.amount)
        total += amount

        point = months.setdefault(event.month, RevenueMonthPoint(month=event.month))
        point.amount += amount
        point.event_count += 1

        item = funders.setdefault(
            event.funder_id,
            RevenueFunderItem(funder_id=event.funder_id, funder_name=funder_name),
        )
        item.amount += amount

    return RevenueReportOut(
        total=total,
        months=list(months.values()),
        funders=sorted(funders.values(), key=lambda f: f.amount, reverse=True),
    )


@router.get("/revenue", response_model=RevenueReportOut)
def get_revenue_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    end_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    lease_id: Optional[str] = Query(None, description="Restrict to one lease"),
):
    """Expected revenue by month and by funder (JSON)."""
    return _build_revenue_report(db, start_month, end_month, lease_id)


# ---------------------------------------------------------------------------
# CSV download
# ---------------------------------------------------------------------------

@router.get("/revenue/csv")
def download_revenue_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    end_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    lease_id: Optional[str] = Query(None, description="Restrict to one lease"),
):
    """Download the revenue report as a CSV file."""
    data = _build_revenue_report(db, start_month, end_month, lease_id)
    buf = io.StringIO()
    writer = csv.writer(buf)

    writer.writerow(["--- Summary ---"])
    writer.writerow(["Total Revenue", "Months", "Funders"])
    writer.writerow([data.total, len(data.months), len(data.funders)])
    writer.writerow([])

    writer.writerow(["--- Revenue by Month ---"])
    writer.writerow(["Month", "Amount", "Events"])
    for m in data.months:
        writer.writerow([m.month, m.amount, m.event_count])
    writer.writerow([])

    writer.writerow(["--- Revenue by Funder ---"])
    writer.writerow(["Funder", "Amount"])
    for f in data.funders:
        writer.writerow([f.funder_name or f.funder_id, f.amount])

    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=revenue.csv"},
    )


# ---------------------------------------------------------------------------
# PDF download
# ---------------------------------------------------------------------------

def _pdf_section_title(pdf, title: str):
    """Add a styled section title to the PDF."""
    pdf.set_font("Helvetica", "B", 12)
    pdf.set_fill_color(41, 128, 185)
    pdf.set_text_color(255, 255, 255)
    pdf.cell(0, 8, f"  {title}", new_x="LMARGIN", new_y="NEXT", fill=True)
    pdf.set_text_color(0, 0, 0)
    pdf.ln(2)


def _pdf_table(pdf, headers: List[str], rows: List[List[str]]):
    """Draw a simple table with alternating row shading."""
    col_w = (pdf.w - pdf.l_margin - pdf.r_margin) / len(headers)

    pdf.set_font("Helvetica", "B", 9)
    pdf.set_fill_color(220, 220, 220)
    for h in headers:
        pdf.cell(col_w, 7, str(h), border=1, fill=True)
    pdf.ln()

    pdf.set_font("Helvetica", "", 9)
    for i, row in enumerate(rows):
        shade = 245 if i % 2 == 0 else 255
        pdf.set_fill_color(shade, shade, shade)
        for val in row:
            pdf.cell(col_w, 6, str(val), border=1, fill=True)
        pdf.ln()
    pdf.ln(4)


@router.get("/revenue/pdf")
def download_revenue_pdf(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    end_month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="YYYY-MM, inclusive"),
    lease_id: Optional[str] = Query(None, description="Restrict to one lease"),
):
    """Download the revenue report as a PDF file."""
    from fpdf import FPDF

    data = _build_revenue_report(db, start_month, end_month, lease_id)
    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, "Expected Revenue", new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.set_font("Helvetica", "", 10)
    subtitle = f"{start_month or 'first month'} to {end_month or 'last month'}"
    if lease_id:
        subtitle += f"  |  Lease: {lease_id}"
    pdf.cell(0, 6, subtitle, new_x="LMARGIN", new_y="NEXT", align="C")
    pdf.ln(6)

    _pdf_section_title(pdf, "Summary")
    _pdf_table(
        pdf,
        ["Total Revenue", "Months", "Funders"],
        [[f"${data.total:,.2f}", len(data.months), len(data.funders)]],
    )

    _pdf_section_title(pdf, "Revenue by Month")
    _pdf_table(
        pdf,
        ["Month", "Amount", "Events"],
        [[m.month, f"${m.amount:,.2f}", m.event_count] for m in data.months],
    )

    _pdf_section_title(pdf, "Revenue by Funder")
    _pdf_table(
        pdf,
        ["Funder", "Amount"],
        [[f.funder_name or f.funder_id, f"${f.amount:,.2f}"] for f in data.funders],
    )

    pdf_bytes = pdf.output()
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=revenue.pdf"},
    )
