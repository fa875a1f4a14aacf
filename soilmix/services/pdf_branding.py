"""Branding helpers shared by PDF reports."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from reportlab.lib.colors import HexColor
from reportlab.lib.units import inch

from soilmix.core.config import SOILMIX_COMPANY_NAME, SOILMIX_COMPANY_TAGLINE

BRAND_GREEN = "#16a34a"
BRAND_GRAY = "#6b7280"


@dataclass
class PDFBrandingContext:
    company_name: str = SOILMIX_COMPANY_NAME
    company_tagline: Optional[str] = SOILMIX_COMPANY_TAGLINE
    company_email: Optional[str] = None


def draw_professional_letterhead(canvas, doc, branding: PDFBrandingContext,
                                 report_title: str, folio: Optional[str] = None,
                                 module_color=None) -> None:
    """Draw the company band and report title at the top of a page."""
    color = module_color or HexColor(BRAND_GREEN)
    width, height = doc.pagesize
    top = height - 0.45 * inch

    canvas.saveState()
    canvas.setFillColor(color)
    canvas.rect(0, height - 0.25 * inch, width, 0.25 * inch, stroke=0, fill=1)

    canvas.setFont("Helvetica-Bold", 14)
    canvas.drawString(doc.leftMargin, top - 0.2 * inch, branding.company_name)
    if branding.company_tagline:
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(HexColor(BRAND_GRAY))
        canvas.drawString(doc.leftMargin, top - 0.38 * inch, branding.company_tagline)

    canvas.setFillColor(color)
    canvas.setFont("Helvetica-Bold", 10)
    canvas.drawRightString(width - doc.rightMargin, top - 0.2 * inch, report_title)
    if folio:
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(HexColor(BRAND_GRAY))
        canvas.drawRightString(width - doc.rightMargin, top - 0.38 * inch, f"Folio: {folio}")

    canvas.setStrokeColor(color)
    canvas.setLineWidth(1)
    canvas.line(doc.leftMargin, top - 0.5 * inch, width - doc.rightMargin, top - 0.5 * inch)
    canvas.restoreState()


def draw_professional_footer(canvas, doc, branding: PDFBrandingContext) -> None:
    """Draw the generation date and page number at the bottom of a page."""
    width, _ = doc.pagesize
    canvas.saveState()
    canvas.setFont("Helvetica", 7)
    canvas.setFillColor(HexColor(BRAND_GRAY))
    generated = datetime.now().strftime("%d/%m/%Y %H:%M")
    contact = f" | {branding.company_email}" if branding.company_email else ""
    canvas.drawString(doc.leftMargin, 0.35 * inch, f"{branding.company_name}{contact} | Generated {generated}")
    canvas.drawRightString(width - doc.rightMargin, 0.35 * inch, f"Page {doc.page}")
    canvas.restoreState()
