"""
Soil Mix PDF Report Service.
Generates PDF reports for soil amendment mix recommendations.
"""
import io
from datetime import datetime
from typing import Optional
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.colors import HexColor
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER
import logging

from soilmix.services.pdf_branding import (
    PDFBrandingContext,
    draw_professional_letterhead,
    draw_professional_footer,
)
from soilmix.services.soil_catalog import get_soil_type_info
from soilmix.services.soil_mix_calculator import MixResult, format_numbered_instructions
from soilmix.services.soil_mix_rules import REFERENCE_DEPTH_CM

logger = logging.getLogger(__name__)

SOIL_MIX_COLOR = HexColor("#22c55e")
SECONDARY_COLOR = HexColor("#059669")
TEXT_COLOR = HexColor("#374151")
LIGHT_BG = HexColor("#f0fdf4")
HEADER_BG = HexColor("#d1fae5")
GRID_COLOR = HexColor("#d1d5db")


def create_soil_mix_pdf_report(
    result: MixResult,
    user_name: str = "Grower",
    plot_name: Optional[str] = None,
    branding: Optional[PDFBrandingContext] = None,
) -> bytes:
    """
    Generate a PDF report for a soil mix recommendation.

    Args:
        result: The computed mix
        user_name: Name shown on the report header
        plot_name: Optional plot label
        branding: Company branding, defaults from configuration

    Returns:
        PDF file as bytes
    """
    buffer = io.BytesIO()
    branding = branding or PDFBrandingContext()

    def header_footer(canvas, doc):
        draw_professional_letterhead(
            canvas, doc, branding,
            report_title="SOIL MIX REPORT",
            module_color=SOIL_MIX_COLOR
        )
        draw_professional_footer(canvas, doc, branding)

    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.6*inch,
        leftMargin=0.6*inch,
        topMargin=1.35*inch,
        bottomMargin=0.6*inch
    )

    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Title'],
        fontSize=16,
        textColor=SOIL_MIX_COLOR,
        spaceAfter=6,
        alignment=TA_CENTER
    )

    heading_style = ParagraphStyle(
        'CustomHeading',
        parent=styles['Heading2'],
        fontSize=11,
        textColor=SOIL_MIX_COLOR,
        spaceBefore=8,
        spaceAfter=4
    )

    body_style = ParagraphStyle(
        'CustomBody',
        parent=styles['Normal'],
        fontSize=9,
        textColor=TEXT_COLOR,
        spaceAfter=3
    )

    small_style = ParagraphStyle(
        'SmallText',
        parent=styles['Normal'],
        fontSize=7,
        textColor=TEXT_COLOR,
        spaceAfter=2
    )

    soil_info = get_soil_type_info(result.classification)
    story = []

    story.append(Paragraph("SOIL AMENDMENT MIX", title_style))
    story.append(Spacer(1, 4))

    header_data = [
        ["Plot:", plot_name or "Unnamed plot", "Date:", datetime.now().strftime("%d/%m/%Y %H:%M")],
        ["Grower:", user_name, "Soil type:", soil_info.name],
    ]
    header_table = Table(header_data, colWidths=[0.9*inch, 2.5*inch, 0.85*inch, 2.5*inch])
    header_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), LIGHT_BG),
        ('BACKGROUND', (2, 0), (2, -1), LIGHT_BG),
        ('TEXTCOLOR', (0, 0), (-1, -1), TEXT_COLOR),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTNAME', (2, 0), (2, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ('PADDING', (0, 0), (-1, -1), 4),
    ]))
    story.append(header_table)
    story.append(Spacer(1, 8))

    story.append(Paragraph("LAND DETAILS", heading_style))
    land_data = [
        ["Land area (m²)", f"{result.area_m2:g}"],
        ["Soil depth (cm)", f"{result.depth_cm:g}"],
        ["Depth factor", f"{result.depth_cm / REFERENCE_DEPTH_CM:.2f}"],
    ]
    if soil_info.description:
        land_data.append(["Soil profile", soil_info.description])
    land_table = Table(land_data, colWidths=[2.0*inch, 4.75*inch])
    land_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), LIGHT_BG),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('TEXTCOLOR', (0, 0), (-1, -1), TEXT_COLOR),
        ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ('PADDING', (0, 0), (-1, -1), 4),
    ]))
    story.append(land_table)

    story.append(Paragraph("MIX RECOMMENDATION", heading_style))
    mix_data = [
        ["Amendment", "Required", "Purpose"],
        ["Cocopeat", f"{result.bulking_agent_display} kg", "Soil structure improvement"],
        ["Hydrogel", f"{result.polymer_display} kg", "Water retention enhancement"],
    ]
    mix_table = Table(mix_data, colWidths=[1.8*inch, 1.5*inch, 3.45*inch])
    mix_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), SECONDARY_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), HexColor("#ffffff")),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BACKGROUND', (0, 1), (-1, -1), HEADER_BG),
        ('TEXTCOLOR', (0, 1), (-1, -1), TEXT_COLOR),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ('PADDING', (0, 0), (-1, -1), 4),
    ]))
    story.append(mix_table)

    story.append(Paragraph("APPLICATION INSTRUCTIONS", heading_style))
    for step in format_numbered_instructions(result):
        story.append(Paragraph(step, body_style))

    story.append(Spacer(1, 8))
    story.append(Paragraph(
        f"<b>Note:</b> Quantities are calibrated for a {REFERENCE_DEPTH_CM:g} cm cultivation depth "
        "and scale linearly with area and depth. <i>Adjust to field conditions.</i>",
        small_style
    ))

    doc.build(story, onFirstPage=header_footer, onLaterPages=header_footer)
    logger.info(f"Generated soil mix PDF for {result.classification.value} ({result.area_m2:g} m2)")

    return buffer.getvalue()
