"""
Soil Mix Excel Export Service.
Generates Excel workbooks for soil amendment mix recommendations.
"""
from io import BytesIO
from datetime import datetime
from typing import Any, Optional
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from soilmix.services.soil_catalog import get_soil_type_info
from soilmix.services.soil_mix_calculator import MixResult, round_half_up
from soilmix.services.soil_mix_rules import REFERENCE_DEPTH_CM, BULKING_AGENT_DECIMALS, POLYMER_DECIMALS

SOIL_MIX_GREEN = "22C55E"
SOIL_MIX_DARK = "059669"
HEADER_BG = "D1FAE5"


class SoilMixExcelService:
    """Service for generating Soil Mix Excel reports."""

    def __init__(self):
        self.header_fill = PatternFill(start_color=SOIL_MIX_DARK, end_color=SOIL_MIX_DARK, fill_type="solid")
        self.header_font = Font(bold=True, color="FFFFFF", size=11)
        self.title_font = Font(bold=True, size=16, color=SOIL_MIX_DARK)
        self.subtitle_font = Font(bold=True, size=12, color=SOIL_MIX_DARK)
        self.light_fill = PatternFill(start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid")
        self.border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

    def _apply_header_style(self, ws, row_num: int, max_col: int):
        """Apply header styling to a row."""
        for col in range(1, max_col + 1):
            cell = ws.cell(row=row_num, column=col)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
            cell.border = self.border

    def _auto_adjust_columns(self, ws):
        """Auto-adjust column widths."""
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column_letter].width = min(max(max_length + 2, 12), 60)

    def generate_soil_mix_excel(
        self,
        result: MixResult,
        user_name: str = "Grower",
        plot_name: Optional[str] = None
    ) -> BytesIO:
        """
        Generate Excel report for a soil mix recommendation.

        Args:
            result: The computed mix
            user_name: Name of the grower
            plot_name: Optional plot label

        Returns:
            BytesIO with Excel file content
        """
        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        self._create_summary_sheet(wb, result, user_name, plot_name)
        self._create_instructions_sheet(wb, result)

        buffer = BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer

    def _create_summary_sheet(self, wb, result: MixResult, user_name: str, plot_name: Optional[str]) -> Any:
        """Create the summary sheet."""
        ws = wb.create_sheet("Summary")
        row = 1

        ws.cell(row=row, column=1, value="SOIL MIX REPORT").font = self.title_font
        ws.merge_cells(f'A{row}:C{row}')
        row += 1

        ws.cell(row=row, column=1, value=f"Generated: {datetime.now().strftime('%d/%m/%Y %H:%M')}").font = Font(italic=True)
        row += 2

        ws.cell(row=row, column=1, value="LAND DETAILS").font = self.subtitle_font
        row += 1

        soil_info = get_soil_type_info(result.classification)
        info_data = [
            ("Plot:", plot_name or "Unnamed plot"),
            ("Grower:", user_name),
            ("Soil type:", soil_info.name),
            ("Land area (m²):", result.area_m2),
            ("Soil depth (cm):", result.depth_cm),
            ("Depth factor:", round(result.depth_cm / REFERENCE_DEPTH_CM, 4)),
        ]
        for label, value in info_data:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value)
            row += 1
        row += 1

        ws.cell(row=row, column=1, value="MIX RECOMMENDATION").font = self.subtitle_font
        row += 1

        headers = ["Amendment", "Required (kg)", "Purpose"]
        for col, header in enumerate(headers, start=1):
            ws.cell(row=row, column=col, value=header)
        self._apply_header_style(ws, row, len(headers))
        row += 1

        amounts = [
            ("Cocopeat", float(round_half_up(result.bulking_agent_kg, BULKING_AGENT_DECIMALS)), "Soil structure improvement"),
            ("Hydrogel", float(round_half_up(result.polymer_kg, POLYMER_DECIMALS)), "Water retention enhancement"),
        ]
        for name, amount, purpose in amounts:
            ws.cell(row=row, column=1, value=name).fill = self.light_fill
            ws.cell(row=row, column=2, value=amount)
            ws.cell(row=row, column=3, value=purpose)
            for col in range(1, 4):
                ws.cell(row=row, column=col).border = self.border
            row += 1

        self._auto_adjust_columns(ws)
        return ws

    def _create_instructions_sheet(self, wb, result: MixResult) -> Any:
        """Create the numbered application instructions sheet."""
        ws = wb.create_sheet("Instructions")
        ws.cell(row=1, column=1, value="Step")
        ws.cell(row=1, column=2, value="Instruction")
        self._apply_header_style(ws, 1, 2)

        for index, step in enumerate(result.instructions, start=1):
            ws.cell(row=index + 1, column=1, value=index).border = self.border
            ws.cell(row=index + 1, column=2, value=step).border = self.border

        self._auto_adjust_columns(ws)
        return ws


soil_mix_excel_service = SoilMixExcelService()
