"""
Conversion dashboard.

Records one row per converted project in an Excel workbook:
- Project, book title, start/end time and duration
- Status (Success, Failure)
- Included and excluded (out of sync) languages
- Page count, hydration outcome, output folder and error message

Rows are appended to an existing workbook when present.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
import logging
from enum import Enum
import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .converter import ConversionResult

logger = logging.getLogger(__name__)


class ConversionStatus(Enum):
    """Conversion status states"""
    IN_PROGRESS = "In Progress"
    SUCCESS = "Success"
    FAILURE = "Failure"


@dataclass
class ConversionRecord:
    """Dashboard row for a single project"""
    project_name: str
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    status: ConversionStatus = ConversionStatus.IN_PROGRESS
    title: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    excluded_languages: List[str] = field(default_factory=list)
    page_count: int = 0
    hydrated: bool = False
    output_path: Optional[str] = None
    error_message: Optional[str] = None

    def duration_seconds(self) -> Optional[int]:
        if self.end_time:
            return int((self.end_time - self.start_time).total_seconds())
        return None

    def to_row(self) -> List:
        duration = self.duration_seconds()
        return [
            self.project_name,
            self.title or "",
            self.start_time.strftime("%Y-%m-%d %H:%M:%S"),
            self.end_time.strftime("%Y-%m-%d %H:%M:%S") if self.end_time else "",
            f"{duration}s" if duration is not None else "N/A",
            self.status.value,
            ", ".join(self.languages),
            ", ".join(self.excluded_languages),
            self.page_count,
            "Yes" if self.hydrated else "No",
            self.output_path or "",
            self.error_message or "",
        ]


class ConversionTracker:
    """
    Manages the conversion dashboard workbook.
    """

    SHEET_NAME = "Conversions"
    STATUS_COLUMN = 6

    HEADERS = [
        "Project",
        "Title",
        "Start Time",
        "End Time",
        "Duration",
        "Status",
        "Languages",
        "Excluded Languages",
        "# Pages",
        "Hydrated",
        "Output Path",
        "Error Message",
    ]

    def __init__(self, excel_path: Path):
        self.excel_path = Path(excel_path)
        self.current: Optional[ConversionRecord] = None

    def start_conversion(self, project_name: str) -> ConversionRecord:
        self.current = ConversionRecord(project_name=project_name)
        logger.debug(f"Started tracking conversion: {project_name}")
        return self.current

    def complete_conversion(self, result: ConversionResult) -> None:
        """Fill the current record from ``result`` and save it."""
        if not self.current:
            logger.warning("complete_conversion called without active conversion")
            return

        record = self.current
        record.end_time = datetime.now()
        record.status = ConversionStatus.SUCCESS if result.success else ConversionStatus.FAILURE
        record.title = result.title
        record.languages = [language.display_name for language in result.languages]
        record.excluded_languages = [language.display_name for language in result.excluded_languages]
        record.page_count = result.page_count
        record.hydrated = result.hydrated
        record.output_path = str(result.book_dir) if result.book_dir else None
        record.error_message = result.error

        self._save_to_excel()
        self.current = None

    def _save_to_excel(self) -> None:
        """Append the current record; failures are logged, never raised."""
        try:
            if self.excel_path.exists():
                wb = openpyxl.load_workbook(self.excel_path)
                if self.SHEET_NAME in wb.sheetnames:
                    ws = wb[self.SHEET_NAME]
                else:
                    ws = wb.create_sheet(self.SHEET_NAME)
                    ws.append(self.HEADERS)
                    self._format_header_row(ws)
            else:
                self.excel_path.parent.mkdir(parents=True, exist_ok=True)
                wb = openpyxl.Workbook()
                ws = wb.active
                ws.title = self.SHEET_NAME
                ws.append(self.HEADERS)
                self._format_header_row(ws)

            ws.append(self.current.to_row())
            self._format_status_cell(ws, ws.max_row, self.current.status)
            self._auto_size_columns(ws)

            wb.save(self.excel_path)
            logger.info(f"Saved conversion tracking to {self.excel_path}")

        except Exception as e:
            logger.error(f"Failed to save to Excel: {e}", exc_info=True)

    def _format_header_row(self, ws) -> None:
        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        header_font = Font(bold=True, color="FFFFFF", size=11)
        alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

        for cell in ws[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = alignment

    def _format_status_cell(self, ws, row_idx: int, status: ConversionStatus) -> None:
        if status == ConversionStatus.SUCCESS:
            fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
            font = Font(color="006100")
        elif status == ConversionStatus.FAILURE:
            fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
            font = Font(color="9C0006")
        else:
            fill = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
            font = Font(color="9C6500")

        ws.cell(row_idx, self.STATUS_COLUMN).fill = fill
        ws.cell(row_idx, self.STATUS_COLUMN).font = font

    def _auto_size_columns(self, ws) -> None:
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    def get_statistics(self) -> Dict[str, int]:
        """Count successful and failed conversions recorded in the workbook."""
        if not self.excel_path.exists():
            return {}

        wb = openpyxl.load_workbook(self.excel_path)
        ws = wb[self.SHEET_NAME]
        stats = {'total_conversions': ws.max_row - 1, 'successful': 0, 'failed': 0}
        for row_idx in range(2, ws.max_row + 1):
            status = ws.cell(row_idx, self.STATUS_COLUMN).value
            if status == ConversionStatus.SUCCESS.value:
                stats['successful'] += 1
            elif status == ConversionStatus.FAILURE.value:
                stats['failed'] += 1
        return stats
