from __future__ import annotations

from collections.abc import Iterable
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from schedule_api.models.schedule import ScheduleEntry

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_COLUMNS = (
    ("Дата", 12),
    ("Группа", 14),
    ("Дисциплина", 30),
    ("Преподаватель", 20),
    ("Тип", 14),
    ("Аудитория", 12),
    ("Номер пары", 12),
)


def schedule_rows(entries: Iterable[ScheduleEntry]) -> list[tuple]:
    """One row per lesson item, in entry order then item order."""
    rows: list[tuple] = []
    for entry in entries:
        for item in entry.items:
            rows.append(
                (
                    entry.date,
                    entry.group.name,
                    item.discipline.name,
                    item.teacher.surname,
                    item.type.name,
                    item.audithoria.name,
                    item.number,
                )
            )
    return rows


def build_schedule_workbook(entries: Iterable[ScheduleEntry]) -> BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = "Расписание"

    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    center = Alignment(horizontal="center", vertical="center")

    for index, (title, width) in enumerate(EXPORT_COLUMNS, start=1):
        cell = ws.cell(row=1, column=index, value=title)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center
        ws.column_dimensions[get_column_letter(index)].width = width

    for row in schedule_rows(entries):
        ws.append(row)
    for cell in ws["A"][1:]:
        cell.number_format = "DD.MM.YYYY"

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
