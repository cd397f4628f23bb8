from __future__ import annotations

import csv
import io

from ..attendance.status import STATUS_LABELS
from ..core.enums import AttendanceStatus
from .service import AttendanceMatrix, WorkHoursMatrix


def _to_csv_bytes(header: list[str], body: list[list]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(header)
    writer.writerows(body)
    # BOM so spreadsheet apps detect UTF-8 (names are not ASCII).
    return out.getvalue().encode("utf-8-sig")


def attendance_matrix_csv(matrix: AttendanceMatrix) -> bytes:
    header = ["name", "department", *matrix.dates]
    body = [
        [row["name"], row["department"], *[STATUS_LABELS[AttendanceStatus(c)] for c in row["cells"]]]
        for row in matrix.rows
    ]
    return _to_csv_bytes(header, body)


def work_hours_csv(matrix: WorkHoursMatrix) -> bytes:
    header = ["name", "department", "work_days", "total_hours", *matrix.dates]
    body = [
        [row["name"], row["department"], row["work_days"], row["total_hours"], *row["daily"]]
        for row in matrix.rows
    ]
    return _to_csv_bytes(header, body)
