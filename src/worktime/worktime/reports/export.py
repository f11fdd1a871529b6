from __future__ import annotations

import csv
import io
from collections import defaultdict
from datetime import date
from typing import Iterable

import pandas as pd

from ..attendance.model import AttendanceSession
from ..common.datetime_utils import format_hhmm, hours_label
from .model import ReportSummary

EXPORT_COLUMNS = ["Date", "Check-in", "Check-out", "Worked hours", "Status", "Notes"]
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EMPTY_CELL = "—"


def build_export_rows(summary: ReportSummary, sessions: Iterable[AttendanceSession]) -> list[dict]:
    """One row per reported day.

    Clock columns show the first check-in and the last check-out of the day,
    notes of all sessions are joined.
    """

    by_date: dict[date, list[AttendanceSession]] = defaultdict(list)
    for s in sessions:
        by_date[s.work_date].append(s)

    rows: list[dict] = []
    for d in summary.days:
        day_sessions = sorted(by_date.get(d.work_date, []), key=lambda s: s.check_in_time)
        check_outs = [s.check_out_time for s in day_sessions if s.check_out_time is not None]
        rows.append(
            {
                "Date": d.work_date.isoformat(),
                "Check-in": format_hhmm(day_sessions[0].check_in_time) if day_sessions else EMPTY_CELL,
                "Check-out": format_hhmm(max(check_outs)) if check_outs else EMPTY_CELL,
                "Worked hours": hours_label(d.worked_minutes),
                "Status": d.status.value,
                "Notes": "; ".join(s.note for s in day_sessions if s.note),
            }
        )
    return rows


def to_csv_text(rows: list[dict]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


def to_xlsx_bytes(rows: list[dict], *, sheet_name: str = "Report") -> bytes:
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def export_filename(summary: ReportSummary, extension: str) -> str:
    start = summary.start.strftime("%Y%m%d") if summary.start else "start"
    end = summary.end.strftime("%Y%m%d") if summary.end else "end"
    return f"attendance_{start}_{end}.{extension}"
