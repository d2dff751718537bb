"""
週表示・月表示の状態遷移

ブラウザ側の site/week.js, site/month.js と同じ規則をここで持つ。ビルド時の
初期 HTML はこのコントローラで描画するので、最初のクライアント描画と一致する。

週: offset（何週前か, 0 = 今週, クエリ w）と selected_date
月: 選択中の YYYY-MM（クエリ m）
"""

import re
from dataclasses import dataclass
from urllib.parse import parse_qs

from studylog.aggregate import WeekSummary, index_by_date, summarize_week, week_window
from studylog.dates import leading_blanks, max_week_offset, month_dates, month_of, week_dates
from studylog.records import LogRecord

OFFSET_RE = re.compile(r"[0-9]{1,9}")


def _query_value(query: str, key: str) -> str | None:
    values = parse_qs(query.lstrip("?")).get(key)
    return values[0] if values else None


@dataclass(frozen=True)
class WeekView:
    offset: int
    window: list[LogRecord]
    summary: WeekSummary
    selected: LogRecord
    can_page_newer: bool


class WeekController:
    def __init__(self, today: str, records, offset: int = 0):
        self.today = today
        self.by_date = index_by_date(records)
        # 表示できない範囲の offset は今週に戻す
        self.offset = offset if 0 <= offset <= max_week_offset(today) else 0
        self.selected_date: str | None = None

    @classmethod
    def from_query(cls, today: str, records, query: str = ""):
        raw = _query_value(query, "w")
        offset = int(raw) if raw is not None and OFFSET_RE.fullmatch(raw) else 0
        return cls(today, records, offset)

    @property
    def dates(self) -> list[str]:
        return week_dates(self.today, self.offset)

    def page_older(self):
        if self.offset >= max_week_offset(self.today):
            return
        self.offset += 1
        self.selected_date = None

    def page_newer(self):
        if self.offset == 0:
            return
        self.offset -= 1
        self.selected_date = None

    def select_day(self, date: str):
        self.selected_date = date

    def resolve_selected(self) -> str:
        """選択日が窓の外なら、今日（窓内にあれば）か窓の初日に戻す"""
        dates = self.dates
        if self.selected_date not in dates:
            self.selected_date = self.today if self.today in dates else dates[0]
        return self.selected_date

    def query(self) -> str:
        return "" if self.offset == 0 else f"?w={self.offset}"

    def view(self) -> WeekView:
        window = week_window(self.by_date, self.dates)
        selected = self.resolve_selected()
        return WeekView(
            offset=self.offset,
            window=window,
            summary=summarize_week(window),
            selected=next(r for r in window if r.date == selected),
            can_page_newer=self.offset > 0,
        )


@dataclass(frozen=True)
class MonthCell:
    date: str
    day: int
    has_record: bool
    has_toshin: bool
    has_detail: bool


@dataclass(frozen=True)
class MonthGrid:
    month: str
    blanks: int
    cells: list[MonthCell]


class MonthController:
    def __init__(self, today: str, months: list[str], flags: list[dict], month: str | None = None):
        self.today = today
        self.months = list(months)
        self.flags = {f["date"]: f for f in flags}
        self.month = month if month in self.months else month_of(today)

    @classmethod
    def from_payload(cls, payload: dict, query: str = ""):
        return cls(
            payload["today"], payload["months"], payload["logs"],
            month=_query_value(query, "m"),
        )

    def select(self, month: str):
        if month in self.months:
            self.month = month

    def query(self) -> str:
        return f"?m={self.month}"

    def grid(self) -> MonthGrid:
        cells = []
        for date in month_dates(self.month):
            flag = self.flags.get(date)
            cells.append(MonthCell(
                date=date,
                day=int(date[8:]),
                has_record=flag is not None,
                has_toshin=bool(flag and flag["hasToshin"]),
                has_detail=bool(flag and flag["hasDetail"]),
            ))
        return MonthGrid(month=self.month, blanks=leading_blanks(self.month), cells=cells)
