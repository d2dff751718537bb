"""Week and month summaries derived from LogRecords."""

from collections import Counter
from dataclasses import dataclass, field

from studylog.dates import month_of
from studylog.records import LogRecord, empty_record


@dataclass(frozen=True)
class WeekSummary:
    dates: list[str]
    toshin_days: int
    detail_count: int
    top_subjects: list[tuple[str, int]] = field(default_factory=list)

    @property
    def start(self) -> str:
        return self.dates[0]

    @property
    def end(self) -> str:
        return self.dates[-1]


def index_by_date(records) -> dict[str, LogRecord]:
    return {record.date: record for record in records}


def week_window(by_date: dict, dates: list[str]) -> list[LogRecord]:
    """7日分のレコード。記録の無い日は空のレコードで埋める"""
    if len(dates) != 7:
        raise ValueError(f"a week window needs 7 dates, got {len(dates)}")
    return [by_date.get(d) or empty_record(d) for d in dates]


def top_items(values, limit: int | None = None) -> list[tuple[str, int]]:
    """出現回数の降順、同数なら文字列の昇順"""
    ranked = sorted(Counter(values).items(), key=lambda kv: (-kv[1], kv[0]))
    return ranked if limit is None else ranked[:limit]


def summarize_week(window: list[LogRecord], top: int = 5) -> WeekSummary:
    return WeekSummary(
        dates=[record.date for record in window],
        toshin_days=sum(1 for record in window if record.has_toshin),
        detail_count=sum(len(record.details) for record in window),
        top_subjects=top_items(
            (subject for record in window for subject in record.toshin_today),
            limit=top,
        ),
    )


def month_flags(records) -> list[dict]:
    """月表示用の日ごとの有無フラグ（数は集計しない）"""
    return [
        {"date": r.date, "hasToshin": r.has_toshin, "hasDetail": r.has_detail}
        for r in records
    ]


def month_set(records, today: str) -> list[str]:
    months = {month_of(record.date) for record in records}
    months.add(month_of(today))
    return sorted(months)
