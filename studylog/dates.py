"""
Calendar arithmetic on ISO date strings.

All arithmetic goes through epoch days (days since 1970-01-01 UTC) so week
and month math never touches local time or DST. The browser replays the
same functions in site/core.js.
"""

import calendar
import re
from datetime import date, datetime, timedelta

from studylog.config import TIMEZONE

EPOCH = date(1970, 1, 1)
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
MONTH_RE = re.compile(r"[0-9]{4}-[0-9]{2}")
FOLDER_RE = re.compile(r"[0-9]{6}")
# 0001-01-01 (a Monday); the earliest day datetime.date can hold
MIN_EPOCH_DAY = (date(1, 1, 1) - EPOCH).days


def is_valid_date(value) -> bool:
    """YYYY-MM-DD 形式かつ実在する日付なら True（2023-02-29 や 13月は False）"""
    if not isinstance(value, str) or not DATE_RE.fullmatch(value):
        return False
    y, m, d = (int(part) for part in value.split("-"))
    try:
        date(y, m, d)
    except ValueError:
        return False
    return True


def is_valid_month(value) -> bool:
    if not isinstance(value, str) or not MONTH_RE.fullmatch(value):
        return False
    y, m = (int(part) for part in value.split("-"))
    return y >= 1 and 1 <= m <= 12


def parse_date(value: str) -> date:
    if not is_valid_date(value):
        raise ValueError(f"invalid date: {value!r}")
    return date.fromisoformat(value)


def to_epoch_day(value: str) -> int:
    return (parse_date(value) - EPOCH).days


def from_epoch_day(n: int) -> str:
    return (EPOCH + timedelta(days=n)).isoformat()


def weekday_monday(epoch_day: int) -> int:
    """Monday=0 ... Sunday=6. 1970-01-01 was a Thursday."""
    return (epoch_day + 3) % 7


def start_of_week_monday(epoch_day: int) -> int:
    return epoch_day - weekday_monday(epoch_day)


def today(tz=TIMEZONE, now: datetime | None = None) -> str:
    """固定タイムゾーンでの今日の日付。ビルド開始時に1回だけ呼ぶ"""
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date().isoformat()


def max_week_offset(today_str: str) -> int:
    """さかのぼれる最大の週数（窓が 0001-01-01 より前に出ない範囲）"""
    return (start_of_week_monday(to_epoch_day(today_str)) - MIN_EPOCH_DAY) // 7


def week_dates(today_str: str, offset: int = 0) -> list[str]:
    """offset 週前の月曜始まり7日間"""
    if offset < 0 or offset > max_week_offset(today_str):
        raise ValueError(f"week offset out of range: {offset}")
    start = start_of_week_monday(to_epoch_day(today_str)) - offset * 7
    return [from_epoch_day(start + i) for i in range(7)]


def month_of(date_str: str) -> str:
    return date_str[:7]


def month_folder(date_str: str) -> str:
    """2024-01-10 -> 202401"""
    return date_str[:4] + date_str[5:7]


def days_in_month(month: str) -> int:
    y, m = (int(part) for part in month.split("-"))
    return calendar.monthrange(y, m)[1]


def month_dates(month: str) -> list[str]:
    if not is_valid_month(month):
        raise ValueError(f"invalid month: {month!r}")
    return [f"{month}-{day:02d}" for day in range(1, days_in_month(month) + 1)]


def leading_blanks(month: str) -> int:
    """月曜始まりのカレンダーで1日の前に置く空セル数"""
    return weekday_monday(to_epoch_day(f"{month}-01"))


def weekday_label(date_str: str) -> str:
    return "月火水木金土日"[weekday_monday(to_epoch_day(date_str))]
