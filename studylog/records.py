"""
ログレコードのモデルとスキーマ正規化

ディスク上のログは3世代の形が混在している。世代はフィールドの有無から
判定し (detect_generation)、世代ごとの型が to_record() で正規形の
LogRecord に変換する。

  Gen A: {date, study:[{subject,focus,detail,tags?}], toshin:[{subject,course,koma,memo?}], notes}
  Gen B: {date, plan, notes, toshinKoma, study?, toshin?}
  Gen C: {date, toshinToday?:[str], details?:[str], plan?, notes?, toshin?}

正規化は date 以外では失敗しない。型が合わない任意フィールドは空扱いになる。
"""

from dataclasses import dataclass, field

from studylog.config import TOSHIN_LABEL
from studylog.dates import is_valid_date


class LogFormatError(Exception):
    """A raw log cannot be turned into a LogRecord."""


class InvalidDateError(LogFormatError):
    pass


@dataclass(frozen=True)
class LogRecord:
    date: str
    toshin_today: list[str] = field(default_factory=list)
    details: list[str] = field(default_factory=list)

    @property
    def has_toshin(self) -> bool:
        return bool(self.toshin_today)

    @property
    def has_detail(self) -> bool:
        return bool(self.details)

    def to_json(self) -> dict:
        return {
            "date": self.date,
            "toshinToday": list(self.toshin_today),
            "details": list(self.details),
        }


def empty_record(date_str: str) -> LogRecord:
    return LogRecord(date=date_str)


# --- field helpers ---

def _clean_strings(value) -> list[str]:
    """配列から空でない文字列だけを trim して取り出す"""
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _dicts(value) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _positive_int(value) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def toshin_subjects(items: list[dict]) -> list[str]:
    return _dedupe(_clean_strings([item.get("subject") for item in items]))


def koma_fallback(koma: int | None) -> list[str]:
    return [TOSHIN_LABEL] if koma else []


def plan_and_notes(plan: str, notes: str) -> list[str]:
    return [text for text in (plan, notes) if text]


def first_nonempty(*candidates: list[str]) -> list[str]:
    for candidate in candidates:
        if candidate:
            return candidate
    return []


# --- generations ---

@dataclass(frozen=True)
class GenALog:
    date: str
    study: list[dict]
    toshin: list[dict]
    notes: str
    plan: str = ""
    toshin_koma: int | None = None

    @classmethod
    def from_raw(cls, raw: dict) -> "GenALog":
        return cls(
            date=raw.get("date"),
            study=_dicts(raw.get("study")),
            toshin=_dicts(raw.get("toshin")),
            notes=_text(raw.get("notes")),
            plan=_text(raw.get("plan")),
            toshin_koma=_positive_int(raw.get("toshinKoma")),
        )

    def to_record(self) -> LogRecord:
        # study[] は details に入れない（plan / notes のみ）
        return LogRecord(
            date=self.date,
            toshin_today=first_nonempty(
                toshin_subjects(self.toshin),
                koma_fallback(self.toshin_koma),
            ),
            details=plan_and_notes(self.plan, self.notes),
        )


@dataclass(frozen=True)
class GenBLog:
    date: str
    plan: str
    notes: str
    toshin_koma: int | None
    toshin: list[dict]

    @classmethod
    def from_raw(cls, raw: dict) -> "GenBLog":
        return cls(
            date=raw.get("date"),
            plan=_text(raw.get("plan")),
            notes=_text(raw.get("notes")),
            toshin_koma=_positive_int(raw.get("toshinKoma")),
            toshin=_dicts(raw.get("toshin")),
        )

    def to_record(self) -> LogRecord:
        return LogRecord(
            date=self.date,
            toshin_today=first_nonempty(
                toshin_subjects(self.toshin),
                koma_fallback(self.toshin_koma),
            ),
            details=plan_and_notes(self.plan, self.notes),
        )


@dataclass(frozen=True)
class GenCLog:
    date: str
    toshin_today: list[str]
    details: list[str]
    plan: str
    notes: str
    toshin_koma: int | None
    toshin: list[dict]

    @classmethod
    def from_raw(cls, raw: dict) -> "GenCLog":
        return cls(
            date=raw.get("date"),
            toshin_today=_dedupe(_clean_strings(raw.get("toshinToday"))),
            details=_clean_strings(raw.get("details")),
            plan=_text(raw.get("plan")),
            notes=_text(raw.get("notes")),
            toshin_koma=_positive_int(raw.get("toshinKoma")),
            toshin=_dicts(raw.get("toshin")),
        )

    def to_record(self) -> LogRecord:
        return LogRecord(
            date=self.date,
            toshin_today=first_nonempty(
                self.toshin_today,
                toshin_subjects(self.toshin),
                koma_fallback(self.toshin_koma),
            ),
            details=first_nonempty(
                self.details,
                plan_and_notes(self.plan, self.notes),
            ),
        )


GENERATIONS = {"A": GenALog, "B": GenBLog, "C": GenCLog}


def _has_key(items, key: str) -> bool:
    return any(key in item for item in _dicts(items))


def detect_generation(raw: dict) -> str:
    """ファイルの世代をフィールド構造から判定する"""
    if "toshinToday" in raw or "details" in raw:
        return "C"
    if _has_key(raw.get("study"), "focus") and _has_key(raw.get("toshin"), "koma"):
        return "A"
    return "B"


def parse_raw(raw: dict):
    if not isinstance(raw, dict):
        raise LogFormatError(f"root must be an object, got {type(raw).__name__}")
    date = raw.get("date")
    if not is_valid_date(date):
        raise InvalidDateError(f"missing or invalid date: {date!r}")
    return GENERATIONS[detect_generation(raw)].from_raw(raw)


def normalize(raw: dict) -> LogRecord:
    return parse_raw(raw).to_record()
