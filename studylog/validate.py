"""
ログの厳密チェック（validate コマンド）

現行レイアウト content/logs/YYYYMM/YYYY-MM-DD.json を前提に、全ファイルの
エラーを集めてから返す。1件目のエラーで止めない。
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from studylog.config import ROOT_KEYS, STUDY_KEYS, TOSHIN_KEYS
from studylog.dates import DATE_RE, FOLDER_RE, is_valid_date, month_folder
from studylog.loader import list_log_files, read_json

SCHEMA = "schema"
DATE = "date"
JSON = "json"


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    kind: str
    message: str

    def __str__(self):
        return f"{self.path} {self.message}"


@dataclass
class ValidationReport:
    files_checked: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def add(self, path: str, kind: str, message: str):
        self.issues.append(ValidationIssue(path, kind, message))

    def of_kind(self, kind: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.kind == kind]


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_nonempty_str(value) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _check_string_list(value, where: str, rel: str, report: ValidationReport):
    if not isinstance(value, list):
        report.add(rel, SCHEMA, f"{where} must be an array")
        return
    for idx, item in enumerate(value):
        if not _is_nonempty_str(item):
            report.add(rel, SCHEMA, f"{where}[{idx}] must be a non-empty string")


def _check_unknown_keys(obj: dict, allowed, where: str, rel: str, report: ValidationReport):
    for key in obj:
        if key not in allowed:
            report.add(rel, SCHEMA, f"{where}has unknown field: {key}")


def check_study_item(item, idx: int, rel: str, report: ValidationReport):
    prefix = f"study[{idx}]"
    if not isinstance(item, dict):
        report.add(rel, SCHEMA, f"{prefix} must be an object")
        return
    _check_unknown_keys(item, STUDY_KEYS, f"{prefix} ", rel, report)
    for key in ("subject", "focus", "detail"):
        if not _is_nonempty_str(item.get(key)):
            report.add(rel, SCHEMA, f"{prefix}.{key} must be a non-empty string")
    if "tags" in item:
        _check_string_list(item["tags"], f"{prefix}.tags", rel, report)


def check_toshin_item(item, idx: int, rel: str, report: ValidationReport):
    prefix = f"toshin[{idx}]"
    if not isinstance(item, dict):
        report.add(rel, SCHEMA, f"{prefix} must be an object")
        return
    _check_unknown_keys(item, TOSHIN_KEYS, f"{prefix} ", rel, report)
    for key in ("subject", "course"):
        if not _is_nonempty_str(item.get(key)):
            report.add(rel, SCHEMA, f"{prefix}.{key} must be a non-empty string")
    koma = item.get("koma")
    if not _is_int(koma) or koma < 1:
        report.add(rel, SCHEMA, f"{prefix}.koma must be an integer >= 1")
    if "memo" in item and not isinstance(item["memo"], str):
        report.add(rel, SCHEMA, f"{prefix}.memo must be a string")


def check_root(data, rel: str, report: ValidationReport):
    if not isinstance(data, dict):
        report.add(rel, SCHEMA, "root must be an object")
        return

    _check_unknown_keys(data, ROOT_KEYS, "", rel, report)

    if not is_valid_date(data.get("date")):
        report.add(rel, DATE, "date must be a valid YYYY-MM-DD string")

    for key in ("plan", "notes"):
        if key in data and not isinstance(data[key], str):
            report.add(rel, SCHEMA, f"{key} must be a string")

    if "toshinKoma" in data:
        koma = data["toshinKoma"]
        if not _is_int(koma) or koma < 0:
            report.add(rel, SCHEMA, "toshinKoma must be an integer >= 0")

    for key in ("toshinToday", "details"):
        if key in data:
            _check_string_list(data[key], key, rel, report)

    if "study" in data:
        if not isinstance(data["study"], list):
            report.add(rel, SCHEMA, "study must be an array")
        else:
            for idx, item in enumerate(data["study"]):
                check_study_item(item, idx, rel, report)

    if "toshin" in data:
        if not isinstance(data["toshin"], list):
            report.add(rel, SCHEMA, "toshin must be an array")
        else:
            for idx, item in enumerate(data["toshin"]):
                check_toshin_item(item, idx, rel, report)


def check_location(path: Path, logs_dir: Path, rel: str, report: ValidationReport):
    """ファイル名が YYYY-MM-DD.json で、YYYYMM ディレクトリの下にあるか"""
    if not DATE_RE.fullmatch(path.stem):
        report.add(rel, DATE, "filename must be YYYY-MM-DD.json")
    if path.parent == logs_dir:
        report.add(rel, DATE, "must be placed under a YYYYMM directory")
    elif not FOLDER_RE.fullmatch(path.parent.name):
        report.add(rel, DATE, f"parent directory must be YYYYMM, got {path.parent.name}")


def check_date_matches(date: str, path: Path, logs_dir: Path, rel: str, report: ValidationReport):
    if date != path.stem:
        report.add(rel, DATE, f"date mismatch: filename={path.stem}, date={date}")
    if path.parent != logs_dir and path.parent.name != month_folder(date):
        report.add(
            rel, DATE,
            f"month folder mismatch: folder={path.parent.name}, expected={month_folder(date)}",
        )


def display_path(path: Path, base_dir: Path) -> str:
    """base_dir の下なら相対パス、そうでなければそのまま"""
    if path.is_absolute():
        try:
            return path.relative_to(base_dir).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def validate_logs(logs_dir: Path, base_dir: Path | None = None) -> ValidationReport:
    """
    logs_dir 以下の全ログを検査する。

    エラーメッセージのパスは base_dir（省略時はカレントディレクトリ）からの相対パス。
    重複日付は日付の値だけで比較し、両方のファイルを1件のエラーで報告する。
    """
    logs_dir = Path(logs_dir)
    if base_dir is None:
        base_dir = Path.cwd()
    report = ValidationReport()
    seen_dates: dict[str, str] = {}

    for path in list_log_files(logs_dir):
        report.files_checked += 1
        rel = display_path(path, Path(base_dir).resolve())

        check_location(path, logs_dir, rel, report)

        try:
            data = read_json(path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            report.add(rel, JSON, f"is not valid JSON: {e}")
            continue
        except OSError as e:
            report.add(rel, JSON, f"cannot be read: {e}")
            continue

        check_root(data, rel, report)

        date = data.get("date") if isinstance(data, dict) else None
        if not is_valid_date(date):
            continue

        check_date_matches(date, path, logs_dir, rel, report)

        if date in seen_dates:
            report.add(rel, DATE, f"duplicate date {date}: {seen_dates[date]} and {rel}")
        else:
            seen_dates[date] = rel

    return report
