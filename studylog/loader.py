"""
ログファイルの列挙と読み込み（build 用の寛容な読み込み）

対応レイアウト:
  content/logs/YYYYMM/YYYY-MM-DD.json   現行
  content/logs/YYYY-MM-DD.json          旧レイアウト
"""

import json
import logging
from pathlib import Path

from studylog.records import LogFormatError, LogRecord, normalize

logger = logging.getLogger(__name__)


def list_log_files(logs_dir: Path) -> list[Path]:
    """logs_dir 直下と、その1階層下のディレクトリにある *.json をパス順で返す"""
    logs_dir = Path(logs_dir)
    if not logs_dir.is_dir():
        return []
    files = [p for p in logs_dir.glob("*.json") if p.is_file()]
    for month_dir in logs_dir.iterdir():
        if month_dir.is_dir():
            files.extend(p for p in month_dir.glob("*.json") if p.is_file())
    return sorted(files, key=lambda p: p.as_posix())


def read_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_records(logs_dir: Path) -> tuple[list[LogRecord], int]:
    """
    全ログを読み、正規化したレコードを日付順で返す。

    読めないファイル、日付の無いファイル、重複日付は警告を出してスキップする。
    戻り値は (records, skipped)。
    """
    records: dict[str, LogRecord] = {}
    sources: dict[str, Path] = {}
    skipped = 0

    for path in list_log_files(logs_dir):
        try:
            raw = read_json(path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: not valid JSON (%s)", path, e)
            skipped += 1
            continue
        except OSError as e:
            logger.warning("Skipping %s: cannot read (%s)", path, e)
            skipped += 1
            continue

        try:
            record = normalize(raw)
        except LogFormatError as e:
            logger.warning("Skipping %s: %s", path, e)
            skipped += 1
            continue

        if record.date in records:
            logger.warning(
                "Skipping %s: duplicate date %s (already loaded from %s)",
                path, record.date, sources[record.date],
            )
            skipped += 1
            continue

        records[record.date] = record
        sources[record.date] = path
        logger.debug("Loaded %s from %s", record.date, path)

    ordered = [records[d] for d in sorted(records)]
    return ordered, skipped
