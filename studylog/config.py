"""
既定のパスと定数

CLI 引数 (--logs-dir, --out, --today) で上書きできる。
"""

from pathlib import Path
from zoneinfo import ZoneInfo

LOGS_DIR = Path("content") / "logs"
SITE_DIR = Path("_site")

SITE_TITLE = "Study Record"

# "today" はこのタイムゾーンで1回だけ決める
TIMEZONE = ZoneInfo("Asia/Tokyo")
TIMEZONE_LABEL = "JST"

# toshinKoma しか無い古いログに使う汎用ラベル
TOSHIN_LABEL = "東進"

ROOT_KEYS = (
    "date", "plan", "notes", "toshinKoma",
    "study", "toshin", "toshinToday", "details",
)
STUDY_KEYS = ("subject", "focus", "detail", "tags")
TOSHIN_KEYS = ("subject", "course", "koma", "memo")
