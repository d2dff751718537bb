"""
サイトのビルド

ログを読み込み、_site を消してから全ページを書き直す。壊れたログは
スキップして続行する（厳密なチェックは validate の役目）。
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from studylog.card import write_week_card
from studylog.controllers import MonthController, WeekController
from studylog.loader import load_records
from studylog.payload import month_payload, week_payload
from studylog.render import (
    render_day_page,
    render_month_page,
    render_not_found,
    render_week_page,
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "site"
STATIC_ASSETS = ("style.css", "core.js", "week.js", "month.js")
CARD_NAME = "week-card.png"


@dataclass
class BuildResult:
    site_dir: Path
    records: int
    skipped: int
    pages: int


def copy_static_assets(assets_dir: Path):
    assets_dir.mkdir(parents=True, exist_ok=True)
    for name in STATIC_ASSETS:
        shutil.copyfile(STATIC_DIR / name, assets_dir / name)


def reset_dir(site_dir: Path):
    if site_dir.exists():
        shutil.rmtree(site_dir)
    site_dir.mkdir(parents=True)


def write_page(path: Path, html: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


def build_site(logs_dir: Path, site_dir: Path, today: str, card: bool = False) -> BuildResult:
    records, skipped = load_records(logs_dir)
    dates = [record.date for record in records]
    # Today リンクは今日のログがある時だけ
    today_href = f"day/{today}/" if today in dates else None

    site_dir = Path(site_dir)
    reset_dir(site_dir)
    copy_static_assets(site_dir / "assets")

    week = WeekController(today, records).view()
    card_href = None
    if card:
        write_week_card(week.window, week.summary, site_dir / "assets" / CARD_NAME)
        card_href = f"assets/{CARD_NAME}"
        logger.info("Wrote week card for %s - %s", week.summary.start, week.summary.end)

    pages = 0
    write_page(
        site_dir / "index.html",
        render_week_page(week, week_payload(records, today), today_href, card_href),
    )
    pages += 1

    month_data = month_payload(records, today)
    grid = MonthController.from_payload(month_data).grid()
    write_page(site_dir / "month.html", render_month_page(grid, month_data, today_href))
    pages += 1

    for idx, record in enumerate(records):
        prev_date = dates[idx - 1] if idx > 0 else None
        next_date = dates[idx + 1] if idx + 1 < len(dates) else None
        write_page(
            site_dir / "day" / record.date / "index.html",
            render_day_page(record, prev_date, next_date, today_href),
        )
        pages += 1

    write_page(site_dir / "404.html", render_not_found(today_href))
    pages += 1

    if skipped:
        logger.warning("%d log file(s) skipped", skipped)

    return BuildResult(site_dir=site_dir, records=len(records), skipped=skipped, pages=pages)
