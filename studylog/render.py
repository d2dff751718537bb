"""
HTML ページ生成

週ページ (index.html)、月ページ (month.html)、日別ページ (day/<date>/index.html)、404.html。
週と月の初期表示はコントローラの結果をそのまま描画する。
"""

from html import escape

from studylog.config import SITE_TITLE, TIMEZONE_LABEL
from studylog.controllers import MonthGrid, WeekView
from studylog.dates import weekday_label
from studylog.payload import script_tag

DAY_HEADERS = "月火水木金土日"


def esc(text) -> str:
    """html.escape と同じだが、' は site/core.js に合わせて &#39; にする"""
    return escape(str(text)).replace("&#x27;", "&#39;")


def nl2br(text: str) -> str:
    return esc(text).replace("\n", "<br>")


def render_layout(title: str, body: str, base_path: str = "", today_href: str | None = None,
                  head_extra: str = "") -> str:
    if today_href:
        today_link = f'<a href="{base_path}{today_href}">Today</a>'
    else:
        today_link = '<span class="muted">Today</span>'

    return f'''<!DOCTYPE html>
<html lang="ja">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{esc(title)}</title>
<link rel="stylesheet" href="{base_path}assets/style.css">
{head_extra}</head>
<body>
<header class="site-header">
  <h1>{esc(SITE_TITLE)}</h1>
  <nav>
    <a href="{base_path}index.html">Week</a>
    <a href="{base_path}month.html">Month</a>
    {today_link}
  </nav>
</header>
<main>{body}</main>
</body>
</html>
'''


def render_toshin_badges(items) -> str:
    if not items:
        return '<p class="empty">東進なし</p>'
    chips = "".join(f'<span class="subject-chip">{esc(name)}</span>' for name in items)
    return f'<div class="subject-grid">{chips}</div>'


def render_details_list(details) -> str:
    if not details:
        return '<p class="empty">詳細なし</p>'
    items = "".join(f"<li>{nl2br(item)}</li>" for item in details)
    return f"<ul>{items}</ul>"


def render_top_subjects(ranked) -> str:
    if not ranked:
        return '<span class="empty">なし</span>'
    return "".join(
        f'<span class="subject-chip">{esc(name)} ×{count}</span>' for name, count in ranked
    )


def render_day_card(record, selected: bool) -> str:
    active = " is-active" if selected else ""
    expanded = "true" if selected else "false"
    return f'''<article class="day-card{active}" data-date="{record.date}">
  <button class="day-card-trigger" type="button" data-date="{record.date}" aria-controls="week-detail" aria-expanded="{expanded}">
    <h3>{record.date} ({weekday_label(record.date)})</h3>
    <p class="label">今日やった東進</p>
    {render_toshin_badges(record.toshin_today)}
  </button>
</article>'''


def render_week_detail(record) -> str:
    return f'''
<div class="detail-head">
  <h2>{record.date} の詳細</h2>
  <a href="day/{record.date}/">日別ページを開く</a>
</div>
<section><h3>今日やった東進</h3>{render_toshin_badges(record.toshin_today)}</section>
<section><h3>今日やったこと</h3>{render_details_list(record.details)}</section>
'''


def render_week_page(view: WeekView, payload: dict, today_href: str | None,
                     card_href: str | None = None) -> str:
    summary = view.summary
    cards = "".join(
        render_day_card(record, record.date == view.selected.date) for record in view.window
    )
    disabled = "" if view.can_page_newer else " disabled aria-disabled=\"true\""
    head_extra = f'<meta property="og:image" content="{card_href}">\n' if card_href else ""

    body = f'''
<section class="panel hero">
  <div class="week-nav">
    <button id="week-prev" type="button">← 前の週</button>
    <p id="week-range" class="caption">{summary.start} - {summary.end} ({TIMEZONE_LABEL})</p>
    <button id="week-next" type="button"{disabled}>次の週 →</button>
  </div>
  <div class="hero-metrics">
    <div><p>東進をやった日</p><strong id="week-toshin-days">{summary.toshin_days} / 7 日</strong></div>
    <div><p>やったこと</p><strong id="week-detail-count">{summary.detail_count} 件</strong></div>
    <div><p>よくやった東進</p><div id="week-top-subjects" class="subject-grid">{render_top_subjects(summary.top_subjects)}</div></div>
  </div>
</section>
<section id="week-strip" class="week-strip">{cards}</section>
<section id="week-detail" class="panel day-detail is-active" aria-live="polite">{render_week_detail(view.selected)}</section>
{script_tag("week-data", payload)}
<script src="assets/core.js"></script>
<script src="assets/week.js"></script>'''

    return render_layout("Week | " + SITE_TITLE, body, today_href=today_href, head_extra=head_extra)


def render_month_grid(grid: MonthGrid) -> str:
    cells = [f'<div class="head">{head}</div>' for head in DAY_HEADERS]
    cells.extend('<div class="cell"></div>' for _ in range(grid.blanks))
    for cell in grid.cells:
        dots = ""
        if cell.has_detail or cell.has_toshin:
            dots = '<span class="dot"></span>'
            if cell.has_toshin:
                dots += '<span class="dot toshin"></span>'
        content = f'<div class="day-num">{cell.day}</div><div class="dot-wrap">{dots}</div>'
        if cell.has_record:
            content = f'<a href="day/{cell.date}/">{content}</a>'
        cells.append(f'<div class="cell">{content}</div>')
    return "".join(cells)


def render_month_page(grid: MonthGrid, payload: dict, today_href: str | None) -> str:
    options = "".join(
        f'<option value="{m}"{" selected" if m == grid.month else ""}>{m}</option>'
        for m in payload["months"]
    )
    body = f'''
<section class="panel">
  <h2>Month</h2>
  <p class="caption">記録あり: ● / 東進あり: ●（赤）</p>
  <label for="month-select">月を選択:</label>
  <select id="month-select">{options}</select>
  <div id="calendar" class="calendar">{render_month_grid(grid)}</div>
</section>
{script_tag("month-data", payload)}
<script src="assets/core.js"></script>
<script src="assets/month.js"></script>'''

    return render_layout("Month | " + SITE_TITLE, body, today_href=today_href)


def render_day_page(record, prev_date: str | None, next_date: str | None,
                    today_href: str | None) -> str:
    links = []
    if prev_date:
        links.append(f'<a class="prev" href="../{prev_date}/">← {prev_date}</a>')
    if next_date:
        links.append(f'<a class="next" href="../{next_date}/">{next_date} →</a>')
    pager = f'<nav class="day-pager">{"".join(links)}</nav>' if links else ""

    body = f'''
<section class="panel">
  <h2>{record.date} ({weekday_label(record.date)})</h2>
  <section><h3>今日やった東進</h3>{render_toshin_badges(record.toshin_today)}</section>
  <section><h3>今日やったこと</h3>{render_details_list(record.details)}</section>
  {pager}
</section>'''

    return render_layout(
        f"{record.date} | {SITE_TITLE}", body, base_path="../../", today_href=today_href,
    )


def render_not_found(today_href: str | None) -> str:
    body = '<section class="panel"><h2>ページが見つかりません</h2><p><a href="index.html">トップへ戻る</a></p></section>'
    return render_layout("Not Found | " + SITE_TITLE, body, today_href=today_href)
