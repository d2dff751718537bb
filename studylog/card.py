"""
今週のサマリーカード画像 (assets/week-card.png)

SVG を組み立てて cairosvg で PNG に変換する。og:image として使う。
"""

from html import escape
from pathlib import Path

from studylog.config import SITE_TITLE
from studylog.dates import weekday_label

WIDTH = 800
HEIGHT = 420
MARGIN_LEFT = 60
MARGIN_RIGHT = 40
MARGIN_TOP = 110
MARGIN_BOTTOM = 60
PLOT_W = WIDTH - MARGIN_LEFT - MARGIN_RIGHT
PLOT_H = HEIGHT - MARGIN_TOP - MARGIN_BOTTOM

BG_COLOR = "#1a1a2e"
GRID_COLOR = "#2a2a4e"
TEXT_COLOR = "#ccccdd"
TITLE_COLOR = "#eeeeff"
DETAIL_COLOR = "#4ecdc4"
TOSHIN_COLOR = "#ff6b9d"

# Font discovery: try common locations, fallback to sans-serif
_FONT_CANDIDATES = [
    Path.home() / ".local" / "share" / "fonts" / "NotoSansJP.ttf",
    Path("/usr/share/fonts/truetype/noto/NotoSansJP-Regular.ttf"),
    Path("/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc"),
]


def _font_defs() -> str:
    for fp in _FONT_CANDIDATES:
        if fp.exists():
            return (
                '<defs><style>'
                f'@font-face {{ font-family: "NotoSansJP"; src: url("file://{fp}"); }}'
                '</style></defs>'
            )
    return ""


def bar_height(count: int, max_count: int) -> float:
    if max_count <= 0:
        return 0.0
    return PLOT_H * count / max_count


def build_svg(window, summary) -> str:
    """7日分のやったこと件数を棒で、東進の有無を点で描く"""
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {WIDTH} {HEIGHT}" '
        f'width="{WIDTH}" height="{HEIGHT}">',
        _font_defs(),
        f'<rect width="{WIDTH}" height="{HEIGHT}" fill="{BG_COLOR}"/>',
    ]

    parts.append(
        f'<text x="{MARGIN_LEFT}" y="44" fill="{TITLE_COLOR}" '
        f'font-family="NotoSansJP, sans-serif" font-size="24" font-weight="bold">'
        f'{escape(SITE_TITLE)}  {summary.start} - {summary.end}</text>'
    )
    parts.append(
        f'<text x="{MARGIN_LEFT}" y="80" fill="{TEXT_COLOR}" '
        f'font-family="NotoSansJP, sans-serif" font-size="16">'
        f'東進 {summary.toshin_days} / 7 日 ・ やったこと {summary.detail_count} 件</text>'
    )

    base_y = MARGIN_TOP + PLOT_H
    parts.append(
        f'<line x1="{MARGIN_LEFT}" y1="{base_y}" x2="{WIDTH - MARGIN_RIGHT}" y2="{base_y}" '
        f'stroke="{GRID_COLOR}" stroke-width="1"/>'
    )

    max_count = max((len(record.details) for record in window), default=0)
    slot = PLOT_W / 7
    bar_w = slot * 0.5
    for idx, record in enumerate(window):
        cx = MARGIN_LEFT + slot * idx + slot / 2
        h = bar_height(len(record.details), max_count)
        parts.append(
            f'<rect class="bar" x="{cx - bar_w / 2:.1f}" y="{base_y - h:.1f}" '
            f'width="{bar_w:.1f}" height="{h:.1f}" rx="4" fill="{DETAIL_COLOR}"/>'
        )
        if record.has_toshin:
            parts.append(
                f'<circle cx="{cx:.1f}" cy="{base_y - h - 14:.1f}" r="6" fill="{TOSHIN_COLOR}"/>'
            )
        parts.append(
            f'<text x="{cx:.1f}" y="{base_y + 24}" fill="{TEXT_COLOR}" '
            f'font-family="NotoSansJP, sans-serif" font-size="14" text-anchor="middle">'
            f'{record.date[5:]} {weekday_label(record.date)}</text>'
        )

    parts.append("</svg>")
    return "\n".join(p for p in parts if p)


def write_week_card(window, summary, output_path: Path):
    import cairosvg

    svg_str = build_svg(window, summary)
    cairosvg.svg2png(
        bytestring=svg_str.encode("utf-8"),
        write_to=str(output_path),
        output_width=WIDTH,
        output_height=HEIGHT,
    )
