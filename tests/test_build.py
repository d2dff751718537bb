"""Tests for the site build."""

import json
import re

from studylog import card
from studylog.build import build_site
from studylog.controllers import WeekController
from studylog.records import LogRecord

from conftest import write_log


def embedded(html: str, element_id: str):
    match = re.search(
        rf'<script id="{element_id}" type="application/json">(.*?)</script>', html, re.S
    )
    return json.loads(match.group(1))


def make_logs(logs_dir):
    write_log(logs_dir, "202401/2024-01-08.json", {
        "date": "2024-01-08", "toshinToday": ["英語"], "details": ["</script> test"],
    })
    write_log(logs_dir, "2024-01-02.json", {"date": "2024-01-02", "toshinKoma": 2, "plan": "復習"})
    write_log(logs_dir, "202401/2024-01-09.json", "{broken")


def test_build_writes_layout(logs_dir, tmp_path):
    make_logs(logs_dir)
    site = tmp_path / "_site"
    result = build_site(logs_dir, site, "2024-01-10")

    assert result.records == 2
    assert result.skipped == 1
    assert result.pages == 5
    for rel in ("index.html", "month.html", "404.html",
                "day/2024-01-08/index.html", "day/2024-01-02/index.html",
                "assets/style.css", "assets/core.js", "assets/week.js", "assets/month.js"):
        assert (site / rel).is_file(), rel
    assert not (site / "assets" / "week-card.png").exists()


def test_week_page_payload_and_initial_render(logs_dir, tmp_path):
    make_logs(logs_dir)
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-01-10")
    html = (site / "index.html").read_text(encoding="utf-8")

    payload = embedded(html, "week-data")
    assert payload["today"] == "2024-01-10"
    assert [log["date"] for log in payload["logs"]] == ["2024-01-02", "2024-01-08"]
    assert payload["logs"][0]["toshinToday"] == ["東進"]

    assert html.count("<script") == 3
    assert "2024-01-08 - 2024-01-14 (JST)" in html
    assert 'id="week-toshin-days">1 / 7 日' in html
    assert 'id="week-next" type="button" disabled' in html
    assert "&lt;/script&gt; test" not in html  # today (01-10) is selected, not 01-08
    assert "<span class=\"muted\">Today</span>" in html


def test_month_page_payload(logs_dir, tmp_path):
    make_logs(logs_dir)
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-02-03")
    html = (site / "month.html").read_text(encoding="utf-8")
    payload = embedded(html, "month-data")
    assert payload["months"] == ["2024-01", "2024-02"]
    assert '<option value="2024-02" selected>' in html
    assert html.count('<div class="cell">') == 3 + 29


def test_day_page_content(logs_dir, tmp_path):
    make_logs(logs_dir)
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-01-08")
    html = (site / "day" / "2024-01-08" / "index.html").read_text(encoding="utf-8")
    assert "&lt;/script&gt; test" in html
    assert 'href="../2024-01-02/"' in html
    assert 'href="../../day/2024-01-08/">Today</a>' in html
    assert '<link rel="stylesheet" href="../../assets/style.css">' in html


def test_rebuild_clears_old_output(logs_dir, tmp_path):
    make_logs(logs_dir)
    site = tmp_path / "_site"
    (site / "day" / "1999-01-01").mkdir(parents=True)
    (site / "stale.html").write_text("x")
    build_site(logs_dir, site, "2024-01-10")
    build_site(logs_dir, site, "2024-01-10")
    assert not (site / "stale.html").exists()
    assert not (site / "day" / "1999-01-01").exists()


def test_empty_logs_still_builds(logs_dir, tmp_path):
    result = build_site(logs_dir, tmp_path / "_site", "2024-01-10")
    assert result.records == 0
    assert result.pages == 3


def test_card_option_writes_png(logs_dir, tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "studylog.build.write_week_card",
        lambda window, summary, path: calls.append((summary.start, path.name)),
    )
    make_logs(logs_dir)
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-01-10", card=True)
    assert calls == [("2024-01-08", "week-card.png")]
    html = (site / "index.html").read_text(encoding="utf-8")
    assert '<meta property="og:image" content="assets/week-card.png">' in html


def test_card_svg():
    records = [LogRecord("2024-01-08", ["英語"], ["a", "b"])]
    view = WeekController("2024-01-10", records).view()
    svg = card.build_svg(view.window, view.summary)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert svg.count('class="bar"') == 7
    assert "東進 1 / 7 日" in svg
    assert svg.count("<circle") == 1


def test_week_page_shows_top_subjects(logs_dir, tmp_path):
    write_log(logs_dir, "202401/2024-01-08.json", {"date": "2024-01-08", "toshinToday": ["英語", "数学"]})
    write_log(logs_dir, "202401/2024-01-09.json", {"date": "2024-01-09", "toshinToday": ["英語"]})
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-01-10")
    html = (site / "index.html").read_text(encoding="utf-8")
    top = re.search(r'<div id="week-top-subjects" class="subject-grid">(.*?)</div>', html).group(1)
    assert top == (
        '<span class="subject-chip">英語 ×2</span>'
        '<span class="subject-chip">数学 ×1</span>'
    )


def test_single_quote_escaped_like_browser_script(logs_dir, tmp_path):
    write_log(logs_dir, "202401/2024-01-10.json", {"date": "2024-01-10", "details": ["Tom's <b>"]})
    site = tmp_path / "_site"
    build_site(logs_dir, site, "2024-01-10")
    html = (site / "day" / "2024-01-10" / "index.html").read_text(encoding="utf-8")
    assert "<li>Tom&#39;s &lt;b&gt;</li>" in html
    assert "&#x27;" not in html
    assert "replaceAll(\"'\", '&#39;')" in (site / "assets" / "core.js").read_text(encoding="utf-8")
