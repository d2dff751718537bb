"""
ページに埋め込む JSON ペイロード

ブラウザ側の week.js / month.js はこれをそのまま読む。週ページには全レコードを
入れる（クライアント側で任意の週へページングするため）。
"""

import json

from studylog.aggregate import month_flags, month_set


def week_payload(records, today: str) -> dict:
    return {
        "today": today,
        "logs": [record.to_json() for record in records],
    }


def month_payload(records, today: str) -> dict:
    return {
        "today": today,
        "months": month_set(records, today),
        "logs": month_flags(records),
    }


def json_for_script(value) -> str:
    """<script> 内に埋め込んでも途中で閉じられないよう '<' をエスケープする"""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return text.replace("<", "\\u003c")


def script_tag(element_id: str, value) -> str:
    return f'<script id="{element_id}" type="application/json">{json_for_script(value)}</script>'
